from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from godam.core.dependencies import get_db
from godam.logger_config import logger
from godam.schemas.stock import GodownStockListResponse, GodownStockResponse
from godam.services.stock_service import get_godown_stock

router = APIRouter()


@router.get("/list", response_model=GodownStockListResponse)
def list_godown_stock(
    company_id: str = Query(..., min_length=1),
    godown_id: str = Query(..., min_length=1),
    db: Session = Depends(get_db),
):
    """Weight on hand per material, built up by approved maal in entries."""
    try:
        rows = get_godown_stock(db, company_id=company_id, godown_id=godown_id)
        return GodownStockListResponse(
            stock=[GodownStockResponse.model_validate(r) for r in rows]
        )
    except Exception:
        logger.exception("Error fetching godown stock")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to fetch stock",
        )
