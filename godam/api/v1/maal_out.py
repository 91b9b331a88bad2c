from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from godam.core.dependencies import get_db
from godam.logger_config import logger
from godam.schemas.maal_out import (
    MaalOutCreate,
    MaalOutCreateResponse,
    MaalOutListResponse,
    MaalOutResponse,
)
from godam.services.maal_out_service import create_maal_out, get_maal_out_records

router = APIRouter()


@router.post("/add", response_model=MaalOutCreateResponse)
def add_maal_out(
    data: MaalOutCreate,
    db: Session = Depends(get_db),
):
    """Record a sale and credit the sale amount to account_id."""
    logger.info(f"POST /maalOut/add HIT - Buyer: {data.buyer}")

    sale = create_maal_out(
        db,
        company_id=data.company_id,
        godown_id=data.godown_id,
        buyer=data.buyer,
        items=[i.model_dump() for i in data.items],
        account_id=data.account_id,
    )
    return MaalOutCreateResponse(maal_out_id=sale.id)


@router.get("/list/{company_id}", response_model=MaalOutListResponse)
def list_maal_out(
    company_id: str,
    godown_id: Optional[str] = Query(None),
    start_date: Optional[date] = Query(None),
    end_date: Optional[date] = Query(None),
    db: Session = Depends(get_db),
):
    try:
        sales = get_maal_out_records(
            db,
            company_id=company_id,
            godown_id=godown_id,
            start_date=start_date,
            end_date=end_date,
        )
        return MaalOutListResponse(data=[MaalOutResponse.model_validate(s) for s in sales])
    except Exception:
        logger.exception("Error fetching sales")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to fetch sales",
        )
