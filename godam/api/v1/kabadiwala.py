from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from godam.core.dependencies import get_db
from godam.logger_config import logger
from godam.schemas.kabadiwala import (
    KabadiwalaCreate,
    KabadiwalaCreateResponse,
    KabadiwalaListResponse,
    KabadiwalaRecordResponse,
)
from godam.services.kabadiwala_service import create_kabadiwala_purchase, get_kabadiwala_records

router = APIRouter()


@router.post("/add", response_model=KabadiwalaCreateResponse, status_code=status.HTTP_201_CREATED)
def add_kabadiwala_purchase(
    data: KabadiwalaCreate,
    db: Session = Depends(get_db),
):
    """Record a purchase from a kabadiwala and debit it from account_id."""
    logger.info(f"POST /kabadiwala/add HIT - {data.kabadiwala_name}")

    record = create_kabadiwala_purchase(
        db,
        company_id=data.company_id,
        godown_id=data.godown_id,
        kabadiwala_name=data.kabadiwala_name,
        scraps=[s.model_dump() for s in data.scraps],
        account_id=data.account_id,
    )
    return KabadiwalaCreateResponse(kabadiwala_id=record.id)


@router.get("/list/{company_id}", response_model=KabadiwalaListResponse)
def list_kabadiwala_purchases(
    company_id: str,
    godown_id: Optional[str] = Query(None),
    start_date: Optional[date] = Query(None),
    end_date: Optional[date] = Query(None),
    db: Session = Depends(get_db),
):
    try:
        records = get_kabadiwala_records(
            db,
            company_id=company_id,
            godown_id=godown_id,
            start_date=start_date,
            end_date=end_date,
        )
        return KabadiwalaListResponse(
            data=[KabadiwalaRecordResponse.model_validate(r) for r in records]
        )
    except Exception:
        logger.exception("Error fetching kabadiwala records")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to fetch kabadiwala records",
        )
