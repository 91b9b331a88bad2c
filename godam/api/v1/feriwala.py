from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from godam.core.dependencies import get_db
from godam.core.exceptions import GodamError
from godam.logger_config import logger
from godam.schemas.feriwala import (
    FeriwalaCreate,
    FeriwalaCreateResponse,
    FeriwalaListResponse,
    FeriwalaRecordResponse,
)
from godam.services.feriwala_service import create_feriwala_purchase, get_feriwala_records

router = APIRouter()


@router.post("/add", response_model=FeriwalaCreateResponse, status_code=status.HTTP_201_CREATED)
def add_feriwala_purchase(
    data: FeriwalaCreate,
    db: Session = Depends(get_db),
):
    """
    Record a purchase from a feriwala.

    Inserts the record and its scraps, debits the total from account_id and
    appends a "feriwala purchase" ledger row, all in one transaction.
    """
    logger.info(f"POST /feriwala/add HIT - {data.feriwala_name}")

    record = create_feriwala_purchase(
        db,
        company_id=data.company_id,
        godown_id=data.godown_id,
        feriwala_name=data.feriwala_name,
        scraps=[s.model_dump() for s in data.scraps],
        account_id=data.account_id,
    )

    return FeriwalaCreateResponse(
        feriwala_id=record.id,
        message="Feriwala purchase added successfully",
    )


@router.get("/list", response_model=FeriwalaListResponse)
def list_feriwala_purchases(
    company_id: Optional[str] = Query(None),
    godown_id: Optional[str] = Query(None),
    date: Optional[date] = Query(None, description="Records dated on or before this day"),
    start_date: Optional[date] = Query(None),
    end_date: Optional[date] = Query(None),
    db: Session = Depends(get_db),
):
    if not company_id or not godown_id:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="company_id and godown_id are required",
        )

    try:
        records = get_feriwala_records(
            db,
            company_id=company_id,
            godown_id=godown_id,
            as_of=date,
            start_date=start_date,
            end_date=end_date,
        )
        return FeriwalaListResponse(
            records=[FeriwalaRecordResponse.model_validate(r) for r in records]
        )
    except GodamError:
        raise
    except Exception:
        logger.exception("Error fetching feriwala records")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to fetch feriwala records",
        )
