from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from godam.core.dependencies import get_db
from godam.logger_config import logger
from godam.schemas.common import MessageResponse
from godam.schemas.labour import (
    AttendanceMark,
    LabourCreate,
    LabourCreateResponse,
    LabourListResponse,
    LabourPaymentCreate,
    LabourResponse,
    LabourWithTotals,
)
from godam.services.labour_service import (
    create_labour,
    get_all_labour,
    mark_attendance,
    record_labour_payment,
)

router = APIRouter()


@router.post("/add", response_model=LabourCreateResponse, status_code=status.HTTP_201_CREATED)
def add_labour(
    data: LabourCreate,
    db: Session = Depends(get_db),
):
    """Add a labourer or contractor (owner)."""
    logger.info(f"POST /labour/add HIT - {data.name}")
    labour = create_labour(db, **data.model_dump())
    return LabourCreateResponse(
        message="Labour added successfully",
        labour=LabourResponse.model_validate(labour),
    )


@router.get("/all", response_model=LabourListResponse)
def list_labour(
    company_id: Optional[str] = Query(None),
    godown_id: Optional[str] = Query(None),
    db: Session = Depends(get_db),
):
    if not company_id or not godown_id:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="company_id and godown_id are required",
        )

    try:
        rows = get_all_labour(db, company_id=company_id, godown_id=godown_id)
        return LabourListResponse(
            labour=[
                LabourWithTotals(
                    **LabourResponse.model_validate(labour).model_dump(),
                    total_withdrawn=withdrawn,
                    total_salary_earned=earned,
                )
                for labour, withdrawn, earned in rows
            ]
        )
    except Exception:
        logger.exception("Error fetching labour")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to fetch labour",
        )


@router.post("/attendance/mark", response_model=MessageResponse)
def mark_attendance_route(
    data: AttendanceMark,
    db: Session = Depends(get_db),
):
    """Manager marks attendance; a present mark accrues the day's wage."""
    mark_attendance(db, labour_id=data.labour_id, attendance_date=data.date, status=data.status)
    return MessageResponse(message=f"Attendance marked: {data.status}")


@router.post("/payment", response_model=MessageResponse)
def labour_payment_route(
    data: LabourPaymentCreate,
    db: Session = Depends(get_db),
):
    """Salary or advance payment."""
    record_labour_payment(
        db,
        labour_id=data.labour_id,
        amount=data.amount,
        payment_date=data.date,
        mode=data.mode,
        type=data.type,
    )
    return MessageResponse(message="Payment recorded successfully")
