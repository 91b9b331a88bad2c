"""
Maal In Routes
Inbound stock receipts: header creation, line items, approval workflow,
payments, listings and deletion.
"""

from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from godam.core.dependencies import get_db
from godam.core.exceptions import GodamError
from godam.logger_config import logger
from godam.models.maal_in import MaalInStatus
from godam.schemas.maal_in import (
    MaalInApprove,
    MaalInCreate,
    MaalInDetailResponse,
    MaalInEnvelope,
    MaalInItemResponse,
    MaalInItemsCreate,
    MaalInListResponse,
    MaalInPaymentCreate,
    MaalInPaymentEnvelope,
    MaalInPaymentResponse,
    MaalInRangeResponse,
    MaalInRangeSummary,
    MaalInResponse,
    MaalInSummary,
)
from godam.services.maal_in_service import (
    add_maal_in_items,
    approve_or_reject_maal_in,
    create_maal_in,
    delete_maal_in,
    get_maal_in_list,
    get_maal_in_or_404,
    get_maal_in_range,
    record_maal_in_payment,
)

router = APIRouter()


def _require_owner(company_id: Optional[str], godown_id: Optional[str]):
    if not company_id or not godown_id:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="company_id and godown_id are required",
        )


# ============================================================================
# Create
# ============================================================================

@router.post("", response_model=MaalInEnvelope, status_code=status.HTTP_201_CREATED)
@router.post("/add", response_model=MaalInEnvelope, status_code=status.HTTP_201_CREATED)
def create_maal_in_route(
    data: MaalInCreate,
    db: Session = Depends(get_db),
):
    """Create a maal in header in submitted status; items are added separately."""
    logger.info(f"POST /maalin HIT - Supplier: {data.supplier_name}")

    maal_in = create_maal_in(
        db,
        company_id=data.company_id,
        godown_id=data.godown_id,
        supplier_name=data.supplier_name,
        maal_in_date=data.date,
        seller_type=data.seller_type,
        scrap_type=data.scrap_type,
        notes=data.notes,
    )
    return MaalInEnvelope(
        message="Maal In entry added",
        maal_in=MaalInResponse.model_validate(maal_in),
    )


# ============================================================================
# Listings (declared before /{maal_in_id} so the literal paths win)
# ============================================================================

@router.get("/list", response_model=MaalInListResponse)
def list_maal_in(
    company_id: Optional[str] = Query(None),
    godown_id: Optional[str] = Query(None),
    date: Optional[date] = Query(None, description="Exact receipt date"),
    status_filter: Optional[MaalInStatus] = Query(None, alias="status"),
    db: Session = Depends(get_db),
):
    _require_owner(company_id, godown_id)

    try:
        rows = get_maal_in_list(
            db,
            company_id=company_id,
            godown_id=godown_id,
            on_date=date,
            status=status_filter,
        )
        data = [
            MaalInSummary(
                **MaalInResponse.model_validate(m).model_dump(),
                item_count=len(m.items),
                payment_count=len(m.payments),
            )
            for m in rows
        ]
        return MaalInListResponse(data=data)
    except GodamError:
        raise
    except Exception:
        logger.exception("Error fetching maal in list")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to fetch maal in entries",
        )


@router.get("/range", response_model=MaalInRangeResponse)
def list_maal_in_range(
    company_id: Optional[str] = Query(None),
    godown_id: Optional[str] = Query(None),
    start_date: Optional[date] = Query(None),
    end_date: Optional[date] = Query(None),
    db: Session = Depends(get_db),
):
    """Entries within an inclusive date range; an open side is unbounded."""
    _require_owner(company_id, godown_id)

    try:
        rows = get_maal_in_range(
            db,
            company_id=company_id,
            godown_id=godown_id,
            start_date=start_date,
            end_date=end_date,
        )
        data = [
            MaalInRangeSummary(
                **MaalInResponse.model_validate(m).model_dump(),
                item_count=item_count,
                total_weight=total_weight,
                total_paid=total_paid,
            )
            for m, item_count, total_weight, total_paid in rows
        ]
        return MaalInRangeResponse(data=data)
    except GodamError:
        raise
    except Exception:
        logger.exception("Error fetching maal in range")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to fetch maal in entries",
        )


# ============================================================================
# Single entry
# ============================================================================

@router.post("/{maal_in_id}/items", response_model=MaalInEnvelope, status_code=status.HTTP_201_CREATED)
def add_items_route(
    maal_in_id: str,
    data: MaalInItemsCreate,
    db: Session = Depends(get_db),
):
    """Append items; total_amount is recomputed from every item of the entry."""
    maal_in = add_maal_in_items(db, maal_in_id, [i.model_dump() for i in data.items])
    return MaalInEnvelope(
        message="Items added",
        maal_in=MaalInResponse.model_validate(maal_in),
    )


@router.get("/{maal_in_id}", response_model=MaalInDetailResponse)
def get_maal_in_route(
    maal_in_id: str,
    db: Session = Depends(get_db),
):
    maal_in = get_maal_in_or_404(db, maal_in_id)
    return MaalInDetailResponse(
        maal_in=MaalInResponse.model_validate(maal_in),
        items=[MaalInItemResponse.model_validate(i) for i in maal_in.items],
        payments=[MaalInPaymentResponse.model_validate(p) for p in maal_in.payments],
    )


@router.post("/{maal_in_id}/approve", response_model=MaalInEnvelope)
def approve_maal_in_route(
    maal_in_id: str,
    data: MaalInApprove,
    db: Session = Depends(get_db),
):
    """
    Approve or reject a submitted entry.

    Approval stamps approved_at and adds the received weight to godown
    stock. Rejection leaves approved_at unset. Both are final.
    """
    maal_in = approve_or_reject_maal_in(
        db,
        maal_in_id,
        action=data.action.value,
        approved_by=data.approved_by,
    )
    return MaalInEnvelope(
        message=f"Maal In {maal_in.status.value}",
        maal_in=MaalInResponse.model_validate(maal_in),
    )


@router.post("/{maal_in_id}/pay", response_model=MaalInPaymentEnvelope, status_code=status.HTTP_201_CREATED)
def pay_maal_in_route(
    maal_in_id: str,
    data: MaalInPaymentCreate,
    db: Session = Depends(get_db),
):
    payment, total_paid = record_maal_in_payment(
        db,
        maal_in_id,
        amount=data.amount,
        payment_date=data.date,
        mode=data.mode,
        account_id=data.account_id,
    )
    return MaalInPaymentEnvelope(
        payment=MaalInPaymentResponse.model_validate(payment),
        payment_status=payment.maal_in.payment_status,
        total_paid=total_paid,
    )


@router.delete("/{maal_in_id}", response_model=MaalInEnvelope)
def delete_maal_in_route(
    maal_in_id: str,
    db: Session = Depends(get_db),
):
    deleted = delete_maal_in(db, maal_in_id)
    return MaalInEnvelope(
        message="Maal In entry deleted",
        maal_in=MaalInResponse.model_validate(deleted),
    )
