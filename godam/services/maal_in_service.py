# godam/services/maal_in_service.py

from datetime import date, datetime, timezone
from decimal import Decimal
from typing import Dict, List, Optional, Tuple

from sqlalchemy import func, inspect
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, selectinload

from godam.core.exceptions import Conflict, DatastoreError, GodamError, NotFound, ValidationFailed
from godam.logger_config import logger
from godam.models.account import TransactionType
from godam.models.maal_in import MaalIn, MaalInItem, MaalInPayment, MaalInStatus
from godam.services.ledger_service import get_account_or_404, post_account_transaction
from godam.services.stock_service import run_approval_hooks
from godam.utils.filteration import apply_date_filters, date_range
from godam.utils.payment_status import classify_payment_status

MAAL_IN_PAYMENT_CATEGORY = "maal in payment"


# ==================== HELPER FUNCTIONS ====================

def _as_dict(maal_in: MaalIn) -> Dict:
    return {attr.key: getattr(maal_in, attr.key) for attr in inspect(maal_in).mapper.column_attrs}


def get_items_total(db: Session, maal_in_id: str) -> Decimal:
    return db.query(func.coalesce(func.sum(MaalInItem.amount), 0)).filter(
        MaalInItem.maal_in_id == maal_in_id
    ).scalar() or Decimal("0.00")


def get_total_paid(db: Session, maal_in_id: str) -> Decimal:
    return db.query(func.coalesce(func.sum(MaalInPayment.amount), 0)).filter(
        MaalInPayment.maal_in_id == maal_in_id
    ).scalar() or Decimal("0.00")


def refresh_maal_in_totals(db: Session, maal_in: MaalIn) -> MaalIn:
    """
    Recompute total_amount and payment_status from the stored child rows.

    Always derived from the rows, never incremented, so calling it again
    without new rows leaves both values unchanged. Does not commit.
    """
    db.flush()
    old_total = maal_in.total_amount
    old_status = maal_in.payment_status

    maal_in.total_amount = get_items_total(db, maal_in.id)
    maal_in.payment_status = classify_payment_status(
        maal_in.total_amount, get_total_paid(db, maal_in.id)
    )

    logger.debug(
        f"Maal in totals refreshed: {maal_in.id} - "
        f"Total: {old_total} → {maal_in.total_amount}, "
        f"Payment: {old_status} → {maal_in.payment_status}"
    )
    return maal_in


def get_maal_in_or_404(db: Session, maal_in_id: str) -> MaalIn:
    maal_in = get_maal_in_by_id(db, maal_in_id)
    if not maal_in:
        raise NotFound("Maal in not found")
    return maal_in


# ==================== QUERIES ====================

def get_maal_in_by_id(db: Session, maal_in_id: str) -> Optional[MaalIn]:
    """Get maal in by ID with items and payments."""
    maal_in = (
        db.query(MaalIn)
        .options(selectinload(MaalIn.items), selectinload(MaalIn.payments))
        .filter(MaalIn.id == maal_in_id)
        .first()
    )
    if not maal_in:
        logger.warning(f"Maal in not found: {maal_in_id}")
    return maal_in


def get_maal_in_list(
    db: Session,
    company_id: str,
    godown_id: str,
    on_date: Optional[date] = None,
    status: Optional[MaalInStatus] = None,
) -> List[MaalIn]:
    query = (
        db.query(MaalIn)
        .options(selectinload(MaalIn.items), selectinload(MaalIn.payments))
        .filter(MaalIn.company_id == company_id, MaalIn.godown_id == godown_id)
    )
    query = apply_date_filters(query, MaalIn.date, on_date=on_date)

    if status:
        query = query.filter(MaalIn.status == status)
        logger.debug(f"Filtering by status: {status}")

    rows = query.order_by(MaalIn.date.desc(), MaalIn.created_at.desc()).all()
    logger.info(f"Retrieved {len(rows)} maal in entries for godown {godown_id}")
    return rows


def get_maal_in_range(
    db: Session,
    company_id: str,
    godown_id: str,
    start_date: Optional[date] = None,
    end_date: Optional[date] = None,
) -> List[Tuple[MaalIn, int, Decimal, Decimal]]:
    """
    Headers dated within [start_date, end_date] with item count, total
    weight and total paid, aggregated in one query.
    """
    lower, upper = date_range(start_date, end_date)

    items_sq = (
        db.query(
            MaalInItem.maal_in_id.label("maal_in_id"),
            func.count(MaalInItem.id).label("item_count"),
            func.sum(MaalInItem.weight).label("total_weight"),
        )
        .group_by(MaalInItem.maal_in_id)
        .subquery()
    )
    payments_sq = (
        db.query(
            MaalInPayment.maal_in_id.label("maal_in_id"),
            func.sum(MaalInPayment.amount).label("total_paid"),
        )
        .group_by(MaalInPayment.maal_in_id)
        .subquery()
    )

    rows = (
        db.query(
            MaalIn,
            func.coalesce(items_sq.c.item_count, 0),
            func.coalesce(items_sq.c.total_weight, 0),
            func.coalesce(payments_sq.c.total_paid, 0),
        )
        .outerjoin(items_sq, items_sq.c.maal_in_id == MaalIn.id)
        .outerjoin(payments_sq, payments_sq.c.maal_in_id == MaalIn.id)
        .filter(
            MaalIn.company_id == company_id,
            MaalIn.godown_id == godown_id,
            MaalIn.date.between(lower, upper),
        )
        .order_by(MaalIn.date.desc(), MaalIn.created_at.desc())
        .all()
    )

    logger.info(f"Retrieved {len(rows)} maal in entries between {lower} and {upper}")
    return [
        (maal_in, int(count), Decimal(str(weight)), Decimal(str(paid)))
        for maal_in, count, weight, paid in rows
    ]


# ==================== CREATE ====================

def create_maal_in(
    db: Session,
    company_id: str,
    godown_id: str,
    supplier_name: str,
    maal_in_date: Optional[date] = None,
    seller_type: Optional[str] = None,
    scrap_type: Optional[str] = None,
    notes: Optional[str] = None,
) -> MaalIn:
    """Create a submitted maal in header. No items and no ledger effect yet."""
    maal_in = MaalIn(
        company_id=company_id,
        godown_id=godown_id,
        date=maal_in_date or date.today(),
        supplier_name=supplier_name,
        seller_type=seller_type,
        scrap_type=scrap_type,
        notes=notes,
        status=MaalInStatus.submitted,
        total_amount=Decimal("0.00"),
        payment_status=classify_payment_status(0, 0),
    )
    db.add(maal_in)

    try:
        db.commit()
        db.refresh(maal_in)
        logger.info(f"Maal in created: {maal_in.id} - Supplier: {supplier_name}")
        return maal_in
    except Exception as e:
        db.rollback()
        logger.error(f"Error creating maal in: {str(e)}", exc_info=True)
        raise DatastoreError()


def add_maal_in_items(db: Session, maal_in_id: str, items: List[Dict]) -> MaalIn:
    """
    Append line items and recompute the header total from all its items.

    Process:
        1. Validate header exists and is still submitted
        2. Insert items
        3. Recompute total_amount and payment_status from stored rows
    """
    if not items:
        raise ValidationFailed("Missing required fields or empty item list")

    logger.info(f"Adding {len(items)} items to maal in {maal_in_id}")

    try:
        maal_in = get_maal_in_or_404(db, maal_in_id)

        if maal_in.status != MaalInStatus.submitted:
            raise Conflict(f"Items cannot be added to a {maal_in.status.value} maal in")

        for idx, item in enumerate(items):
            maal_in.items.append(MaalInItem(**item))
            logger.debug(f"Item {idx + 1}: {item.get('material')} - Amount: {item.get('amount')}")

        refresh_maal_in_totals(db, maal_in)

        db.commit()
        db.refresh(maal_in)

        logger.info(f"✅ Items added to maal in {maal_in.id} - Total: {maal_in.total_amount}")
        return maal_in

    except GodamError:
        db.rollback()
        raise

    except Exception as e:
        db.rollback()
        logger.error(f"Unexpected error adding maal in items: {str(e)}", exc_info=True)
        raise DatastoreError()


# ==================== APPROVAL ====================

def approve_or_reject_maal_in(
    db: Session,
    maal_in_id: str,
    action: str,
    approved_by: Optional[str] = None,
) -> MaalIn:
    """
    Move a submitted maal in to approved or rejected.

    Only approval stamps approved_at and runs the approval hooks (stock
    adjustment). Both target states are terminal.
    """
    if action not in ("approve", "reject"):
        raise ValidationFailed("action must be 'approve' or 'reject'")

    try:
        maal_in = get_maal_in_or_404(db, maal_in_id)

        if maal_in.status != MaalInStatus.submitted:
            raise Conflict(f"Maal in is already {maal_in.status.value}")

        maal_in.approved_by = approved_by

        if action == "approve":
            maal_in.status = MaalInStatus.approved
            maal_in.approved_at = datetime.now(timezone.utc)
            run_approval_hooks(db, maal_in)
        else:
            maal_in.status = MaalInStatus.rejected

        db.commit()
        db.refresh(maal_in)

        logger.info(f"Maal in {maal_in.id} {maal_in.status.value} by {approved_by}")
        return maal_in

    except GodamError:
        db.rollback()
        raise

    except Exception as e:
        db.rollback()
        logger.error(f"Unexpected error during maal in {action}: {str(e)}", exc_info=True)
        raise DatastoreError()


# ==================== PAYMENT ====================

def record_maal_in_payment(
    db: Session,
    maal_in_id: str,
    amount: Decimal,
    payment_date: date,
    mode: str = "cash",
    account_id: Optional[str] = None,
) -> Tuple[MaalInPayment, Decimal]:
    """
    Record a payment against a maal in and reclassify its payment status.

    When account_id is given the payment is also debited from that account
    in the same transaction.

    Returns:
        (payment, cumulative amount paid)
    """
    logger.info(f"Starting maal in payment - Maal in: {maal_in_id}, Amount: {amount}, Mode: {mode}")

    try:
        maal_in = get_maal_in_or_404(db, maal_in_id)

        if account_id:
            get_account_or_404(db, account_id)

        payment = MaalInPayment(
            amount=amount,
            mode=mode,
            date=payment_date,
            account_id=account_id,
        )
        maal_in.payments.append(payment)
        db.flush()

        if account_id:
            post_account_transaction(
                db,
                company_id=maal_in.company_id,
                godown_id=maal_in.godown_id,
                account_id=account_id,
                direction=TransactionType.debit,
                amount=amount,
                category=MAAL_IN_PAYMENT_CATEGORY,
                reference=f"Payment to {maal_in.supplier_name}",
                meta={"ref_id": maal_in.id, "payment_id": payment.id, "mode": mode},
            )

        total_paid = get_total_paid(db, maal_in.id)
        old_status = maal_in.payment_status
        maal_in.payment_status = classify_payment_status(maal_in.total_amount, total_paid)

        db.commit()
        db.refresh(payment)

        logger.info(
            f"✅ Payment recorded: {payment.id} - Maal in: {maal_in.id}, "
            f"Paid: {total_paid}/{maal_in.total_amount}, "
            f"Status: {old_status} → {maal_in.payment_status}"
        )
        return payment, Decimal(str(total_paid))

    except GodamError:
        db.rollback()
        raise

    except IntegrityError as ie:
        db.rollback()
        logger.error(f"Database integrity error in maal in payment: {str(ie)}")
        raise DatastoreError()

    except Exception as e:
        db.rollback()
        logger.error(f"Unexpected error in maal in payment: {str(e)}", exc_info=True)
        raise DatastoreError()


# ==================== DELETE ====================

def delete_maal_in(db: Session, maal_in_id: str) -> Dict:
    """Delete a maal in together with its items and payments; returns the deleted header."""
    maal_in = get_maal_in_or_404(db, maal_in_id)
    snapshot = _as_dict(maal_in)

    db.delete(maal_in)

    try:
        db.commit()
        logger.info(f"Maal in deleted: {maal_in_id}")
        return snapshot
    except Exception as e:
        db.rollback()
        logger.error(f"Error deleting maal in {maal_in_id}: {str(e)}", exc_info=True)
        raise DatastoreError()
