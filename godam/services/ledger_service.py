# godam/services/ledger_service.py

"""
Transactional ledger recorder.

Every scrap trade (feriwala / kabadiwala purchase, maal out sale) is the same
unit of work:

    1. Resolve the account the money moves through
    2. Insert the header with the summed total
    3. Insert every line item
    4. Append one ledger row to account_transactions
    5. Move the account balance by the same amount

All five steps share one session transaction. Any failure rolls back the
whole unit and surfaces as a generic DatastoreError.
"""

from decimal import Decimal
from typing import Dict, List, Optional

from sqlalchemy import update
from sqlalchemy.orm import Session

from godam.core.exceptions import DatastoreError, GodamError, NotFound, ValidationFailed
from godam.logger_config import logger
from godam.models.account import Account, AccountTransaction, TransactionType


# ==================== HELPER FUNCTIONS ====================

def sum_line_amounts(items: List[Dict]) -> Decimal:
    """Total of a trade is the plain sum of its line amounts."""
    total = Decimal("0.00")
    for item in items:
        total += Decimal(str(item.get("amount") or 0))
    return total


def get_account_or_404(db: Session, account_id: str) -> Account:
    account = db.query(Account).filter(Account.id == account_id).first()
    if not account:
        logger.warning(f"Account not found: {account_id}")
        raise NotFound("Account not found")
    return account


def post_account_transaction(
    db: Session,
    company_id: str,
    godown_id: Optional[str],
    account_id: str,
    direction: TransactionType,
    amount: Decimal,
    category: str,
    reference: Optional[str] = None,
    meta: Optional[Dict] = None,
) -> AccountTransaction:
    """
    Append a ledger row and apply the matching balance change.

    Does not commit. The caller owns the transaction, so the ledger row and
    the balance change are always committed or rolled back together.
    """
    entry = AccountTransaction(
        company_id=company_id,
        godown_id=godown_id,
        account_id=account_id,
        type=direction,
        amount=amount,
        category=category,
        reference=reference,
        meta=meta or {},
    )
    db.add(entry)

    delta = -amount if direction == TransactionType.debit else amount
    db.execute(
        update(Account)
        .where(Account.id == account_id)
        .values(balance=Account.balance + delta)
    )

    logger.info(
        f"Ledger entry posted - Account: {account_id}, "
        f"{direction.value.title()}: {amount}, Category: {category}"
    )
    return entry


# ==================== RECORD TRADE ====================

def record_trade(
    db: Session,
    header_model,
    item_model,
    children_attr: str,
    header_fields: Dict,
    items: List[Dict],
    account_id: str,
    direction: TransactionType,
    category: str,
    reference: str,
):
    """
    Persist a trade header, its line items and the ledger effect atomically.

    Args:
        db: Database session
        header_model: Header ORM class (FeriwalaRecord, KabadiwalaRecord, MaalOut)
        item_model: Line item ORM class
        children_attr: Relationship on the header holding the line items
        header_fields: Column values for the header, without total_amount
        items: [{"material": "iron", "weight": 10, "rate": 20, "amount": 200}, ...]
        account_id: Account debited (purchase) or credited (sale)
        direction: TransactionType.debit for purchases, credit for sales
        category: Ledger category label, e.g. "feriwala purchase"
        reference: Free text stored on the ledger row

    Returns:
        The committed header
    """
    if not items:
        raise ValidationFailed("Missing required fields or empty item list")

    logger.info(
        f"Starting {category} - Company: {header_fields.get('company_id')}, "
        f"Godown: {header_fields.get('godown_id')}, Items: {len(items)}, Account: {account_id}"
    )

    try:
        get_account_or_404(db, account_id)

        total_amount = sum_line_amounts(items)

        header = header_model(**header_fields, total_amount=total_amount)
        db.add(header)
        db.flush()

        logger.info(f"{header_model.__name__} created: {header.id} - Total: {total_amount}")

        children = getattr(header, children_attr)
        for idx, item in enumerate(items):
            children.append(item_model(**item))
            logger.debug(
                f"Line {idx + 1}: {item.get('material')} - "
                f"Weight: {item.get('weight')}, Rate: {item.get('rate')}, Amount: {item.get('amount')}"
            )
        db.flush()

        post_account_transaction(
            db,
            company_id=header_fields["company_id"],
            godown_id=header_fields.get("godown_id"),
            account_id=account_id,
            direction=direction,
            amount=total_amount,
            category=category,
            reference=reference,
            meta={"ref_id": header.id},
        )

        db.commit()
        db.refresh(header)

        logger.info(f"✅ {category} recorded: {header.id} - Amount: {total_amount}")
        return header

    except GodamError as ge:
        db.rollback()
        logger.error(f"{category} rejected: {ge.message}")
        raise

    except Exception as e:
        db.rollback()
        logger.error(f"Unexpected error in {category}: {str(e)}", exc_info=True)
        raise DatastoreError()
