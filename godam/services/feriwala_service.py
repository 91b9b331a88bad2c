from datetime import date
from typing import Dict, List, Optional

from sqlalchemy.orm import Session, selectinload

from godam.logger_config import logger
from godam.models.account import TransactionType
from godam.models.feriwala import FeriwalaRecord, FeriwalaScrap
from godam.services.ledger_service import record_trade
from godam.utils.filteration import apply_date_filters

FERIWALA_CATEGORY = "feriwala purchase"


def create_feriwala_purchase(
    db: Session,
    company_id: str,
    godown_id: str,
    feriwala_name: str,
    scraps: List[Dict],
    account_id: str,
) -> FeriwalaRecord:
    """Record a purchase from a feriwala and pay for it from account_id."""
    return record_trade(
        db,
        header_model=FeriwalaRecord,
        item_model=FeriwalaScrap,
        children_attr="scraps",
        header_fields={
            "company_id": company_id,
            "godown_id": godown_id,
            "feriwala_name": feriwala_name,
        },
        items=scraps,
        account_id=account_id,
        direction=TransactionType.debit,
        category=FERIWALA_CATEGORY,
        reference=f"Purchase from {feriwala_name}",
    )


def get_feriwala_records(
    db: Session,
    company_id: str,
    godown_id: str,
    as_of: Optional[date] = None,
    start_date: Optional[date] = None,
    end_date: Optional[date] = None,
) -> List[FeriwalaRecord]:
    """Purchases of one godown with their scraps, newest date first."""
    query = (
        db.query(FeriwalaRecord)
        .options(selectinload(FeriwalaRecord.scraps))
        .filter(
            FeriwalaRecord.company_id == company_id,
            FeriwalaRecord.godown_id == godown_id,
        )
    )
    query = apply_date_filters(
        query, FeriwalaRecord.date, as_of=as_of, start_date=start_date, end_date=end_date
    )

    records = query.order_by(FeriwalaRecord.date.desc(), FeriwalaRecord.created_at.desc()).all()
    logger.info(f"Retrieved {len(records)} feriwala records for godown {godown_id}")
    return records
