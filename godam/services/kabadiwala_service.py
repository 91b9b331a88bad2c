from datetime import date
from typing import Dict, List, Optional

from sqlalchemy.orm import Session, selectinload

from godam.logger_config import logger
from godam.models.account import TransactionType
from godam.models.kabadiwala import KabadiwalaRecord, KabadiwalaScrap
from godam.services.ledger_service import record_trade
from godam.utils.filteration import apply_date_filters

KABADIWALA_CATEGORY = "kabadiwala purchase"


def create_kabadiwala_purchase(
    db: Session,
    company_id: str,
    godown_id: str,
    kabadiwala_name: str,
    scraps: List[Dict],
    account_id: str,
) -> KabadiwalaRecord:
    return record_trade(
        db,
        header_model=KabadiwalaRecord,
        item_model=KabadiwalaScrap,
        children_attr="scraps",
        header_fields={
            "company_id": company_id,
            "godown_id": godown_id,
            "kabadiwala_name": kabadiwala_name,
        },
        items=scraps,
        account_id=account_id,
        direction=TransactionType.debit,
        category=KABADIWALA_CATEGORY,
        reference=f"Purchase from {kabadiwala_name}",
    )


def get_kabadiwala_records(
    db: Session,
    company_id: str,
    godown_id: Optional[str] = None,
    start_date: Optional[date] = None,
    end_date: Optional[date] = None,
) -> List[KabadiwalaRecord]:
    query = (
        db.query(KabadiwalaRecord)
        .options(selectinload(KabadiwalaRecord.scraps))
        .filter(KabadiwalaRecord.company_id == company_id)
    )

    if godown_id:
        query = query.filter(KabadiwalaRecord.godown_id == godown_id)
        logger.debug(f"Filtering by godown_id: {godown_id}")

    query = apply_date_filters(
        query, KabadiwalaRecord.date, start_date=start_date, end_date=end_date
    )

    records = query.order_by(KabadiwalaRecord.date.desc(), KabadiwalaRecord.created_at.desc()).all()
    logger.info(f"Retrieved {len(records)} kabadiwala records for company {company_id}")
    return records
