from datetime import date
from typing import Dict, List, Optional

from sqlalchemy.orm import Session, selectinload

from godam.logger_config import logger
from godam.models.account import TransactionType
from godam.models.maal_out import MaalOut, MaalOutItem
from godam.services.ledger_service import record_trade
from godam.utils.filteration import apply_date_filters

SALE_CATEGORY = "sale"


def create_maal_out(
    db: Session,
    company_id: str,
    godown_id: str,
    buyer: str,
    items: List[Dict],
    account_id: str,
) -> MaalOut:
    """Record a sale; the buyer's payment is credited to account_id."""
    return record_trade(
        db,
        header_model=MaalOut,
        item_model=MaalOutItem,
        children_attr="items",
        header_fields={
            "company_id": company_id,
            "godown_id": godown_id,
            "buyer": buyer,
        },
        items=items,
        account_id=account_id,
        direction=TransactionType.credit,
        category=SALE_CATEGORY,
        reference=f"Sale to {buyer}",
    )


def get_maal_out_records(
    db: Session,
    company_id: str,
    godown_id: Optional[str] = None,
    start_date: Optional[date] = None,
    end_date: Optional[date] = None,
) -> List[MaalOut]:
    query = (
        db.query(MaalOut)
        .options(selectinload(MaalOut.items))
        .filter(MaalOut.company_id == company_id)
    )

    if godown_id:
        query = query.filter(MaalOut.godown_id == godown_id)

    query = apply_date_filters(query, MaalOut.date, start_date=start_date, end_date=end_date)

    sales = query.order_by(MaalOut.created_at.desc()).all()
    logger.info(f"Retrieved {len(sales)} sales for company {company_id}")
    return sales
