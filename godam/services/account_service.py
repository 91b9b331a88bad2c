from datetime import date
from decimal import Decimal
from typing import List, Optional, Tuple

from sqlalchemy import Date, case, func
from sqlalchemy.orm import Session

from godam.core.exceptions import DatastoreError
from godam.logger_config import logger
from godam.models.account import Account, AccountTransaction, AccountType, TransactionType
from godam.utils.filteration import apply_date_filters

# ==================== QUERY OPERATIONS ====================

def get_account_by_id(db: Session, account_id: str) -> Optional[Account]:
    """Get account by ID."""
    return db.query(Account).filter(Account.id == account_id).first()


def get_all_accounts(
    db: Session,
    company_id: str,
    godown_id: Optional[str] = None,
) -> List[Account]:
    """ Get all Accounts of a company, optionally narrowed to a godown """
    query = db.query(Account).filter(Account.company_id == company_id)

    if godown_id:
        query = query.filter(Account.godown_id == godown_id)

    return query.order_by(Account.name.asc()).all()


def create_account(
    db: Session,
    company_id: str,
    name: str,
    type: AccountType = AccountType.cash,
    godown_id: Optional[str] = None,
    opening_balance: Decimal = Decimal("0"),
) -> Account:
    """Create an account with its opening balance."""
    account = Account(
        company_id=company_id,
        godown_id=godown_id,
        name=name,
        type=type,
        balance=opening_balance,
    )
    db.add(account)

    try:
        db.commit()
        db.refresh(account)
        logger.info(f"Account created: {account.name} ({account.id}) - Opening balance: {opening_balance}")
        return account
    except Exception as e:
        db.rollback()
        logger.error(f"Error creating account: {str(e)}")
        raise DatastoreError()


class AccountLedgerService:
    """
    Reading the account_transactions ledger of one account
    """
    def __init__(self, db: Session):
        self.db = db

    def get_transactions(
        self,
        account_id: str,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> Tuple[List[AccountTransaction], int, dict]:
        query = self.db.query(AccountTransaction).filter(
            AccountTransaction.account_id == account_id
        )
        query = apply_date_filters(
            query,
            func.date(AccountTransaction.created_at, type_=Date),
            start_date=start_date,
            end_date=end_date,
        )

        total_count = query.count()

        totals_row = query.with_entities(
            func.coalesce(func.sum(case(
                (AccountTransaction.type == TransactionType.debit, AccountTransaction.amount),
                else_=0,
            )), 0),
            func.coalesce(func.sum(case(
                (AccountTransaction.type == TransactionType.credit, AccountTransaction.amount),
                else_=0,
            )), 0),
        ).first()

        totals = {
            "total_debit": float(totals_row[0]),
            "total_credit": float(totals_row[1]),
        }

        rows = query.order_by(AccountTransaction.created_at.desc()).all()
        return rows, total_count, totals
