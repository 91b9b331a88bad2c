from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from godam.core.dependencies import get_db
from godam.core.exceptions import GodamError
from godam.logger_config import logger
from godam.schemas.account import (
    AccountCreate,
    AccountListResponse,
    AccountResponse,
    AccountTransactionListResponse,
    AccountTransactionResponse,
)
from godam.services.account_service import (
    AccountLedgerService,
    create_account,
    get_account_by_id,
    get_all_accounts,
)

router = APIRouter()


@router.get("", response_model=AccountListResponse)
def get_accounts(
    company_id: str = Query(..., min_length=1),
    godown_id: Optional[str] = Query(None),
    db: Session = Depends(get_db),
):
    """ Get all the Accounts with their current balance """
    try:
        accounts = get_all_accounts(db, company_id=company_id, godown_id=godown_id)
        return AccountListResponse(
            accounts=[AccountResponse.model_validate(a) for a in accounts]
        )
    except Exception:
        logger.exception("Error fetching accounts")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to fetch accounts",
        )


@router.post("", response_model=AccountResponse, status_code=status.HTTP_201_CREATED)
def create_account_route(
    data: AccountCreate,
    db: Session = Depends(get_db),
):
    account = create_account(
        db,
        company_id=data.company_id,
        godown_id=data.godown_id,
        name=data.name,
        type=data.type,
        opening_balance=data.opening_balance,
    )
    return AccountResponse.model_validate(account)


@router.get("/{account_id}", response_model=AccountResponse)
def get_account(
    account_id: str,
    db: Session = Depends(get_db),
):
    account = get_account_by_id(db, account_id)

    if not account:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Account not found"
        )

    return AccountResponse.model_validate(account)


@router.get("/{account_id}/transactions", response_model=AccountTransactionListResponse)
def get_account_transactions(
    account_id: str,
    start_date: Optional[date] = Query(None),
    end_date: Optional[date] = Query(None),
    db: Session = Depends(get_db),
):
    """Ledger rows of one account, newest first, with debit/credit totals."""
    if not get_account_by_id(db, account_id):
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Account not found"
        )

    try:
        rows, count, totals = AccountLedgerService(db).get_transactions(
            account_id, start_date=start_date, end_date=end_date
        )
        return AccountTransactionListResponse(
            count=count,
            total_dic=totals,
            transactions=[AccountTransactionResponse.model_validate(r) for r in rows],
        )
    except GodamError:
        raise
    except Exception:
        logger.exception("Error fetching account transactions")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to fetch transactions",
        )
