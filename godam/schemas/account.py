from decimal import Decimal
from pydantic import BaseModel, Field
from typing import List, Optional
from datetime import datetime

from godam.models.account import AccountType, TransactionType
from godam.schemas.common import RequestModel


class AccountCreate(RequestModel):
    company_id: str = Field(..., min_length=1)
    godown_id: Optional[str] = None
    name: str = Field(..., min_length=1, max_length=100)
    type: AccountType = AccountType.cash
    opening_balance: Decimal = Field(default=Decimal("0"), ge=0, decimal_places=2)


class AccountResponse(BaseModel):
    id: str
    company_id: str
    godown_id: Optional[str] = None
    name: str
    type: AccountType
    balance: Decimal
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class AccountListResponse(BaseModel):
    success: bool = True
    accounts: List[AccountResponse]


class AccountTransactionResponse(BaseModel):
    id: str
    account_id: str
    type: TransactionType
    amount: Decimal
    category: str
    reference: Optional[str] = None
    meta: dict = Field(default_factory=dict, serialization_alias="metadata")
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class AccountTransactionListResponse(BaseModel):
    success: bool = True
    count: int
    total_dic: dict
    transactions: List[AccountTransactionResponse]
