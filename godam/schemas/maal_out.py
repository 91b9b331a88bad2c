from decimal import Decimal
from datetime import date
from typing import List
from pydantic import BaseModel, Field

from godam.schemas.common import LineItemCreate, LineItemResponse, RequestModel

DateType = date


class MaalOutCreate(RequestModel):
    """Sale of scrap to a buyer; the sale amount is credited to account_id."""
    company_id: str = Field(..., min_length=1)
    godown_id: str = Field(..., min_length=1)
    buyer: str = Field(..., min_length=1, max_length=255)
    account_id: str = Field(..., min_length=1)
    items: List[LineItemCreate] = Field(..., min_length=1)


class MaalOutCreateResponse(BaseModel):
    success: bool = True
    maal_out_id: str


class MaalOutResponse(BaseModel):
    id: str
    date: DateType
    buyer: str
    total_amount: Decimal
    items: List[LineItemResponse] = []

    class Config:
        from_attributes = True


class MaalOutListResponse(BaseModel):
    success: bool = True
    data: List[MaalOutResponse]
