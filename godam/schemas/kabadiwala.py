from decimal import Decimal
from datetime import date
from typing import List
from pydantic import BaseModel, Field

from godam.schemas.common import LineItemCreate, LineItemResponse, RequestModel

DateType = date


class KabadiwalaCreate(RequestModel):
    company_id: str = Field(..., min_length=1)
    godown_id: str = Field(..., min_length=1)
    kabadiwala_name: str = Field(..., min_length=1, max_length=255)
    scraps: List[LineItemCreate] = Field(..., min_length=1)
    account_id: str = Field(..., min_length=1)


class KabadiwalaCreateResponse(BaseModel):
    success: bool = True
    kabadiwala_id: str


class KabadiwalaRecordResponse(BaseModel):
    id: str
    kabadiwala_name: str
    total_amount: Decimal
    date: DateType
    scraps: List[LineItemResponse] = []

    class Config:
        from_attributes = True


class KabadiwalaListResponse(BaseModel):
    success: bool = True
    data: List[KabadiwalaRecordResponse]
