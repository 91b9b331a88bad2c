from decimal import Decimal
from datetime import date, datetime
from typing import List, Optional
from pydantic import BaseModel, Field

from godam.schemas.common import LineItemCreate, LineItemResponse, RequestModel

DateType = date


class FeriwalaCreate(RequestModel):
    company_id: str = Field(..., min_length=1)
    godown_id: str = Field(..., min_length=1)
    feriwala_name: str = Field(..., min_length=1, max_length=255)
    scraps: List[LineItemCreate] = Field(..., min_length=1)
    account_id: str = Field(..., min_length=1, description="Account the feriwala is paid from")

    class Config:
        json_schema_extra = {
            "example": {
                "company_id": "c1",
                "godown_id": "g1",
                "feriwala_name": "Ramesh",
                "account_id": "acc-cash",
                "scraps": [
                    {"material": "iron", "weight": 10, "rate": 20, "amount": 200},
                    {"material": "copper", "weight": 2, "rate": 500, "amount": 1000},
                ],
            }
        }


class FeriwalaCreateResponse(BaseModel):
    success: bool = True
    feriwala_id: str
    message: str


class FeriwalaRecordResponse(BaseModel):
    id: str
    company_id: str
    godown_id: str
    date: DateType
    feriwala_name: str
    total_amount: Decimal
    created_at: Optional[datetime] = None
    scraps: List[LineItemResponse] = []

    class Config:
        from_attributes = True


class FeriwalaListResponse(BaseModel):
    success: bool = True
    records: List[FeriwalaRecordResponse]
