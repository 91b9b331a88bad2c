from decimal import Decimal
from datetime import date, datetime
from typing import List, Optional
from pydantic import BaseModel, Field, field_validator

from godam.schemas.common import RequestModel

DateType = date


class LabourCreate(RequestModel):
    company_id: str = Field(..., min_length=1)
    godown_id: str = Field(..., min_length=1)
    name: str = Field(..., min_length=1, max_length=255)
    contact: Optional[str] = Field(default=None, max_length=30)
    role: Optional[str] = Field(default=None, max_length=100)
    worker_type: str = Field(default="Labour", max_length=50)
    daily_wage: Decimal = Field(default=Decimal("0"), ge=0, decimal_places=2)
    monthly_salary: Decimal = Field(default=Decimal("0"), ge=0, decimal_places=2)
    per_kg_rate: Decimal = Field(default=Decimal("0"), ge=0, decimal_places=2)
    status: str = Field(default="Active", max_length=30)
    created_by: Optional[str] = Field(default=None, max_length=100)

    @field_validator("daily_wage", "monthly_salary", "per_kg_rate", mode="before")
    @classmethod
    def blank_as_zero(cls, v):
        if v is None or (isinstance(v, str) and not v.strip()):
            return Decimal("0")
        return v


class LabourResponse(BaseModel):
    id: str
    company_id: str
    godown_id: str
    name: str
    contact: Optional[str] = None
    role: Optional[str] = None
    worker_type: str
    daily_wage: Decimal
    monthly_salary: Decimal
    per_kg_rate: Decimal
    status: str
    created_by: Optional[str] = None
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class LabourWithTotals(LabourResponse):
    total_withdrawn: Decimal = Decimal("0")
    total_salary_earned: Decimal = Decimal("0")


class LabourCreateResponse(BaseModel):
    success: bool = True
    message: str
    labour: LabourResponse


class LabourListResponse(BaseModel):
    success: bool = True
    labour: List[LabourWithTotals]


class AttendanceMark(RequestModel):
    labour_id: str = Field(..., min_length=1)
    date: DateType
    status: str = Field(..., min_length=1, max_length=20)


class LabourPaymentCreate(RequestModel):
    """Salary payout or advance. date defaults to today."""
    labour_id: str = Field(..., min_length=1)
    amount: Decimal = Field(..., gt=0, decimal_places=2)
    date: Optional[DateType] = None
    mode: str = Field(default="cash", max_length=30)
    type: str = Field(default="salary", max_length=30)
