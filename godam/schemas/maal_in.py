"""
Maal In Schemas
Request validation and response serialization for inbound stock receipts,
their line items, approval and payments.
"""

from decimal import Decimal
from datetime import date, datetime
from enum import Enum
from typing import List, Optional
from pydantic import AliasChoices, BaseModel, Field

from godam.models.maal_in import MaalInStatus, PaymentStatus
from godam.schemas.common import LineItemCreate, RequestModel

# Alias to avoid field name 'date' shadowing type 'date' in annotations (Pydantic v2)
DateType = date


class ApprovalAction(str, Enum):
    approve = "approve"
    reject = "reject"


# ============================================================================
# Request Schemas
# ============================================================================

class MaalInCreate(RequestModel):
    """Header only; items are added afterwards and the total is derived from them."""
    company_id: str = Field(..., min_length=1)
    godown_id: str = Field(..., min_length=1)
    date: Optional[DateType] = None  # default to today in service
    supplier_name: str = Field(
        ...,
        min_length=1,
        max_length=255,
        validation_alias=AliasChoices("supplier_name", "seller_name"),
    )
    seller_type: Optional[str] = Field(default=None, max_length=50)
    scrap_type: Optional[str] = Field(default=None, max_length=100)
    notes: Optional[str] = None


class MaalInItemsCreate(RequestModel):
    items: List[LineItemCreate] = Field(..., min_length=1)


class MaalInApprove(RequestModel):
    action: ApprovalAction
    approved_by: Optional[str] = Field(default=None, max_length=100)


class MaalInPaymentCreate(RequestModel):
    amount: Decimal = Field(..., gt=0, decimal_places=2)
    mode: str = Field(default="cash", min_length=1, max_length=30)
    date: DateType
    account_id: Optional[str] = Field(
        default=None, description="Debit this account when the payment is made from it"
    )


# ============================================================================
# Response Schemas
# ============================================================================

class MaalInResponse(BaseModel):
    id: str
    company_id: str
    godown_id: str
    date: DateType
    supplier_name: str
    seller_type: Optional[str] = None
    scrap_type: Optional[str] = None
    notes: Optional[str] = None
    status: MaalInStatus
    total_amount: Decimal
    payment_status: PaymentStatus
    approved_by: Optional[str] = None
    approved_at: Optional[datetime] = None
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class MaalInItemResponse(BaseModel):
    id: str
    material: str
    weight: Decimal
    rate: Decimal
    amount: Decimal

    class Config:
        from_attributes = True


class MaalInPaymentResponse(BaseModel):
    id: str
    amount: Decimal
    mode: str
    date: DateType
    account_id: Optional[str] = None
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class MaalInEnvelope(BaseModel):
    success: bool = True
    message: Optional[str] = None
    maal_in: MaalInResponse


class MaalInDetailResponse(BaseModel):
    success: bool = True
    maal_in: MaalInResponse
    items: List[MaalInItemResponse]
    payments: List[MaalInPaymentResponse]


class MaalInSummary(MaalInResponse):
    """List row: header plus child counts."""
    item_count: int = 0
    payment_count: int = 0


class MaalInRangeSummary(MaalInResponse):
    """Range row: header plus item and payment aggregates."""
    item_count: int = 0
    total_weight: Decimal = Decimal("0")
    total_paid: Decimal = Decimal("0")


class MaalInListResponse(BaseModel):
    success: bool = True
    data: List[MaalInSummary]


class MaalInRangeResponse(BaseModel):
    success: bool = True
    data: List[MaalInRangeSummary]


class MaalInPaymentEnvelope(BaseModel):
    success: bool = True
    payment: MaalInPaymentResponse
    payment_status: PaymentStatus
    total_paid: Decimal
