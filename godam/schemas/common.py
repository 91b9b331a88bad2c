"""
Shared pieces for the scrap trade schemas: the material line item used by
feriwala / kabadiwala purchases, maal out sales and maal in receipts.
"""

from decimal import Decimal
from typing import Optional
from pydantic import BaseModel, Field, field_validator


class RequestModel(BaseModel):
    """Base for request bodies: surrounding whitespace never counts as a value."""

    class Config:
        str_strip_whitespace = True


class LineItemCreate(RequestModel):
    """One material line. amount is taken as given, not derived from weight x rate."""
    material: str = Field(..., min_length=1, max_length=100)
    weight: Decimal = Field(default=Decimal("0"), ge=0, decimal_places=3)
    rate: Decimal = Field(default=Decimal("0"), ge=0, decimal_places=2)
    amount: Decimal = Field(default=Decimal("0"), ge=0, decimal_places=2)

    @field_validator("weight", "rate", "amount", mode="before")
    @classmethod
    def blank_as_zero(cls, v):
        # Empty cells from the dashboard grid arrive as null or ""
        if v is None or (isinstance(v, str) and not v.strip()):
            return Decimal("0")
        return v

    class Config:
        json_schema_extra = {
            "example": {"material": "iron", "weight": 10, "rate": 20, "amount": 200}
        }


class LineItemResponse(BaseModel):
    material: str
    weight: Decimal
    rate: Decimal
    amount: Decimal

    class Config:
        from_attributes = True


class MessageResponse(BaseModel):
    success: bool = True
    message: Optional[str] = None
