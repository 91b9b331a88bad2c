from decimal import Decimal
from pydantic import BaseModel
from typing import List, Optional
from datetime import datetime


class GodownStockResponse(BaseModel):
    material: str
    weight: Decimal
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class GodownStockListResponse(BaseModel):
    success: bool = True
    stock: List[GodownStockResponse]
