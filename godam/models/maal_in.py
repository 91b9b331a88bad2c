import enum
from datetime import date

from sqlalchemy import Column, Date, DateTime, Enum, ForeignKey, Numeric, String, Text
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from godam.core.database import Base, generate_uuid


class MaalInStatus(str, enum.Enum):
    submitted = "submitted"
    approved = "approved"
    rejected = "rejected"


class PaymentStatus(str, enum.Enum):
    pending = "pending"
    partially_paid = "partially_paid"
    paid = "paid"


class MaalIn(Base):
    """Inbound stock receipt. Created as submitted, then approved or rejected once."""
    __tablename__ = "maal_in"

    id = Column(String(36), primary_key=True, default=generate_uuid)
    company_id = Column(String(36), nullable=False, index=True)
    godown_id = Column(String(36), nullable=False, index=True)
    date = Column(Date, nullable=False, default=date.today)

    supplier_name = Column(String(255), nullable=False)
    seller_type = Column(String(50), nullable=True)     # feriwala / kabadiwala / dealer
    scrap_type = Column(String(100), nullable=True)
    notes = Column(Text, nullable=True)

    status = Column(Enum(MaalInStatus), nullable=False, default=MaalInStatus.submitted)
    total_amount = Column(Numeric(15, 2), nullable=False, default=0)
    payment_status = Column(Enum(PaymentStatus), nullable=False, default=PaymentStatus.pending)

    approved_by = Column(String(100), nullable=True)
    approved_at = Column(DateTime(timezone=True), nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    items = relationship(
        "MaalInItem", back_populates="maal_in", cascade="all, delete-orphan"
    )
    payments = relationship(
        "MaalInPayment", back_populates="maal_in", cascade="all, delete-orphan"
    )


class MaalInItem(Base):
    __tablename__ = "maal_in_items"

    id = Column(String(36), primary_key=True, default=generate_uuid)
    maal_in_id = Column(
        String(36), ForeignKey("maal_in.id", ondelete="CASCADE"), nullable=False, index=True
    )
    material = Column(String(100), nullable=False)
    weight = Column(Numeric(12, 3), nullable=False, default=0)
    rate = Column(Numeric(15, 2), nullable=False, default=0)
    amount = Column(Numeric(15, 2), nullable=False, default=0)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    maal_in = relationship("MaalIn", back_populates="items")


class MaalInPayment(Base):
    __tablename__ = "maal_in_payments"

    id = Column(String(36), primary_key=True, default=generate_uuid)
    maal_in_id = Column(
        String(36), ForeignKey("maal_in.id", ondelete="CASCADE"), nullable=False, index=True
    )
    amount = Column(Numeric(15, 2), nullable=False)
    mode = Column(String(30), nullable=False, default="cash")
    date = Column(Date, nullable=False, default=date.today)

    # Set when the payment was drawn from a tracked account
    account_id = Column(String(36), ForeignKey("accounts.id"), nullable=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now())

    maal_in = relationship("MaalIn", back_populates="payments")
