from datetime import date

from sqlalchemy import Column, Date, DateTime, ForeignKey, Numeric, String
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from godam.core.database import Base, generate_uuid


class MaalOut(Base):
    """Outbound sale of scrap to a buyer."""
    __tablename__ = "maal_out"

    id = Column(String(36), primary_key=True, default=generate_uuid)
    company_id = Column(String(36), nullable=False, index=True)
    godown_id = Column(String(36), nullable=False, index=True)
    date = Column(Date, nullable=False, default=date.today)
    buyer = Column(String(255), nullable=False)
    total_amount = Column(Numeric(15, 2), nullable=False, default=0)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    items = relationship(
        "MaalOutItem", back_populates="maal_out", cascade="all, delete-orphan"
    )


class MaalOutItem(Base):
    __tablename__ = "maal_out_items"

    id = Column(String(36), primary_key=True, default=generate_uuid)
    maal_out_id = Column(
        String(36), ForeignKey("maal_out.id", ondelete="CASCADE"), nullable=False, index=True
    )
    material = Column(String(100), nullable=False)
    weight = Column(Numeric(12, 3), nullable=False, default=0)
    rate = Column(Numeric(15, 2), nullable=False, default=0)
    amount = Column(Numeric(15, 2), nullable=False, default=0)

    maal_out = relationship("MaalOut", back_populates="items")
