from datetime import date

from sqlalchemy import Column, Date, DateTime, ForeignKey, Numeric, String
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from godam.core.database import Base, generate_uuid


class KabadiwalaRecord(Base):
    __tablename__ = "kabadiwala_records"

    id = Column(String(36), primary_key=True, default=generate_uuid)
    company_id = Column(String(36), nullable=False, index=True)
    godown_id = Column(String(36), nullable=False, index=True)
    date = Column(Date, nullable=False, default=date.today)
    kabadiwala_name = Column(String(255), nullable=False)
    total_amount = Column(Numeric(15, 2), nullable=False, default=0)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    scraps = relationship(
        "KabadiwalaScrap", back_populates="record", cascade="all, delete-orphan"
    )


class KabadiwalaScrap(Base):
    __tablename__ = "kabadiwala_scraps"

    id = Column(String(36), primary_key=True, default=generate_uuid)
    kabadiwala_id = Column(
        String(36), ForeignKey("kabadiwala_records.id", ondelete="CASCADE"), nullable=False, index=True
    )
    material = Column(String(100), nullable=False)
    weight = Column(Numeric(12, 3), nullable=False, default=0)
    rate = Column(Numeric(15, 2), nullable=False, default=0)
    amount = Column(Numeric(15, 2), nullable=False, default=0)

    record = relationship("KabadiwalaRecord", back_populates="scraps")
