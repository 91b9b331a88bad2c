from sqlalchemy import Column, DateTime, Numeric, String, UniqueConstraint
from sqlalchemy.sql import func

from godam.core.database import Base, generate_uuid


class GodownStock(Base):
    """Running weight on hand per material in a godown."""
    __tablename__ = "godown_stock"
    __table_args__ = (
        UniqueConstraint("company_id", "godown_id", "material", name="uq_godown_stock_material"),
    )

    id = Column(String(36), primary_key=True, default=generate_uuid)
    company_id = Column(String(36), nullable=False, index=True)
    godown_id = Column(String(36), nullable=False, index=True)
    material = Column(String(100), nullable=False)
    weight = Column(Numeric(14, 3), nullable=False, default=0)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())
