from datetime import date

from sqlalchemy import (
    Boolean, Column, Date, DateTime, ForeignKey, Integer, Numeric, String, UniqueConstraint
)
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from godam.core.database import Base, generate_uuid


class Labour(Base):
    """Labourer or contractor attached to a godown."""
    __tablename__ = "labour"

    id = Column(String(36), primary_key=True, default=generate_uuid)
    company_id = Column(String(36), nullable=False, index=True)
    godown_id = Column(String(36), nullable=False, index=True)
    name = Column(String(255), nullable=False)
    contact = Column(String(30), nullable=True)
    role = Column(String(100), nullable=True)
    worker_type = Column(String(50), nullable=False, default="Labour")

    daily_wage = Column(Numeric(15, 2), nullable=False, default=0)
    monthly_salary = Column(Numeric(15, 2), nullable=False, default=0)
    per_kg_rate = Column(Numeric(15, 2), nullable=False, default=0)

    status = Column(String(30), nullable=False, default="Active")
    created_by = Column(String(100), nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    salary_summaries = relationship(
        "LabourSalarySummary", back_populates="labour", cascade="all, delete-orphan"
    )
    attendance = relationship(
        "Attendance", back_populates="labour", cascade="all, delete-orphan"
    )
    salaries = relationship(
        "LabourSalary", back_populates="labour", cascade="all, delete-orphan"
    )
    withdrawals = relationship(
        "LabourWithdrawal", back_populates="labour", cascade="all, delete-orphan"
    )


class LabourSalarySummary(Base):
    __tablename__ = "labour_salary_summary"

    id = Column(String(36), primary_key=True, default=generate_uuid)
    company_id = Column(String(36), nullable=False)
    godown_id = Column(String(36), nullable=False)
    labour_id = Column(String(36), ForeignKey("labour.id", ondelete="CASCADE"), nullable=False, index=True)
    month = Column(Integer, nullable=False)
    year = Column(Integer, nullable=False)
    total_days = Column(Integer, nullable=False, default=0)
    present_days = Column(Integer, nullable=False, default=0)
    total_earned = Column(Numeric(15, 2), nullable=False, default=0)
    total_paid = Column(Numeric(15, 2), nullable=False, default=0)
    net_balance = Column(Numeric(15, 2), nullable=False, default=0)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    labour = relationship("Labour", back_populates="salary_summaries")


class Attendance(Base):
    __tablename__ = "attendance"
    __table_args__ = (
        UniqueConstraint("labour_id", "date", name="uq_attendance_labour_date"),
    )

    id = Column(String(36), primary_key=True, default=generate_uuid)
    company_id = Column(String(36), nullable=False)
    godown_id = Column(String(36), nullable=False)
    labour_id = Column(String(36), ForeignKey("labour.id", ondelete="CASCADE"), nullable=False, index=True)
    date = Column(Date, nullable=False)
    status = Column(String(20), nullable=False)    # present / absent / half-day / leave
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    labour = relationship("Labour", back_populates="attendance")


class LabourSalary(Base):
    """Daily salary accrual created when a labourer is marked present."""
    __tablename__ = "labour_salary"

    id = Column(String(36), primary_key=True, default=generate_uuid)
    company_id = Column(String(36), nullable=False)
    godown_id = Column(String(36), nullable=False)
    labour_id = Column(String(36), ForeignKey("labour.id", ondelete="CASCADE"), nullable=False, index=True)
    date = Column(Date, nullable=False)
    amount = Column(Numeric(15, 2), nullable=False, default=0)
    paid = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    labour = relationship("Labour", back_populates="salaries")


class LabourWithdrawal(Base):
    """Salary payout or advance taken by a labourer."""
    __tablename__ = "labour_withdrawals"

    id = Column(String(36), primary_key=True, default=generate_uuid)
    company_id = Column(String(36), nullable=False)
    godown_id = Column(String(36), nullable=False)
    labour_id = Column(String(36), ForeignKey("labour.id", ondelete="CASCADE"), nullable=False, index=True)
    date = Column(Date, nullable=False, default=date.today)
    amount = Column(Numeric(15, 2), nullable=False)
    mode = Column(String(30), nullable=False, default="cash")
    type = Column(String(30), nullable=False, default="salary")   # salary / advance
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    labour = relationship("Labour", back_populates="withdrawals")
