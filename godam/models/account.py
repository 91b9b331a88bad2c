import enum
from sqlalchemy import JSON, Column, DateTime, Enum, ForeignKey, Numeric, String, Text
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from godam.core.database import Base, generate_uuid


class AccountType(str, enum.Enum):
    cash = "cash"
    bank = "bank"
    upi = "upi"


class TransactionType(str, enum.Enum):
    debit = "debit"
    credit = "credit"


class Account(Base):
    __tablename__ = "accounts"

    id = Column(String(36), primary_key=True, default=generate_uuid)
    company_id = Column(String(36), nullable=False, index=True)
    godown_id = Column(String(36), nullable=True, index=True)
    name = Column(String(100), nullable=False)
    type = Column(Enum(AccountType), nullable=False, default=AccountType.cash)

    # Single running scalar, moved only together with an AccountTransaction
    balance = Column(Numeric(15, 2), nullable=False, default=0)

    created_at = Column(DateTime(timezone=True), server_default=func.now())

    transactions = relationship("AccountTransaction", back_populates="account")


class AccountTransaction(Base):
    """Append-only ledger row. Never updated or deleted once written."""
    __tablename__ = "account_transactions"

    id = Column(String(36), primary_key=True, default=generate_uuid)
    company_id = Column(String(36), nullable=False, index=True)
    godown_id = Column(String(36), nullable=True, index=True)
    account_id = Column(String(36), ForeignKey("accounts.id"), nullable=False, index=True)

    type = Column(Enum(TransactionType), nullable=False)
    amount = Column(Numeric(15, 2), nullable=False)
    category = Column(String(50), nullable=False)   # feriwala purchase / kabadiwala purchase / sale / maal in payment
    reference = Column(Text, nullable=True)
    meta = Column("metadata", JSON, nullable=False, default=dict)

    created_at = Column(DateTime(timezone=True), server_default=func.now())

    account = relationship("Account", back_populates="transactions")
