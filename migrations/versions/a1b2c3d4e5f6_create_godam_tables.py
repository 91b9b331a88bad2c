"""create godam tables

Revision ID: a1b2c3d4e5f6
Revises:
Create Date: 2026-10-18

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


revision: str = "a1b2c3d4e5f6"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


account_type = sa.Enum("cash", "bank", "upi", name="accounttype")
transaction_type = sa.Enum("debit", "credit", name="transactiontype")
maal_in_status = sa.Enum("submitted", "approved", "rejected", name="maalinstatus")
payment_status = sa.Enum("pending", "partially_paid", "paid", name="paymentstatus")


def _trade_table(header: str, name_column: str) -> None:
    op.create_table(
        header,
        sa.Column("id", sa.String(length=36), nullable=False),
        sa.Column("company_id", sa.String(length=36), nullable=False),
        sa.Column("godown_id", sa.String(length=36), nullable=False),
        sa.Column("date", sa.Date(), nullable=False),
        sa.Column(name_column, sa.String(length=255), nullable=False),
        sa.Column("total_amount", sa.Numeric(precision=15, scale=2), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=True),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(f"ix_{header}_company_id", header, ["company_id"])
    op.create_index(f"ix_{header}_godown_id", header, ["godown_id"])


def _line_item_table(table: str, fk: str, parent: str) -> None:
    op.create_table(
        table,
        sa.Column("id", sa.String(length=36), nullable=False),
        sa.Column(fk, sa.String(length=36), nullable=False),
        sa.Column("material", sa.String(length=100), nullable=False),
        sa.Column("weight", sa.Numeric(precision=12, scale=3), nullable=False),
        sa.Column("rate", sa.Numeric(precision=15, scale=2), nullable=False),
        sa.Column("amount", sa.Numeric(precision=15, scale=2), nullable=False),
        sa.ForeignKeyConstraint([fk], [f"{parent}.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(f"ix_{table}_{fk}", table, [fk])


def upgrade() -> None:
    op.create_table(
        "accounts",
        sa.Column("id", sa.String(length=36), nullable=False),
        sa.Column("company_id", sa.String(length=36), nullable=False),
        sa.Column("godown_id", sa.String(length=36), nullable=True),
        sa.Column("name", sa.String(length=100), nullable=False),
        sa.Column("type", account_type, nullable=False),
        sa.Column("balance", sa.Numeric(precision=15, scale=2), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=True),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_accounts_company_id", "accounts", ["company_id"])
    op.create_index("ix_accounts_godown_id", "accounts", ["godown_id"])

    op.create_table(
        "account_transactions",
        sa.Column("id", sa.String(length=36), nullable=False),
        sa.Column("company_id", sa.String(length=36), nullable=False),
        sa.Column("godown_id", sa.String(length=36), nullable=True),
        sa.Column("account_id", sa.String(length=36), nullable=False),
        sa.Column("type", transaction_type, nullable=False),
        sa.Column("amount", sa.Numeric(precision=15, scale=2), nullable=False),
        sa.Column("category", sa.String(length=50), nullable=False),
        sa.Column("reference", sa.Text(), nullable=True),
        sa.Column("metadata", sa.JSON(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=True),
        sa.ForeignKeyConstraint(["account_id"], ["accounts.id"]),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_account_transactions_company_id", "account_transactions", ["company_id"])
    op.create_index("ix_account_transactions_godown_id", "account_transactions", ["godown_id"])
    op.create_index("ix_account_transactions_account_id", "account_transactions", ["account_id"])

    _trade_table("feriwala_records", "feriwala_name")
    _line_item_table("feriwala_scraps", "feriwala_id", "feriwala_records")

    _trade_table("kabadiwala_records", "kabadiwala_name")
    _line_item_table("kabadiwala_scraps", "kabadiwala_id", "kabadiwala_records")

    _trade_table("maal_out", "buyer")
    _line_item_table("maal_out_items", "maal_out_id", "maal_out")

    op.create_table(
        "maal_in",
        sa.Column("id", sa.String(length=36), nullable=False),
        sa.Column("company_id", sa.String(length=36), nullable=False),
        sa.Column("godown_id", sa.String(length=36), nullable=False),
        sa.Column("date", sa.Date(), nullable=False),
        sa.Column("supplier_name", sa.String(length=255), nullable=False),
        sa.Column("seller_type", sa.String(length=50), nullable=True),
        sa.Column("scrap_type", sa.String(length=100), nullable=True),
        sa.Column("notes", sa.Text(), nullable=True),
        sa.Column("status", maal_in_status, nullable=False),
        sa.Column("total_amount", sa.Numeric(precision=15, scale=2), nullable=False),
        sa.Column("payment_status", payment_status, nullable=False),
        sa.Column("approved_by", sa.String(length=100), nullable=True),
        sa.Column("approved_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=True),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_maal_in_company_id", "maal_in", ["company_id"])
    op.create_index("ix_maal_in_godown_id", "maal_in", ["godown_id"])

    _line_item_table("maal_in_items", "maal_in_id", "maal_in")
    op.add_column(
        "maal_in_items",
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=True),
    )

    op.create_table(
        "maal_in_payments",
        sa.Column("id", sa.String(length=36), nullable=False),
        sa.Column("maal_in_id", sa.String(length=36), nullable=False),
        sa.Column("amount", sa.Numeric(precision=15, scale=2), nullable=False),
        sa.Column("mode", sa.String(length=30), nullable=False),
        sa.Column("date", sa.Date(), nullable=False),
        sa.Column("account_id", sa.String(length=36), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=True),
        sa.ForeignKeyConstraint(["maal_in_id"], ["maal_in.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["account_id"], ["accounts.id"]),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_maal_in_payments_maal_in_id", "maal_in_payments", ["maal_in_id"])

    op.create_table(
        "godown_stock",
        sa.Column("id", sa.String(length=36), nullable=False),
        sa.Column("company_id", sa.String(length=36), nullable=False),
        sa.Column("godown_id", sa.String(length=36), nullable=False),
        sa.Column("material", sa.String(length=100), nullable=False),
        sa.Column("weight", sa.Numeric(precision=14, scale=3), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=True),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("company_id", "godown_id", "material", name="uq_godown_stock_material"),
    )
    op.create_index("ix_godown_stock_company_id", "godown_stock", ["company_id"])
    op.create_index("ix_godown_stock_godown_id", "godown_stock", ["godown_id"])

    op.create_table(
        "labour",
        sa.Column("id", sa.String(length=36), nullable=False),
        sa.Column("company_id", sa.String(length=36), nullable=False),
        sa.Column("godown_id", sa.String(length=36), nullable=False),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("contact", sa.String(length=30), nullable=True),
        sa.Column("role", sa.String(length=100), nullable=True),
        sa.Column("worker_type", sa.String(length=50), nullable=False),
        sa.Column("daily_wage", sa.Numeric(precision=15, scale=2), nullable=False),
        sa.Column("monthly_salary", sa.Numeric(precision=15, scale=2), nullable=False),
        sa.Column("per_kg_rate", sa.Numeric(precision=15, scale=2), nullable=False),
        sa.Column("status", sa.String(length=30), nullable=False),
        sa.Column("created_by", sa.String(length=100), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=True),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_labour_company_id", "labour", ["company_id"])
    op.create_index("ix_labour_godown_id", "labour", ["godown_id"])

    op.create_table(
        "labour_salary_summary",
        sa.Column("id", sa.String(length=36), nullable=False),
        sa.Column("company_id", sa.String(length=36), nullable=False),
        sa.Column("godown_id", sa.String(length=36), nullable=False),
        sa.Column("labour_id", sa.String(length=36), nullable=False),
        sa.Column("month", sa.Integer(), nullable=False),
        sa.Column("year", sa.Integer(), nullable=False),
        sa.Column("total_days", sa.Integer(), nullable=False),
        sa.Column("present_days", sa.Integer(), nullable=False),
        sa.Column("total_earned", sa.Numeric(precision=15, scale=2), nullable=False),
        sa.Column("total_paid", sa.Numeric(precision=15, scale=2), nullable=False),
        sa.Column("net_balance", sa.Numeric(precision=15, scale=2), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=True),
        sa.ForeignKeyConstraint(["labour_id"], ["labour.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_labour_salary_summary_labour_id", "labour_salary_summary", ["labour_id"])

    op.create_table(
        "attendance",
        sa.Column("id", sa.String(length=36), nullable=False),
        sa.Column("company_id", sa.String(length=36), nullable=False),
        sa.Column("godown_id", sa.String(length=36), nullable=False),
        sa.Column("labour_id", sa.String(length=36), nullable=False),
        sa.Column("date", sa.Date(), nullable=False),
        sa.Column("status", sa.String(length=20), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=True),
        sa.ForeignKeyConstraint(["labour_id"], ["labour.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("labour_id", "date", name="uq_attendance_labour_date"),
    )
    op.create_index("ix_attendance_labour_id", "attendance", ["labour_id"])

    op.create_table(
        "labour_salary",
        sa.Column("id", sa.String(length=36), nullable=False),
        sa.Column("company_id", sa.String(length=36), nullable=False),
        sa.Column("godown_id", sa.String(length=36), nullable=False),
        sa.Column("labour_id", sa.String(length=36), nullable=False),
        sa.Column("date", sa.Date(), nullable=False),
        sa.Column("amount", sa.Numeric(precision=15, scale=2), nullable=False),
        sa.Column("paid", sa.Boolean(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=True),
        sa.ForeignKeyConstraint(["labour_id"], ["labour.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_labour_salary_labour_id", "labour_salary", ["labour_id"])

    op.create_table(
        "labour_withdrawals",
        sa.Column("id", sa.String(length=36), nullable=False),
        sa.Column("company_id", sa.String(length=36), nullable=False),
        sa.Column("godown_id", sa.String(length=36), nullable=False),
        sa.Column("labour_id", sa.String(length=36), nullable=False),
        sa.Column("date", sa.Date(), nullable=False),
        sa.Column("amount", sa.Numeric(precision=15, scale=2), nullable=False),
        sa.Column("mode", sa.String(length=30), nullable=False),
        sa.Column("type", sa.String(length=30), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=True),
        sa.ForeignKeyConstraint(["labour_id"], ["labour.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_labour_withdrawals_labour_id", "labour_withdrawals", ["labour_id"])


def downgrade() -> None:
    for table in (
        "labour_withdrawals",
        "labour_salary",
        "attendance",
        "labour_salary_summary",
        "labour",
        "godown_stock",
        "maal_in_payments",
        "maal_in_items",
        "maal_in",
        "maal_out_items",
        "maal_out",
        "kabadiwala_scraps",
        "kabadiwala_records",
        "feriwala_scraps",
        "feriwala_records",
        "account_transactions",
        "accounts",
    ):
        op.drop_table(table)

    bind = op.get_bind()
    for enum_type in (payment_status, maal_in_status, transaction_type, account_type):
        enum_type.drop(bind, checkfirst=True)
