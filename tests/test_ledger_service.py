from decimal import Decimal

import pytest

from godam.core.exceptions import NotFound, ValidationFailed
from godam.models import Account, AccountTransaction, MaalOut, MaalOutItem, TransactionType
from godam.services.ledger_service import post_account_transaction, record_trade, sum_line_amounts
from tests.conftest import COMPANY, GODOWN


def _account(db, balance="1000"):
    account = Account(company_id=COMPANY, godown_id=GODOWN, name="Cash", balance=Decimal(balance))
    db.add(account)
    db.commit()
    return account


def test_sum_line_amounts():
    items = [{"amount": Decimal("200")}, {"amount": "1000.50"}, {"amount": None}, {}]
    assert sum_line_amounts(items) == Decimal("1200.50")


def test_post_account_transaction_moves_balance(db):
    account = _account(db)

    post_account_transaction(
        db,
        company_id=COMPANY,
        godown_id=GODOWN,
        account_id=account.id,
        direction=TransactionType.debit,
        amount=Decimal("150"),
        category="feriwala purchase",
    )
    post_account_transaction(
        db,
        company_id=COMPANY,
        godown_id=GODOWN,
        account_id=account.id,
        direction=TransactionType.credit,
        amount=Decimal("50"),
        category="sale",
        meta={"ref_id": "abc"},
    )
    db.commit()
    db.expire_all()

    assert Decimal(str(db.get(Account, account.id).balance)) == Decimal("900")
    rows = db.query(AccountTransaction).all()
    assert len(rows) == 2
    assert {r.type for r in rows} == {TransactionType.debit, TransactionType.credit}


def test_record_trade_requires_items(db):
    account = _account(db)
    with pytest.raises(ValidationFailed):
        record_trade(
            db,
            header_model=MaalOut,
            item_model=MaalOutItem,
            children_attr="items",
            header_fields={"company_id": COMPANY, "godown_id": GODOWN, "buyer": "X"},
            items=[],
            account_id=account.id,
            direction=TransactionType.credit,
            category="sale",
            reference="Sale to X",
        )


def test_record_trade_unknown_account(db):
    with pytest.raises(NotFound):
        record_trade(
            db,
            header_model=MaalOut,
            item_model=MaalOutItem,
            children_attr="items",
            header_fields={"company_id": COMPANY, "godown_id": GODOWN, "buyer": "X"},
            items=[{"material": "iron", "weight": 1, "rate": 1, "amount": 1}],
            account_id="missing",
            direction=TransactionType.credit,
            category="sale",
            reference="Sale to X",
        )
    assert db.query(MaalOut).count() == 0
