from datetime import date, timedelta
from decimal import Decimal

import pytest
from sqlalchemy import event

from godam.models import (
    AccountTransaction,
    FeriwalaRecord,
    FeriwalaScrap,
    KabadiwalaRecord,
    MaalOut,
)
from tests.conftest import COMPANY, GODOWN


def _balance(client, account_id) -> Decimal:
    resp = client.get(f"/api/accounts/{account_id}")
    assert resp.status_code == 200
    return Decimal(str(resp.json()["balance"]))


def _transactions(client, account_id):
    resp = client.get(f"/api/accounts/{account_id}/transactions")
    assert resp.status_code == 200
    return resp.json()["transactions"]


def _scraps():
    return [
        {"material": "iron", "weight": 10, "rate": 20, "amount": 200},
        {"material": "copper", "weight": 2, "rate": 500, "amount": 1000},
    ]


def test_kabadiwala_purchase_debits_account(client, make_account):
    account_id = make_account(balance="5000")

    resp = client.post(
        "/api/kabadiwala/add",
        json={
            "company_id": COMPANY,
            "godown_id": GODOWN,
            "kabadiwala_name": "Suresh",
            "account_id": account_id,
            "scraps": _scraps(),
        },
    )
    assert resp.status_code == 201, resp.text
    body = resp.json()
    assert body["success"] is True
    kabadiwala_id = body["kabadiwala_id"]

    listing = client.get(f"/api/kabadiwala/list/{COMPANY}").json()["data"]
    assert len(listing) == 1
    assert listing[0]["id"] == kabadiwala_id
    assert Decimal(str(listing[0]["total_amount"])) == Decimal("1200")
    assert len(listing[0]["scraps"]) == 2

    assert _balance(client, account_id) == Decimal("3800")

    rows = _transactions(client, account_id)
    assert len(rows) == 1
    assert rows[0]["type"] == "debit"
    assert rows[0]["category"] == "kabadiwala purchase"
    assert Decimal(str(rows[0]["amount"])) == Decimal("1200")
    assert rows[0]["metadata"]["ref_id"] == kabadiwala_id


def test_feriwala_purchase_and_listing(client, make_account):
    account_id = make_account(balance="1000")

    resp = client.post(
        "/api/feriwala/add",
        json={
            "company_id": COMPANY,
            "godown_id": GODOWN,
            "feriwala_name": "  Ramesh  ",
            "account_id": account_id,
            "scraps": [{"material": "plastic", "weight": "", "rate": None, "amount": 150}],
        },
    )
    assert resp.status_code == 201, resp.text
    assert resp.json()["message"] == "Feriwala purchase added successfully"

    records = client.get(
        "/api/feriwala/list", params={"company_id": COMPANY, "godown_id": GODOWN}
    ).json()["records"]
    assert len(records) == 1
    assert records[0]["feriwala_name"] == "Ramesh"
    assert Decimal(str(records[0]["scraps"][0]["weight"])) == Decimal("0")

    assert _balance(client, account_id) == Decimal("850")
    assert _transactions(client, account_id)[0]["category"] == "feriwala purchase"


def test_feriwala_list_as_of_date(client, make_account):
    account_id = make_account()
    client.post(
        "/api/feriwala/add",
        json={
            "company_id": COMPANY,
            "godown_id": GODOWN,
            "feriwala_name": "Ramesh",
            "account_id": account_id,
            "scraps": _scraps(),
        },
    )

    yesterday = (date.today() - timedelta(days=1)).isoformat()
    resp = client.get(
        "/api/feriwala/list",
        params={"company_id": COMPANY, "godown_id": GODOWN, "date": yesterday},
    )
    assert resp.status_code == 200
    assert resp.json()["records"] == []

    resp = client.get(
        "/api/feriwala/list",
        params={"company_id": COMPANY, "godown_id": GODOWN, "date": date.today().isoformat()},
    )
    assert len(resp.json()["records"]) == 1


def test_feriwala_list_requires_owner(client):
    resp = client.get("/api/feriwala/list", params={"company_id": COMPANY})
    assert resp.status_code == 400
    assert resp.json() == {"success": False, "error": "company_id and godown_id are required"}


def test_maal_out_credits_account(client, make_account):
    account_id = make_account(balance="100")

    resp = client.post(
        "/api/maalOut/add",
        json={
            "company_id": COMPANY,
            "godown_id": GODOWN,
            "buyer": "Metal Works",
            "account_id": account_id,
            "items": [{"material": "iron", "weight": 50, "rate": 30, "amount": 1500}],
        },
    )
    assert resp.status_code == 200, resp.text
    maal_out_id = resp.json()["maal_out_id"]

    assert _balance(client, account_id) == Decimal("1600")

    rows = _transactions(client, account_id)
    assert rows[0]["type"] == "credit"
    assert rows[0]["category"] == "sale"
    assert rows[0]["reference"] == "Sale to Metal Works"

    sales = client.get(f"/api/maalOut/list/{COMPANY}", params={"godown_id": GODOWN}).json()["data"]
    assert [s["id"] for s in sales] == [maal_out_id]


@pytest.mark.parametrize(
    "payload",
    [
        {"godown_id": GODOWN, "kabadiwala_name": "Suresh", "scraps": _scraps()},
        {"company_id": COMPANY, "godown_id": GODOWN, "kabadiwala_name": "Suresh", "scraps": []},
        {"company_id": COMPANY, "godown_id": GODOWN, "kabadiwala_name": "   ", "scraps": _scraps()},
    ],
)
def test_missing_fields_write_nothing(client, db, make_account, payload):
    account_id = make_account(balance="5000")
    payload = dict(payload, account_id=account_id)

    resp = client.post("/api/kabadiwala/add", json=payload)
    assert resp.status_code == 400
    body = resp.json()
    assert body["success"] is False
    assert body["error"].startswith("Missing required fields")

    assert db.query(KabadiwalaRecord).count() == 0
    assert db.query(AccountTransaction).count() == 0
    assert _balance(client, account_id) == Decimal("5000")


def test_non_numeric_amount_rejected(client, db, make_account):
    account_id = make_account()
    resp = client.post(
        "/api/maalOut/add",
        json={
            "company_id": COMPANY,
            "godown_id": GODOWN,
            "buyer": "Metal Works",
            "account_id": account_id,
            "items": [{"material": "iron", "weight": 1, "rate": 1, "amount": "lots"}],
        },
    )
    assert resp.status_code == 400
    assert db.query(MaalOut).count() == 0


def test_unknown_account_is_not_found(client, db):
    resp = client.post(
        "/api/feriwala/add",
        json={
            "company_id": COMPANY,
            "godown_id": GODOWN,
            "feriwala_name": "Ramesh",
            "account_id": "missing",
            "scraps": _scraps(),
        },
    )
    assert resp.status_code == 404
    assert resp.json()["error"] == "Account not found"
    assert db.query(FeriwalaRecord).count() == 0


def test_failure_midway_rolls_back_everything(client, db, make_account):
    account_id = make_account(balance="5000")

    def explode(mapper, connection, target):
        raise RuntimeError("disk full")

    event.listen(FeriwalaScrap, "before_insert", explode)
    try:
        resp = client.post(
            "/api/feriwala/add",
            json={
                "company_id": COMPANY,
                "godown_id": GODOWN,
                "feriwala_name": "Ramesh",
                "account_id": account_id,
                "scraps": _scraps(),
            },
        )
    finally:
        event.remove(FeriwalaScrap, "before_insert", explode)

    assert resp.status_code == 500
    assert resp.json() == {"success": False, "error": "Internal server error"}

    assert db.query(FeriwalaRecord).count() == 0
    assert db.query(FeriwalaScrap).count() == 0
    assert db.query(AccountTransaction).count() == 0
    assert _balance(client, account_id) == Decimal("5000")


def test_sub_cent_amounts_rejected(client, db, make_account):
    account_id = make_account(balance="5000")

    resp = client.post(
        "/api/kabadiwala/add",
        json={
            "company_id": COMPANY,
            "godown_id": GODOWN,
            "kabadiwala_name": "Suresh",
            "account_id": account_id,
            "scraps": [
                {"material": "iron", "weight": 1, "rate": 1, "amount": "0.004"},
                {"material": "iron", "weight": 1, "rate": 1, "amount": "0.004"},
            ],
        },
    )
    assert resp.status_code == 400
    assert db.query(KabadiwalaRecord).count() == 0
    assert db.query(AccountTransaction).count() == 0
    assert _balance(client, account_id) == Decimal("5000")


def test_header_total_matches_stored_items(client, db, make_account):
    account_id = make_account(balance="5000")

    resp = client.post(
        "/api/kabadiwala/add",
        json={
            "company_id": COMPANY,
            "godown_id": GODOWN,
            "kabadiwala_name": "Suresh",
            "account_id": account_id,
            "scraps": [
                {"material": "iron", "weight": "1.255", "rate": "0.10", "amount": "0.13"},
                {"material": "tin", "weight": "0.5", "rate": "0.33", "amount": "0.17"},
            ],
        },
    )
    assert resp.status_code == 201, resp.text

    record = db.query(KabadiwalaRecord).one()
    stored = sum(Decimal(str(s.amount)) for s in record.scraps)
    assert Decimal(str(record.total_amount)) == stored == Decimal("0.30")
    assert _balance(client, account_id) == Decimal("4999.70")
