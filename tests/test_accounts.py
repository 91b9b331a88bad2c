from decimal import Decimal

from tests.conftest import COMPANY, GODOWN


def test_create_and_fetch_account(client, make_account):
    account_id = make_account(balance="250.50", name="HDFC", type="bank")

    resp = client.get(f"/api/accounts/{account_id}")
    assert resp.status_code == 200
    account = resp.json()
    assert account["name"] == "HDFC"
    assert account["type"] == "bank"
    assert Decimal(str(account["balance"])) == Decimal("250.50")


def test_list_accounts_by_company(client, make_account):
    make_account(name="Cash")
    make_account(name="Bank", type="bank")

    resp = client.get("/api/accounts", params={"company_id": COMPANY})
    assert resp.status_code == 200
    assert [a["name"] for a in resp.json()["accounts"]] == ["Bank", "Cash"]

    resp = client.get("/api/accounts", params={"company_id": "other"})
    assert resp.json()["accounts"] == []


def test_unknown_account(client):
    assert client.get("/api/accounts/missing").status_code == 404
    resp = client.get("/api/accounts/missing/transactions")
    assert resp.status_code == 404
    assert resp.json() == {"success": False, "error": "Account not found"}


def test_transactions_totals(client, make_account):
    account_id = make_account(balance="1000")
    client.post(
        "/api/kabadiwala/add",
        json={
            "company_id": COMPANY,
            "godown_id": GODOWN,
            "kabadiwala_name": "Suresh",
            "account_id": account_id,
            "scraps": [{"material": "iron", "weight": 10, "rate": 30, "amount": 300}],
        },
    )
    client.post(
        "/api/maalOut/add",
        json={
            "company_id": COMPANY,
            "godown_id": GODOWN,
            "buyer": "Metal Works",
            "account_id": account_id,
            "items": [{"material": "iron", "weight": 10, "rate": 50, "amount": 500}],
        },
    )

    resp = client.get(f"/api/accounts/{account_id}/transactions")
    assert resp.status_code == 200
    body = resp.json()
    assert body["count"] == 2
    assert body["total_dic"] == {"total_debit": 300.0, "total_credit": 500.0}
    assert {t["category"] for t in body["transactions"]} == {"kabadiwala purchase", "sale"}

    account = client.get(f"/api/accounts/{account_id}").json()
    assert Decimal(str(account["balance"])) == Decimal("1200")

    resp = client.get(
        f"/api/accounts/{account_id}/transactions",
        params={"start_date": "2000-01-01", "end_date": "2000-12-31"},
    )
    assert resp.json()["count"] == 0


def test_negative_opening_balance_rejected(client):
    resp = client.post(
        "/api/accounts",
        json={"company_id": COMPANY, "name": "Cash", "opening_balance": -5},
    )
    assert resp.status_code == 400


def test_sub_cent_opening_balance_rejected(client):
    resp = client.post(
        "/api/accounts",
        json={"company_id": COMPANY, "name": "Cash", "opening_balance": "10.005"},
    )
    assert resp.status_code == 400
    assert client.get("/api/accounts", params={"company_id": COMPANY}).json()["accounts"] == []
