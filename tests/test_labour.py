from decimal import Decimal

from godam.models import Attendance, LabourSalary, LabourSalarySummary, LabourWithdrawal
from godam.services import labour_service
from tests.conftest import COMPANY, GODOWN


def _add_labour(client, **overrides):
    payload = {
        "company_id": COMPANY,
        "godown_id": GODOWN,
        "name": "Mohan",
        "role": "loader",
        "daily_wage": 500,
    }
    payload.update(overrides)
    resp = client.post("/api/labour/add", json=payload)
    assert resp.status_code == 201, resp.text
    return resp.json()["labour"]


def test_add_labour_defaults(client, db):
    labour = _add_labour(client, daily_wage=None)
    assert labour["worker_type"] == "Labour"
    assert labour["status"] == "Active"
    assert Decimal(str(labour["daily_wage"])) == Decimal("0")

    summary = db.query(LabourSalarySummary).one()
    assert summary.labour_id == labour["id"]
    assert summary.present_days == 0


def test_add_labour_requires_name(client, db):
    resp = client.post("/api/labour/add", json={"company_id": COMPANY, "godown_id": GODOWN})
    assert resp.status_code == 400
    assert resp.json()["error"] == "Missing required fields: name"
    assert db.query(LabourSalarySummary).count() == 0


def test_present_attendance_accrues_wage(client, db):
    labour_id = _add_labour(client)["id"]

    resp = client.post(
        "/api/labour/attendance/mark",
        json={"labour_id": labour_id, "date": "2024-03-01", "status": "present"},
    )
    assert resp.status_code == 200, resp.text
    assert resp.json()["message"] == "Attendance marked: present"

    salary = db.query(LabourSalary).one()
    assert Decimal(str(salary.amount)) == Decimal("500")
    assert salary.paid is False


def test_absent_attendance_accrues_nothing(client, db):
    labour_id = _add_labour(client)["id"]
    client.post(
        "/api/labour/attendance/mark",
        json={"labour_id": labour_id, "date": "2024-03-01", "status": "absent"},
    )
    assert db.query(Attendance).count() == 1
    assert db.query(LabourSalary).count() == 0


def test_attendance_once_per_day(client, db):
    labour_id = _add_labour(client)["id"]
    mark = {"labour_id": labour_id, "date": "2024-03-01", "status": "present"}

    assert client.post("/api/labour/attendance/mark", json=mark).status_code == 200

    resp = client.post("/api/labour/attendance/mark", json=dict(mark, status="absent"))
    assert resp.status_code == 400
    assert resp.json() == {"success": False, "error": "Attendance already marked"}

    assert db.query(Attendance).count() == 1
    assert db.query(LabourSalary).count() == 1

    resp = client.post("/api/labour/attendance/mark", json=dict(mark, date="2024-03-02"))
    assert resp.status_code == 200
    assert db.query(Attendance).count() == 2


def test_concurrent_duplicate_attendance_hits_constraint(client, db, monkeypatch):
    labour_id = _add_labour(client)["id"]
    mark = {"labour_id": labour_id, "date": "2024-03-01", "status": "present"}
    assert client.post("/api/labour/attendance/mark", json=mark).status_code == 200

    # Another request inserted the row after this one looked for it
    monkeypatch.setattr(labour_service, "attendance_exists", lambda *args: False)

    resp = client.post("/api/labour/attendance/mark", json=mark)
    assert resp.status_code == 400
    assert resp.json() == {"success": False, "error": "Attendance already marked"}

    assert db.query(Attendance).count() == 1
    assert db.query(LabourSalary).count() == 1


def test_attendance_for_unknown_labour(client, db):
    resp = client.post(
        "/api/labour/attendance/mark",
        json={"labour_id": "missing", "date": "2024-03-01", "status": "present"},
    )
    assert resp.status_code == 404
    assert db.query(Attendance).count() == 0


def test_payment_and_totals(client, db):
    labour_id = _add_labour(client)["id"]
    for day in ("2024-03-01", "2024-03-02", "2024-03-03"):
        client.post(
            "/api/labour/attendance/mark",
            json={"labour_id": labour_id, "date": day, "status": "present"},
        )

    resp = client.post(
        "/api/labour/payment",
        json={"labour_id": labour_id, "amount": 300, "type": "advance"},
    )
    assert resp.status_code == 200, resp.text
    client.post("/api/labour/payment", json={"labour_id": labour_id, "amount": 200})

    withdrawals = db.query(LabourWithdrawal).order_by(LabourWithdrawal.amount).all()
    assert [w.type for w in withdrawals] == ["salary", "advance"]
    assert all(w.date is not None for w in withdrawals)

    resp = client.get("/api/labour/all", params={"company_id": COMPANY, "godown_id": GODOWN})
    assert resp.status_code == 200
    (row,) = resp.json()["labour"]
    # Three salary rows and two withdrawals must not inflate each other
    assert Decimal(str(row["total_salary_earned"])) == Decimal("1500")
    assert Decimal(str(row["total_withdrawn"])) == Decimal("500")


def test_payment_validation(client, db):
    labour_id = _add_labour(client)["id"]

    assert client.post("/api/labour/payment", json={"labour_id": labour_id}).status_code == 400
    assert client.post(
        "/api/labour/payment", json={"labour_id": labour_id, "amount": 0}
    ).status_code == 400
    assert client.post(
        "/api/labour/payment", json={"labour_id": "missing", "amount": 10}
    ).status_code == 404

    assert db.query(LabourWithdrawal).count() == 0


def test_list_requires_owner(client):
    resp = client.get("/api/labour/all", params={"godown_id": GODOWN})
    assert resp.status_code == 400


def test_sub_cent_amounts_rejected(client, db):
    resp = client.post(
        "/api/labour/add",
        json={"company_id": COMPANY, "godown_id": GODOWN, "name": "Mohan", "daily_wage": "500.005"},
    )
    assert resp.status_code == 400

    labour_id = _add_labour(client)["id"]
    resp = client.post("/api/labour/payment", json={"labour_id": labour_id, "amount": "10.001"})
    assert resp.status_code == 400
    assert db.query(LabourWithdrawal).count() == 0
