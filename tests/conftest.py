import os

os.environ.setdefault("DATABASE_URL", "sqlite://")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from godam.core.database import Base
from godam.core.dependencies import get_db
from godam.main import app
import godam.models  # noqa: F401  registers every table on Base.metadata

COMPANY = "company-1"
GODOWN = "godown-1"


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(bind=engine, autoflush=False, autocommit=False)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client(session_factory):
    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def make_account(client):
    def _make(balance="5000", name="Cash", type="cash"):
        resp = client.post(
            "/api/accounts",
            json={
                "company_id": COMPANY,
                "godown_id": GODOWN,
                "name": name,
                "type": type,
                "opening_balance": balance,
            },
        )
        assert resp.status_code == 201, resp.text
        return resp.json()["id"]

    return _make
