# tests/conftest.py
# Test setup: temporary SQLite DB, dependency override for DB sessions,
# and a fresh session store per client.

import os
import sys
from pathlib import Path

import pytest
from fastapi.testclient import TestClient
from sqlmodel import Session, SQLModel, create_engine

# Settings read the environment at import time: point them away from ./finance.db
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["CREATE_TABLES"] = "false"

# Ensure repo root on sys.path so "import fintrack" works
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

import fintrack.models as _models  # noqa: F401,E402  # registers tables on SQLModel.metadata
from fintrack.db import get_session  # noqa: E402
from fintrack.main import app as fastapi_app  # noqa: E402
from fintrack.sessions import InMemorySessionStore  # noqa: E402

PASSWORD = "pw123456"


@pytest.fixture()
def tmp_db_path(tmp_path: Path) -> Path:
    return tmp_path / "test_finance.db"


@pytest.fixture()
def test_engine(tmp_db_path: Path):
    # File-based SQLite so multiple connections share the same DB
    url = f"sqlite:///{tmp_db_path}"
    engine = create_engine(url, connect_args={"check_same_thread": False})
    SQLModel.metadata.create_all(engine)
    try:
        yield engine
    finally:
        engine.dispose()


@pytest.fixture()
def db(test_engine):
    """A separate session for asserting on what the API persisted."""
    with Session(test_engine) as s:
        yield s


@pytest.fixture()
def session_store():
    store = InMemorySessionStore()
    fastapi_app.state.session_store = store
    return store


@pytest.fixture()
def client(test_engine, session_store):
    def _get_test_session():
        with Session(test_engine) as s:
            yield s

    fastapi_app.dependency_overrides[get_session] = _get_test_session
    with TestClient(fastapi_app) as c:
        yield c
    fastapi_app.dependency_overrides.clear()


@pytest.fixture()
def other_client(client):
    """Second browser: same app and DB, its own cookie jar."""
    with TestClient(fastapi_app) as c:
        yield c


@pytest.fixture()
def cookie_name() -> str:
    return fastapi_app.state.settings.session_cookie


def register(client, email="t@test.com", password=PASSWORD, **extra):
    body = {
        "firstName": "Test",
        "lastName": "User",
        "email": email,
        "password": password,
    }
    body.update(extra)
    return client.post("/api/register", json=body)


def login(client, email="t@test.com", password=PASSWORD):
    return client.post("/api/login", json={"email": email, "password": password})


def signup_and_login(client, email="t@test.com", password=PASSWORD):
    assert register(client, email=email, password=password).json() == {"success": True}
    r = login(client, email=email, password=password)
    assert r.json() == {"success": True}
    return r


@pytest.fixture()
def signed_in(client):
    signup_and_login(client)
    return client


def add_txn(client, **fields):
    body = {
        "description": "Coffee",
        "amount": 12.5,
        "type": "expense",
        "category": "Food",
        "account": "Visa",
        "currency": "ILS",
        "notes": "",
        "recurring": False,
    }
    body.update(fields)
    r = client.post("/api/transactions", json=body)
    assert r.status_code == 200, r.text
    return r
