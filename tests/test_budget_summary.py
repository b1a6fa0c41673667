# tests/test_budget_summary.py
from datetime import datetime

from sqlmodel import select

from conftest import add_txn, signup_and_login
from fintrack.models import Budget, Transaction, TransactionType, User
from fintrack.periods import Period
from fintrack.services.reports import build_summary


def test_monthly_summary(signed_in):
    add_txn(signed_in, description="Salary", amount=1000, type="income")
    add_txn(signed_in, description="Rent", amount=300, type="expense")

    r = signed_in.get("/api/summary", params={"period": "monthly"})
    assert r.status_code == 200
    assert r.json() == {"income": 1000.0, "expense": 300.0, "balance": 700.0, "budget": None}


def test_summary_defaults_to_monthly(signed_in):
    add_txn(signed_in, amount=50, type="income")
    assert signed_in.get("/api/summary").json()["income"] == 50.0


def test_summary_rejects_unknown_period(signed_in):
    r = signed_in.get("/api/summary", params={"period": "weekly"})
    assert r.status_code == 400
    assert r.json() == {
        "success": False,
        "message": "period must be 'monthly' or 'yearly'",
    }


def test_summary_requires_session(client):
    r = client.get("/api/summary")
    assert r.status_code == 401
    assert r.json()["success"] is False


def test_latest_budget_wins_and_history_is_kept(signed_in, db):
    assert signed_in.post("/api/budget", json={"amount": 500}).json() == {"success": True}
    assert signed_in.post("/api/budget", json={"amount": 800}).json() == {"success": True}

    assert signed_in.get("/api/summary").json()["budget"] == 800.0
    amounts = [b.amount for b in db.exec(select(Budget).order_by(Budget.id)).all()]
    assert amounts == [500.0, 800.0]


def test_budget_requires_amount(signed_in, db):
    r = signed_in.post("/api/budget", json={})
    assert r.status_code == 400
    assert r.json()["success"] is False
    assert db.exec(select(Budget)).all() == []


def test_budget_is_per_user(client, other_client):
    signup_and_login(client, email="a@test.com")
    signup_and_login(other_client, email="b@test.com")
    client.post("/api/budget", json={"amount": 900})
    add_txn(client, amount=100, type="income")

    assert other_client.get("/api/summary").json() == {
        "income": 0.0,
        "expense": 0.0,
        "balance": 0.0,
        "budget": None,
    }


# ---- period windows against stored timestamps (no HTTP) ----


def _seed(db):
    user = User(first_name="S", last_name="T", email="s@test.com", hashed_password="x")
    db.add(user)
    db.commit()
    db.refresh(user)

    def txn(amount, kind, when):
        db.add(
            Transaction(user_id=user.id, amount=amount, type=kind, date=when)
        )

    txn(100, TransactionType.income, datetime(2025, 1, 1, 0, 0, 0))
    txn(40, TransactionType.expense, datetime(2025, 1, 31, 23, 59, 59, 999999))
    txn(7, TransactionType.expense, datetime(2025, 2, 1, 0, 0, 0))
    txn(1000, TransactionType.income, datetime(2024, 12, 31, 23, 59, 59))
    txn(5, TransactionType.expense, datetime(2025, 12, 31, 23, 59, 59, 999999))
    db.add(Budget(user_id=user.id, amount=250))
    db.commit()
    return user.id


def test_month_window_includes_last_instant(db):
    user_id = _seed(db)
    summary = build_summary(db, user_id, Period.monthly, now=datetime(2025, 1, 15))
    assert summary == {"income": 100.0, "expense": 40.0, "balance": 60.0, "budget": 250.0}


def test_december_window_rolls_into_next_year(db):
    user_id = _seed(db)
    summary = build_summary(db, user_id, Period.monthly, now=datetime(2025, 12, 1))
    assert summary["expense"] == 5.0
    assert summary["income"] == 0.0


def test_year_window(db):
    user_id = _seed(db)
    summary = build_summary(db, user_id, Period.yearly, now=datetime(2025, 6, 1))
    assert summary["income"] == 100.0
    assert summary["expense"] == 52.0
    assert summary["balance"] == 48.0


def test_budget_rejects_non_finite_amount(signed_in, db):
    r = signed_in.post(
        "/api/budget",
        content='{"amount": Infinity}',
        headers={"Content-Type": "application/json"},
    )
    assert r.status_code == 400
    assert r.json()["success"] is False
    assert db.exec(select(Budget)).all() == []
