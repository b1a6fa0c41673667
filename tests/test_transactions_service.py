# tests/test_transactions_service.py
"""
Unit tests for the transaction service helpers (no HTTP).
We spin up a tiny SQLite DB, create tables, and verify owner scoping.
"""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import DateTime
from sqlmodel import Session, SQLModel, create_engine

from fintrack.models import Transaction, TransactionType, User
from fintrack.schemas import TransactionIn
from fintrack.services.transactions import (
    create_transaction,
    delete_transaction,
    list_transactions,
    update_transaction,
)


def _make_engine():
    return create_engine("sqlite:///:memory:", echo=False)


def _bootstrap(engine):
    SQLModel.metadata.create_all(engine)
    with Session(engine) as s:
        owner = User(first_name="A", last_name="A", email="a@test.com", hashed_password="x")
        stranger = User(first_name="B", last_name="B", email="b@test.com", hashed_password="x")
        s.add(owner)
        s.add(stranger)
        s.commit()
        return owner.id, stranger.id


def test_create_stamps_owner_date_and_default_currency():
    engine = _make_engine()
    owner_id, _ = _bootstrap(engine)

    with Session(engine) as s:
        txn = create_transaction(
            s,
            user_id=owner_id,
            data=TransactionIn(amount=23.5, type="expense", description="weekly shop"),
            default_currency="ILS",
        )

        assert txn.id is not None
        assert txn.user_id == owner_id
        assert txn.type == TransactionType.expense
        assert txn.currency == "ILS"
        assert txn.date is not None
        assert s.get(Transaction, txn.id) is not None


def test_search_treats_wildcards_literally():
    engine = _make_engine()
    owner_id, _ = _bootstrap(engine)

    with Session(engine) as s:
        for desc in ("100% refund", "1000 refund"):
            create_transaction(
                s, user_id=owner_id, data=TransactionIn(amount=1, type="income", description=desc)
            )
        found = list_transactions(s, owner_id, search="100%")
        assert [t.description for t in found] == ["100% refund"]


def test_update_and_delete_report_rows_affected():
    engine = _make_engine()
    owner_id, stranger_id = _bootstrap(engine)

    with Session(engine) as s:
        txn = create_transaction(
            s, user_id=owner_id, data=TransactionIn(amount=5, type="expense")
        )
        data = TransactionIn(amount=9, type="income")

        assert update_transaction(s, user_id=stranger_id, txn_id=txn.id, data=data) == 0
        assert delete_transaction(s, user_id=stranger_id, txn_id=txn.id) == 0
        assert update_transaction(s, user_id=owner_id, txn_id=txn.id, data=data) == 1

        s.expire_all()
        assert s.get(Transaction, txn.id).amount == 9.0
        assert delete_transaction(s, user_id=owner_id, txn_id=txn.id) == 1
        assert list_transactions(s, owner_id) == []


def test_date_column_stores_naive_local_time():
    column = Transaction.__table__.c.date
    assert type(column.type) is DateTime
    assert column.type.timezone is False

    engine = _make_engine()
    owner_id, _ = _bootstrap(engine)
    with Session(engine) as s:
        txn = create_transaction(
            s, user_id=owner_id, data=TransactionIn(amount=1, type="income")
        )
        s.expire_all()
        stored = s.get(Transaction, txn.id).date
        assert stored.tzinfo is None
        assert abs((datetime.now() - stored).total_seconds()) < 60
