# fintrack/services/transactions.py
"""
Owner-scoped data access for transactions.

Every statement here filters by user_id, so a guessed id from another
account never matches. Update/delete report how many rows they touched;
the routes decide what to tell the client.
"""

from __future__ import annotations

from typing import List, Optional, Union

from sqlalchemy import delete, update
from sqlmodel import Session, select

from fintrack.models import Transaction, TransactionType
from fintrack.schemas import TransactionIn


def _columns(data: TransactionIn, default_currency: Optional[str]) -> dict:
    return {
        "description": data.description,
        "amount": float(data.amount),
        "type": TransactionType(data.type),
        "category": data.category,
        "account": data.account,
        "currency": data.currency or default_currency,
        "notes": data.notes,
        "recurring": bool(data.recurring),
    }


def create_transaction(
    session: Session,
    *,
    user_id: int,
    data: TransactionIn,
    default_currency: Optional[str] = None,
) -> Transaction:
    """Insert one row owned by user_id; `date` is stamped on insert."""
    txn = Transaction(user_id=user_id, **_columns(data, default_currency))
    session.add(txn)
    session.commit()
    session.refresh(txn)
    return txn


def list_transactions(
    session: Session,
    user_id: int,
    *,
    search: Optional[str] = None,
    type: Union[TransactionType, str, None] = None,
    category: Optional[str] = None,
) -> List[Transaction]:
    """
    The caller's rows, newest first. Filters combine with AND:
    - search: substring of description (case rules follow the DB collation)
    - type/category: exact match
    """
    stmt = select(Transaction).where(Transaction.user_id == user_id)
    if search:
        stmt = stmt.where(Transaction.description.contains(search, autoescape=True))
    if type:
        stmt = stmt.where(Transaction.type == TransactionType(type))
    if category:
        stmt = stmt.where(Transaction.category == category)
    stmt = stmt.order_by(Transaction.date.desc(), Transaction.id.desc())
    return list(session.exec(stmt).all())


def update_transaction(
    session: Session,
    *,
    user_id: int,
    txn_id: int,
    data: TransactionIn,
    default_currency: Optional[str] = None,
) -> int:
    """Overwrite every client field of one owned row. Returns rows affected."""
    stmt = (
        update(Transaction)
        .where(Transaction.id == txn_id, Transaction.user_id == user_id)
        .values(**_columns(data, default_currency))
    )
    result = session.exec(stmt)
    session.commit()
    return result.rowcount


def delete_transaction(session: Session, *, user_id: int, txn_id: int) -> int:
    """Delete one owned row. Returns rows affected (0 for unknown/foreign ids)."""
    stmt = delete(Transaction).where(
        Transaction.id == txn_id, Transaction.user_id == user_id
    )
    result = session.exec(stmt)
    session.commit()
    return result.rowcount
