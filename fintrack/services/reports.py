# fintrack/services/reports.py
"""
Summary and export helpers.

- build_summary: income/expense totals for the current calendar period
  plus the latest budget, read in a single statement.
- render_csv: RFC 4180 CSV (csv module quoting) with a localized header.
- render_sql_backup: INSERT statements with escaped literals.
"""

from __future__ import annotations

import csv
import io
import math
from datetime import datetime
from enum import Enum
from typing import Any, Dict, Iterable, List, Optional

from sqlalchemy import case, func
from sqlmodel import Session, select

from fintrack.models import Budget, Transaction, TransactionType
from fintrack.periods import Period, period_bounds

EXPORT_FIELDS = [
    "id",
    "description",
    "amount",
    "type",
    "category",
    "account",
    "currency",
    "notes",
    "recurring",
    "date",
]

CSV_HEADERS: Dict[str, List[str]] = {
    "en": [
        "ID",
        "Description",
        "Amount",
        "Type",
        "Category",
        "Account",
        "Currency",
        "Notes",
        "Recurring",
        "Date",
    ],
    "he": [
        "מזהה",
        "תיאור",
        "סכום",
        "סוג",
        "קטגוריה",
        "חשבון",
        "מטבע",
        "הערות",
        "חוזר",
        "תאריך",
    ],
}

BACKUP_COLUMNS = [
    "id",
    "user_id",
    "description",
    "amount",
    "type",
    "category",
    "account",
    "currency",
    "notes",
    "recurring",
    "date",
]


# ---------- Summary ----------


def _sum_of(txn_type: TransactionType):
    return func.coalesce(
        func.sum(case((Transaction.type == txn_type, Transaction.amount), else_=0.0)),
        0.0,
    )


def build_summary(
    session: Session,
    user_id: int,
    period: Period,
    now: Optional[datetime] = None,
) -> Dict[str, Any]:
    """
    Totals for the calendar month/year containing `now` (server local time).
    The latest budget rides along as a scalar sub-select so a concurrent
    setBudget cannot land between the two reads.
    """
    start, end = period_bounds(period, now or datetime.now())

    latest_budget = (
        select(Budget.amount)
        .where(Budget.user_id == user_id)
        .order_by(Budget.id.desc())
        .limit(1)
        .scalar_subquery()
    )
    stmt = select(
        _sum_of(TransactionType.income).label("income"),
        _sum_of(TransactionType.expense).label("expense"),
        latest_budget.label("budget"),
    ).where(
        Transaction.user_id == user_id,
        Transaction.date >= start,
        Transaction.date < end,
    )
    row = session.exec(stmt).one()

    income = float(row.income or 0)
    expense = float(row.expense or 0)
    return {
        "income": income,
        "expense": expense,
        "balance": income - expense,
        "budget": float(row.budget) if row.budget is not None else None,
    }


# ---------- CSV ----------


def csv_header(language: Optional[str]) -> List[str]:
    """Column titles in the user's language; unknown languages get English."""
    key = (language or "").strip().lower()[:2]
    return CSV_HEADERS.get(key, CSV_HEADERS["en"])


def _csv_value(txn: Transaction, field: str) -> Any:
    value = getattr(txn, field)
    if field == "type":
        return TransactionType(value).value
    if field == "recurring":
        return 1 if value else 0
    if field == "date":
        return value.isoformat(sep=" ", timespec="seconds") if value else ""
    return "" if value is None else value


def render_csv(transactions: Iterable[Transaction], language: Optional[str]) -> str:
    """
    Return the whole CSV document as text.
    Starts with a UTF-8 BOM so spreadsheet apps pick the right encoding.
    """
    buf = io.StringIO()
    buf.write("\ufeff")
    writer = csv.writer(buf)  # minimal quoting, \r\n line ends (RFC 4180)
    writer.writerow(csv_header(language))
    for txn in transactions:
        writer.writerow([_csv_value(txn, f) for f in EXPORT_FIELDS])
    return buf.getvalue()


# ---------- SQL backup ----------


def sql_literal(value: Any) -> str:
    """Render a Python value as a SQL literal. Strings get quotes doubled."""
    if value is None:
        return "NULL"
    if isinstance(value, bool):
        return "1" if value else "0"
    if isinstance(value, Enum):
        value = value.value
    if isinstance(value, (int, float)):
        if not math.isfinite(value):
            raise ValueError(f"cannot write {value!r} as a SQL literal")
        return repr(value)
    if isinstance(value, datetime):
        value = value.isoformat(sep=" ")
    return "'" + str(value).replace("'", "''") + "'"


def render_sql_backup(transactions: Iterable[Transaction]) -> str:
    cols = ", ".join(BACKUP_COLUMNS)
    lines = ["-- transactions backup", "BEGIN TRANSACTION;"]
    for txn in transactions:
        values = ", ".join(sql_literal(getattr(txn, c)) for c in BACKUP_COLUMNS)
        lines.append(f"INSERT INTO transactions ({cols}) VALUES ({values});")
    lines.append("COMMIT;")
    return "\n".join(lines) + "\n"
