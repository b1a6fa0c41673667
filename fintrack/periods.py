"""
Helpers for reporting periods.

Definitions
- period: "monthly" or "yearly", always the calendar period containing `now`

Windows are half-open [start, end): the last instant of a month is inside
that month, the first instant of the next month is not.
"""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Tuple

__all__ = [
    "Period",
    "parse_period",
    "period_bounds",
]


class Period(str, Enum):
    monthly = "monthly"
    yearly = "yearly"


def parse_period(raw: str | None) -> Period:
    """None/empty means monthly; anything else must name a known period."""
    if raw is None or not raw.strip():
        return Period.monthly
    try:
        return Period(raw.strip().lower())
    except ValueError:
        raise ValueError("period must be 'monthly' or 'yearly'") from None


def _month_start(year: int, month: int) -> datetime:
    return datetime(year, month, 1)


def _next_month_start(year: int, month: int) -> datetime:
    if month == 12:
        return datetime(year + 1, 1, 1)
    return datetime(year, month + 1, 1)


def period_bounds(period: Period | str, now: datetime) -> Tuple[datetime, datetime]:
    """
    Return the [start, end) window of the calendar period containing `now`.
    Examples (now = 2025-12-31 23:59:59.999999):
      monthly -> (2025-12-01 00:00, 2026-01-01 00:00)
      yearly  -> (2025-01-01 00:00, 2026-01-01 00:00)
    """
    period = Period(period)
    if period is Period.yearly:
        return datetime(now.year, 1, 1), datetime(now.year + 1, 1, 1)
    return _month_start(now.year, now.month), _next_month_start(now.year, now.month)
