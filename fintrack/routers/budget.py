# fintrack/routers/budget.py
# Purpose: the append-only budget log and the period summary.
# - POST /api/budget always inserts; the newest row is the current budget.
# - GET /api/summary totals the current calendar month or year.

from typing import Optional

from fastapi import APIRouter, Depends
from sqlmodel import Session

from fintrack.db import get_session
from fintrack.errors import ValidationError
from fintrack.models import Budget
from fintrack.periods import parse_period
from fintrack.schemas import BudgetIn
from fintrack.security import require_user_id
from fintrack.services.reports import build_summary

router = APIRouter(prefix="/api", tags=["budget"])


@router.post("/budget")
def set_budget(
    body: BudgetIn,
    user_id: int = Depends(require_user_id),
    session: Session = Depends(get_session),
):
    """Insert a new budget row; earlier rows stay as history."""
    if body.amount is None:
        raise ValidationError("Amount is required")

    session.add(Budget(user_id=user_id, amount=body.amount))
    session.commit()
    return {"success": True}


@router.get("/summary")
def get_summary(
    period: Optional[str] = None,
    user_id: int = Depends(require_user_id),
    session: Session = Depends(get_session),
):
    """Return {income, expense, balance, budget} for the current period."""
    try:
        which = parse_period(period)
    except ValueError as ex:
        raise ValidationError(str(ex))
    return build_summary(session, user_id, which)
