# fintrack/routers/export.py
# File downloads. Failures answer in plain text, not the JSON shape.

from __future__ import annotations

import logging
from typing import Optional

from fastapi import APIRouter, Depends
from fastapi.responses import PlainTextResponse, Response
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session

from fintrack.db import get_session
from fintrack.errors import GENERIC_STORE_MESSAGE
from fintrack.models import User
from fintrack.security import get_current_user_id
from fintrack.services.reports import render_csv, render_sql_backup
from fintrack.services.transactions import list_transactions

router = APIRouter(prefix="/api", tags=["export"])
logger = logging.getLogger("fintrack.reports")


def _attachment(body: str, filename: str, media_type: str) -> Response:
    return Response(
        content=body.encode("utf-8"),
        media_type=media_type,
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


@router.get("/export-csv")
def export_csv(
    user_id: Optional[int] = Depends(get_current_user_id),
    session: Session = Depends(get_session),
):
    if user_id is None:
        return PlainTextResponse("Unauthorized", status_code=401)
    try:
        user = session.get(User, user_id)
        txns = list_transactions(session, user_id)
    except SQLAlchemyError:
        logger.exception("CSV export failed for user=%s", user_id)
        return PlainTextResponse(GENERIC_STORE_MESSAGE, status_code=500)

    body = render_csv(txns, user.language if user else None)
    return _attachment(body, "transactions.csv", "text/csv; charset=utf-8")


@router.get("/backup")
def backup_sql(
    user_id: Optional[int] = Depends(get_current_user_id),
    session: Session = Depends(get_session),
):
    if user_id is None:
        return PlainTextResponse("Unauthorized", status_code=401)
    try:
        txns = list_transactions(session, user_id)
    except SQLAlchemyError:
        logger.exception("SQL backup failed for user=%s", user_id)
        return PlainTextResponse(GENERIC_STORE_MESSAGE, status_code=500)

    return _attachment(render_sql_backup(txns), "backup.sql", "application/sql")
