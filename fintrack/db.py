from __future__ import annotations

import logging
from typing import Generator

from sqlmodel import Session, SQLModel, create_engine

from fintrack.config import get_settings

settings = get_settings()

# Requests run in a threadpool and share the file-backed SQLite DB across threads
connect_args = {}
if settings.database_url.startswith("sqlite"):
    connect_args = {"check_same_thread": False}

engine = create_engine(
    settings.database_url,
    echo=False,
    connect_args=connect_args,
)

logger = logging.getLogger("db")
logger.info("DB URL in use: %s", engine.url)


def get_session() -> Generator[Session, None, None]:
    """FastAPI dependency: yields a database session and closes it afterwards."""
    with Session(engine) as session:
        yield session


def create_db_and_tables() -> None:
    """
    Create users, transactions and budgets if they are missing.
    Deployments that run Alembic migrations set CREATE_TABLES=false.
    """
    import fintrack.models  # noqa: F401  # registers tables on SQLModel.metadata

    SQLModel.metadata.create_all(engine)
