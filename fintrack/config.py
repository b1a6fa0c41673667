import os  # read environment variables
from functools import lru_cache  # one shared Settings object
from typing import Optional

from dotenv import load_dotenv  # local .env support for development
from pydantic import BaseModel

load_dotenv()  # put .env key=value pairs into os.environ before Settings reads them


def _optional_int(name: str) -> Optional[int]:
    raw = os.getenv(name, "").strip()
    return int(raw) if raw else None


def _flag(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    return raw.strip().lower() in ("1", "true", "yes", "on")


class Settings(BaseModel):
    # reserved for signing cookies; must be secret in production
    secret_key: str = os.getenv("SECRET_KEY", "dev-secret-change")

    # single-file SQLite by default; any SQLAlchemy URL works
    database_url: str = os.getenv("DATABASE_URL", "sqlite:///./finance.db")

    # cookie that carries the opaque session token
    session_cookie: str = os.getenv("SESSION_COOKIE_NAME", "finance_session")

    # seconds; None keeps sessions until logout or restart
    session_max_age: Optional[int] = _optional_int("SESSION_MAX_AGE")

    # set true behind HTTPS
    cookie_secure: bool = _flag("COOKIE_SECURE", False)

    # language stored on newly registered users
    default_language: str = os.getenv("DEFAULT_LANGUAGE", "en")

    # currency used when a transaction does not name one
    default_currency: str = os.getenv("DEFAULT_CURRENCY", "ILS")

    # create missing tables on startup; turn off when Alembic owns the schema
    create_tables: bool = _flag("CREATE_TABLES", True)

    log_level: str = os.getenv("LOG_LEVEL", "INFO")


@lru_cache
def get_settings() -> Settings:
    return Settings()
