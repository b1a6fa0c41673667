# fintrack/security.py
from __future__ import annotations

from typing import Optional

from fastapi import Depends, Request
from passlib.context import CryptContext

from fintrack.errors import AuthError
from fintrack.sessions import SessionStore, get_session_store

# Password hashing context (bcrypt by default)
_pwd = CryptContext(schemes=["bcrypt"], deprecated="auto")


# ------------ Password helpers ------------


def hash_password(plain: str) -> str:
    """Return a salted one-way hash for a plaintext password."""
    return _pwd.hash(plain)


def verify_password(plain: str, hashed: str) -> bool:
    """Verify a plaintext password against a stored hash."""
    return _pwd.verify(plain, hashed)


# ------------ Session / Auth helpers ------------


def get_session_token(request: Request) -> Optional[str]:
    return request.cookies.get(request.app.state.settings.session_cookie)


def get_current_user_id(
    request: Request, store: SessionStore = Depends(get_session_store)
) -> Optional[int]:
    """
    Resolve the session cookie to a user id. Returns int or None.
    Used directly by routes that degrade instead of failing (list, exports).
    """
    token = get_session_token(request)
    if not token:
        return None
    return store.get(token)


def require_user_id(user_id: Optional[int] = Depends(get_current_user_id)) -> int:
    """
    The one guard for session-gated routes.
    Usage:  user_id: int = Depends(require_user_id)
    """
    if user_id is None:
        raise AuthError("Unauthorized")
    return user_id


__all__ = [
    "hash_password",
    "verify_password",
    "get_session_token",
    "get_current_user_id",
    "require_user_id",
]
