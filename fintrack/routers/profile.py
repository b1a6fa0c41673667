# fintrack/routers/profile.py
from fastapi import APIRouter, Depends
from sqlmodel import Session

from fintrack.db import get_session
from fintrack.errors import NotFoundError, ValidationError
from fintrack.models import User
from fintrack.schemas import LanguageIn, PasswordIn
from fintrack.security import hash_password, require_user_id

router = APIRouter(prefix="/api", tags=["profile"])


def _load_user(session: Session, user_id: int) -> User:
    user = session.get(User, user_id)
    if not user:
        # session outlived its user (deleted out of band)
        raise NotFoundError("User not found")
    return user


@router.get("/profile")
def get_profile(
    user_id: int = Depends(require_user_id), session: Session = Depends(get_session)
):
    return _load_user(session, user_id).to_profile()


@router.put("/profile")
def update_password(
    body: PasswordIn,
    user_id: int = Depends(require_user_id),
    session: Session = Depends(get_session),
):
    """Replace the password. The current one is not asked for."""
    if not body.password:
        raise ValidationError("Password is required")

    user = _load_user(session, user_id)
    user.hashed_password = hash_password(body.password)
    session.add(user)
    session.commit()
    return {"success": True}


@router.post("/language")
def update_language(
    body: LanguageIn,
    user_id: int = Depends(require_user_id),
    session: Session = Depends(get_session),
):
    # stored verbatim; exports fall back to English for unknown codes
    if not body.language:
        raise ValidationError("Language is required")

    user = _load_user(session, user_id)
    user.language = body.language
    session.add(user)
    session.commit()
    return {"success": True}
