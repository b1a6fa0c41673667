# fintrack/routers/auth.py
# register / login / logout with a server-side session behind an opaque cookie.

import logging

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse
from sqlalchemy.exc import IntegrityError
from sqlmodel import Session, select

from fintrack.db import get_session
from fintrack.errors import AuthError, ConflictError, ValidationError
from fintrack.models import User
from fintrack.schemas import LoginIn, RegisterIn
from fintrack.security import get_session_token, hash_password, verify_password
from fintrack.sessions import SessionStore, get_session_store

router = APIRouter(prefix="/api", tags=["auth"])
logger = logging.getLogger("fintrack.auth")


def _normalize_email(email: str) -> str:
    return email.strip().lower()


@router.post("/register")
def register(
    request: Request, body: RegisterIn, session: Session = Depends(get_session)
):
    required = (body.first_name, body.last_name, body.email, body.password)
    if not all(v and v.strip() for v in required):
        raise ValidationError("First name, last name, email and password are required")

    email = _normalize_email(body.email)
    existing = session.exec(select(User).where(User.email == email)).first()
    if existing:
        raise ConflictError("Email already exists")

    user = User(
        first_name=body.first_name.strip(),
        last_name=body.last_name.strip(),
        email=email,
        fax=(body.fax or "").strip() or None,
        hashed_password=hash_password(body.password),
        language=request.app.state.settings.default_language,
    )
    session.add(user)
    try:
        session.commit()
    except IntegrityError:
        # Lost a race with a concurrent signup for the same email
        session.rollback()
        raise ConflictError("Email already exists")
    session.refresh(user)

    logger.info("registered user id=%s", user.id)
    return {"success": True}


@router.post("/login")
def login(
    request: Request,
    body: LoginIn,
    session: Session = Depends(get_session),
    store: SessionStore = Depends(get_session_store),
):
    if not (body.email and body.email.strip() and body.password):
        raise ValidationError("Email and password are required")

    email = _normalize_email(body.email)
    user = session.exec(select(User).where(User.email == email)).first()
    if not user:
        logger.info("login failed: unknown email")
        raise AuthError("User not found")
    if not verify_password(body.password, user.hashed_password):
        logger.info("login failed: wrong password for user id=%s", user.id)
        raise AuthError("Wrong password")

    token = store.create(user.id)
    settings = request.app.state.settings
    response = JSONResponse({"success": True})
    response.set_cookie(
        settings.session_cookie,
        token,
        max_age=settings.session_max_age,
        httponly=True,
        samesite="lax",
        secure=settings.cookie_secure,
    )
    logger.info("user id=%s signed in", user.id)
    return response


@router.post("/logout")
def logout(request: Request, store: SessionStore = Depends(get_session_store)):
    token = get_session_token(request)
    if token:
        store.destroy(token)
    response = JSONResponse({"success": True})
    response.delete_cookie(request.app.state.settings.session_cookie)
    return response
