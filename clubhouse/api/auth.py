"""Signup, login and logout routes plus the session and admin gates used by every protected route."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, Form, HTTPException, Request, status
from fastapi.responses import HTMLResponse, RedirectResponse
from pydantic import ValidationError
from sqlalchemy.orm import Session

from clubhouse.core.config import settings
from clubhouse.core.database import get_db
from clubhouse.core.templating import render
from clubhouse.models import User
from clubhouse.models.user import ROLE_ADMIN
from clubhouse.schemas.auth import LoginForm, SessionUser, SignupForm, first_error_message
from clubhouse.services.auth import (
    AuthenticationError,
    EmailTakenError,
    authenticate,
    register,
)
from clubhouse.services.sessions import create_session, destroy_session, load_session
from clubhouse.services.users import find_by_email

logger = logging.getLogger(__name__)

router = APIRouter()


def get_session_user(
    request: Request,
    db: Annotated[Session, Depends(get_db)],
) -> SessionUser | None:
    """Dependency: the session snapshot for this request, or None when anonymous."""
    return load_session(db, request.cookies.get(settings.SESSION_COOKIE_NAME))


def require_session(
    user: Annotated[SessionUser | None, Depends(get_session_user)],
) -> SessionUser:
    """Dependency: require a live session. Anonymous callers are redirected to /login."""
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_303_SEE_OTHER,
            headers={"Location": "/login"},
        )
    return user


def require_admin(
    user: Annotated[SessionUser, Depends(require_session)],
    db: Annotated[Session, Depends(get_db)],
) -> User:
    """
    Dependency: require that the caller's stored account is admin right now.
    The role is re-read from the users table; the session snapshot is not trusted.
    Raises 403 when the account is gone or not admin.
    """
    account = find_by_email(db, user.email)
    if account is None or account.role != ROLE_ADMIN:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Admin access required",
        )
    return account


def _start_session(db: Session, user: User) -> RedirectResponse:
    cookie = create_session(db, SessionUser(name=user.name, email=user.email))
    resp = RedirectResponse(url="/members", status_code=status.HTTP_303_SEE_OTHER)
    resp.set_cookie(
        settings.SESSION_COOKIE_NAME,
        cookie,
        max_age=settings.SESSION_TTL_SECONDS,
        httponly=True,
        samesite="lax",
        secure=settings.SESSION_COOKIE_SECURE,
    )
    return resp


def _failure_page(request: Request, title: str, heading: str, message: str, retry_url: str):
    return render(
        request,
        "failure.html",
        {"title": title, "heading": heading, "message": message, "retry_url": retry_url},
    )


@router.get("/signup", response_class=HTMLResponse)
def signup_page(request: Request):
    return render(request, "signup.html")


@router.post("/signup")
def signup(
    request: Request,
    db: Annotated[Session, Depends(get_db)],
    name: Annotated[str, Form()] = "",
    email: Annotated[str, Form()] = "",
    password: Annotated[str, Form()] = "",
):
    """Create an account and log it in. Invalid input re-renders with HTTP 200 and no writes."""
    try:
        form = SignupForm(name=name, email=email, password=password)
    except ValidationError as e:
        return _failure_page(request, "Invalid Signup", "Invalid input!", first_error_message(e), "/signup")
    try:
        user = register(db, form)
    except EmailTakenError as e:
        return _failure_page(request, "Invalid Signup", "Invalid input!", e.message, "/signup")
    return _start_session(db, user)


@router.get("/login", response_class=HTMLResponse)
def login_page(request: Request):
    return render(request, "login.html")


@router.post("/login")
def login(
    request: Request,
    db: Annotated[Session, Depends(get_db)],
    email: Annotated[str, Form()] = "",
    password: Annotated[str, Form()] = "",
):
    """Check credentials and start a session. Unknown email and wrong password look identical."""
    try:
        form = LoginForm(email=email, password=password)
    except ValidationError as e:
        return _failure_page(request, "Invalid Login", "Invalid login!", first_error_message(e), "/login")
    try:
        user = authenticate(db, form)
    except AuthenticationError as e:
        return _failure_page(request, "Login Failed", "Login failed!", e.message, "/login")
    return _start_session(db, user)


@router.get("/logout")
def logout(request: Request, db: Annotated[Session, Depends(get_db)]):
    """Destroy the session (if any) and go home. Safe to call without a session."""
    if destroy_session(db, request.cookies.get(settings.SESSION_COOKIE_NAME)):
        logger.info("Logout: session destroyed")
    resp = RedirectResponse(url="/", status_code=status.HTTP_303_SEE_OTHER)
    resp.delete_cookie(settings.SESSION_COOKIE_NAME)
    return resp
