"""Landing and members pages."""

from typing import Annotated

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import HTMLResponse, RedirectResponse
from sqlalchemy.orm import Session

from clubhouse.api.auth import get_session_user, require_session
from clubhouse.core.database import get_db
from clubhouse.core.templating import render
from clubhouse.models.user import ROLE_ADMIN
from clubhouse.schemas.auth import SessionUser
from clubhouse.services.users import find_by_email

router = APIRouter()


@router.get("/", response_class=HTMLResponse)
def home(
    request: Request,
    user: Annotated[SessionUser | None, Depends(get_session_user)],
):
    if user is not None:
        return RedirectResponse(url="/members", status_code=status.HTTP_303_SEE_OTHER)
    return render(request, "index.html")


@router.get("/members", response_class=HTMLResponse)
def members(
    request: Request,
    user: Annotated[SessionUser, Depends(require_session)],
    db: Annotated[Session, Depends(get_db)],
):
    # Stored role decides whether to show the admin link; the session carries none.
    account = find_by_email(db, user.email)
    is_admin = account is not None and account.role == ROLE_ADMIN
    return render(request, "members.html", {"user": user, "is_admin": is_admin})
