"""Admin console: list users and promote/demote them. Every route re-checks admin role."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import HTMLResponse, RedirectResponse
from sqlalchemy.orm import Session

from clubhouse.api.auth import require_admin
from clubhouse.core.database import get_db
from clubhouse.core.templating import render
from clubhouse.models import User
from clubhouse.models.user import ROLE_ADMIN, ROLE_USER
from clubhouse.schemas.auth import UserListItem
from clubhouse.services.users import list_users, update_role

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/admin", response_class=HTMLResponse)
def admin_console(
    request: Request,
    admin: Annotated[User, Depends(require_admin)],
    db: Annotated[Session, Depends(get_db)],
):
    """List every account with its current role (admin only)."""
    users = [UserListItem.model_validate(u) for u in list_users(db)]
    return render(request, "admin.html", {"admin": admin, "users": users})


def _set_role(db: Session, admin: User, email: str, role: str) -> RedirectResponse:
    changed = update_role(db, email, role)
    logger.info(
        "Role change: actor_id=%s target=%s role=%s rows_changed=%s",
        admin.id,
        email,
        role,
        changed,
    )
    return RedirectResponse(url="/admin", status_code=status.HTTP_303_SEE_OTHER)


@router.get("/promote/{email:path}")
def promote(
    email: str,
    admin: Annotated[User, Depends(require_admin)],
    db: Annotated[Session, Depends(get_db)],
):
    """Make the account admin. No matching account is a silent no-op."""
    return _set_role(db, admin, email, ROLE_ADMIN)


@router.get("/demote/{email:path}")
def demote(
    email: str,
    admin: Annotated[User, Depends(require_admin)],
    db: Annotated[Session, Depends(get_db)],
):
    """Make the account a regular user. No matching account is a silent no-op."""
    return _set_role(db, admin, email, ROLE_USER)
