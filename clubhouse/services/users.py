"""Credential store: user lookup, insertion with first-admin assignment, role updates."""

import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from clubhouse.models import User
from clubhouse.models.user import ROLE_ADMIN, ROLE_USER, ROLES

logger = logging.getLogger(__name__)


def find_by_email(db: Session, email: str) -> User | None:
    """Return the user with exactly this email (case-sensitive), oldest first."""
    return db.query(User).filter(User.email == email).order_by(User.id).first()


def count_users(db: Session) -> int:
    return db.query(User).count()


def list_users(db: Session) -> list[User]:
    return db.query(User).order_by(User.id).all()


def insert_user(db: Session, name: str, email: str, password_hash: str) -> User:
    """
    Insert a new account. The first account ever created becomes admin.

    The founder column is unique, so when two signups both see an empty table
    only one founder row commits; the other hits IntegrityError and is stored
    as a regular user.
    """
    if db.query(User.id).first() is None:
        founder = User(
            name=name,
            email=email,
            password_hash=password_hash,
            role=ROLE_ADMIN,
            founder=True,
        )
        db.add(founder)
        try:
            db.commit()
        except IntegrityError:
            db.rollback()
            logger.info("Founder slot already taken; inserting %s as user", email)
        else:
            db.refresh(founder)
            return founder

    user = User(
        name=name,
        email=email,
        password_hash=password_hash,
        role=ROLE_USER,
        founder=None,
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


def update_role(db: Session, email: str, role: str) -> int:
    """Set role on every account with this email. Returns rows changed; 0 is not an error."""
    if role not in ROLES:
        raise ValueError(f"Unknown role: {role!r}")
    changed = (
        db.query(User)
        .filter(User.email == email)
        .update({User.role: role}, synchronize_session=False)
    )
    db.commit()
    return changed
