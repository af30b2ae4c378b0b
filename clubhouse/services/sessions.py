"""Server-side session store: opaque ids in a signed cookie, encrypted payloads in the database."""

import logging
import secrets
from datetime import UTC, datetime, timedelta

import jwt
from cryptography.fernet import InvalidToken
from pydantic import ValidationError
from sqlalchemy.orm import Session

from clubhouse.core.config import settings
from clubhouse.core.security import (
    create_session_cookie,
    decode_session_cookie,
    decrypt_session_data,
    encrypt_session_data,
)
from clubhouse.models import SessionRecord
from clubhouse.schemas.auth import SessionUser

logger = logging.getLogger(__name__)


def create_session(db: Session, user: SessionUser) -> str:
    """Store a new session for user and return the signed cookie value."""
    session_id = secrets.token_urlsafe(32)
    now = datetime.now(UTC)
    record = SessionRecord(
        id=session_id,
        data=encrypt_session_data(user.model_dump()),
        created_at=now,
        expires_at=now + timedelta(seconds=settings.SESSION_TTL_SECONDS),
    )
    db.add(record)
    db.commit()
    return create_session_cookie(session_id)


def _session_id_from_cookie(cookie_value: str | None) -> str | None:
    if not cookie_value:
        return None
    try:
        return decode_session_cookie(cookie_value)
    except jwt.PyJWTError:
        return None


def load_session(db: Session, cookie_value: str | None) -> SessionUser | None:
    """Resolve a cookie to its live session snapshot; None when absent, invalid or expired."""
    session_id = _session_id_from_cookie(cookie_value)
    if session_id is None:
        return None
    record = (
        db.query(SessionRecord)
        .filter(
            SessionRecord.id == session_id,
            SessionRecord.expires_at > datetime.now(UTC),
        )
        .first()
    )
    if record is None:
        return None
    try:
        return SessionUser.model_validate(decrypt_session_data(record.data))
    except (InvalidToken, ValueError, ValidationError):
        logger.warning("Discarding unreadable session payload")
        return None


def destroy_session(db: Session, cookie_value: str | None) -> bool:
    """Delete the session behind the cookie. Missing or invalid cookies are a no-op."""
    session_id = _session_id_from_cookie(cookie_value)
    if session_id is None:
        return False
    deleted = (
        db.query(SessionRecord)
        .filter(SessionRecord.id == session_id)
        .delete(synchronize_session=False)
    )
    db.commit()
    return deleted > 0


def purge_expired_sessions(db: Session) -> int:
    """
    Delete sessions whose lifetime has elapsed.

    Returns the number of rows removed. Idempotent: safe to run repeatedly.
    """
    cutoff = datetime.now(UTC)
    deleted_count = (
        db.query(SessionRecord)
        .filter(SessionRecord.expires_at <= cutoff)
        .delete(synchronize_session=False)
    )
    db.commit()

    if deleted_count > 0:
        logger.info(
            "Session purge: cutoff=%s, sessions_deleted=%s",
            cutoff.isoformat(),
            deleted_count,
        )
    return deleted_count
