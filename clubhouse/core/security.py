"""Password hashing, session cookie signing and session payload encryption."""

import base64
import hashlib
import json
from datetime import UTC, datetime, timedelta
from functools import lru_cache
from typing import Any

import bcrypt
import jwt
from cryptography.fernet import Fernet

from clubhouse.core.config import settings

# Bcrypt cost (rounds); fixed work factor for every stored hash.
BCRYPT_ROUNDS = 12

# Field bounds for signup/login validation.
NAME_MIN_LEN = 1
NAME_MAX_LEN = 20
PASSWORD_MIN_LEN = 6
PASSWORD_MAX_LEN = 30
# bcrypt only reads the first 72 bytes of a password.
PASSWORD_MAX_BYTES = 72

SESSION_COOKIE_ALGORITHM = "HS256"


def hash_password(plain_password: str) -> str:
    """Hash a plain-text password for storage. Do not store plain passwords."""
    # bcrypt has a 72-byte limit; truncate to avoid errors (validation already limits length).
    pw_bytes = plain_password.encode("utf-8")[:72]
    return bcrypt.hashpw(pw_bytes, bcrypt.gensalt(rounds=BCRYPT_ROUNDS)).decode("utf-8")


def verify_password(plain_password: str, hashed: str) -> bool:
    """Verify a plain password against a stored hash."""
    pw_bytes = plain_password.encode("utf-8")[:72]
    try:
        return bcrypt.checkpw(pw_bytes, hashed.encode("utf-8"))
    except (ValueError, TypeError):
        return False


@lru_cache
def dummy_password_hash() -> str:
    """Hash compared against when an email is unknown, so lookups cost the same."""
    return hash_password("clubhouse-dummy-password")


def create_session_cookie(session_id: str) -> str:
    """Sign the opaque session id into the cookie value; expires with the session."""
    now = datetime.now(UTC)
    payload: dict[str, Any] = {
        "sid": session_id,
        "iat": now,
        "exp": now + timedelta(seconds=settings.SESSION_TTL_SECONDS),
    }
    return jwt.encode(
        payload,
        settings.SESSION_SECRET.get_secret_value(),
        algorithm=SESSION_COOKIE_ALGORITHM,
    )


def decode_session_cookie(cookie_value: str) -> str:
    """
    Return the session id carried by a signed cookie.
    Raises jwt.PyJWTError on a tampered, malformed or expired cookie.
    """
    payload = jwt.decode(
        cookie_value,
        settings.SESSION_SECRET.get_secret_value(),
        algorithms=[SESSION_COOKIE_ALGORITHM],
    )
    sid = payload.get("sid")
    if not sid or not isinstance(sid, str):
        raise jwt.InvalidTokenError("Session cookie has no session id")
    return sid


def _fernet() -> Fernet:
    secret = settings.SESSION_ENCRYPTION_SECRET.get_secret_value().encode("utf-8")
    key = base64.urlsafe_b64encode(hashlib.sha256(secret).digest())
    return Fernet(key)


def encrypt_session_data(data: dict[str, Any]) -> str:
    """Encrypt a session payload for storage."""
    raw = json.dumps(data, separators=(",", ":")).encode("utf-8")
    return _fernet().encrypt(raw).decode("ascii")


def decrypt_session_data(token: str) -> dict[str, Any]:
    """Decrypt a stored session payload. Raises cryptography.fernet.InvalidToken."""
    return json.loads(_fernet().decrypt(token.encode("ascii")))
