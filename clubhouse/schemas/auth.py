"""Typed form schemas for signup/login and view models for sessions and the admin list."""

from email_validator import EmailNotValidError, validate_email
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from clubhouse.core.security import (
    NAME_MAX_LEN,
    NAME_MIN_LEN,
    PASSWORD_MAX_BYTES,
    PASSWORD_MAX_LEN,
    PASSWORD_MIN_LEN,
)


def _check_email(value: str) -> str:
    """Reject malformed addresses; keep the address exactly as typed (no normalization)."""
    try:
        validate_email(value, check_deliverability=False)
    except EmailNotValidError as e:
        raise ValueError(str(e)) from e
    return value


class SignupForm(BaseModel):
    """Signup form fields."""

    name: str = Field(..., min_length=NAME_MIN_LEN, max_length=NAME_MAX_LEN)
    email: str = Field(..., min_length=1)
    password: str = Field(..., min_length=PASSWORD_MIN_LEN, max_length=PASSWORD_MAX_LEN)

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Name must not be blank")
        return v

    @field_validator("password")
    @classmethod
    def validate_password_bytes(cls, v: str) -> str:
        if len(v.encode("utf-8")) > PASSWORD_MAX_BYTES:
            raise ValueError(f"Password must be at most {PASSWORD_MAX_BYTES} bytes in UTF-8")
        return v

    @field_validator("email")
    @classmethod
    def validate_email_address(cls, v: str) -> str:
        return _check_email(v)


class LoginForm(BaseModel):
    """Login form fields."""

    email: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)

    @field_validator("email")
    @classmethod
    def validate_email_address(cls, v: str) -> str:
        return _check_email(v)


class SessionUser(BaseModel):
    """Snapshot of the user stored in a session at signup/login time (no role)."""

    model_config = ConfigDict(frozen=True)

    name: str
    email: str


class UserListItem(BaseModel):
    """User entry for the admin list (no password)."""

    model_config = ConfigDict(from_attributes=True)

    name: str
    email: str
    role: str


def first_error_message(exc: ValidationError) -> str:
    """Human-readable message for the first failing field, e.g. 'password: ...'."""
    errors = exc.errors()
    if not errors:
        return "Invalid input."
    first = errors[0]
    field = ".".join(str(part) for part in first.get("loc", ()))
    ctx_error = (first.get("ctx") or {}).get("error")
    msg = str(ctx_error) if ctx_error is not None else first.get("msg", "Invalid value")
    return f"{field}: {msg}" if field else msg
