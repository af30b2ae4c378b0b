"""Pydantic request/response schemas."""

from clubhouse.schemas.auth import (
    LoginForm,
    SessionUser,
    SignupForm,
    UserListItem,
    first_error_message,
)
from clubhouse.schemas.health import HealthResponse

__all__ = [
    "HealthResponse",
    "LoginForm",
    "SessionUser",
    "SignupForm",
    "UserListItem",
    "first_error_message",
]
