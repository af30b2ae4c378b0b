"""Signup and login: validation results in, stored accounts out."""

import logging

from sqlalchemy.orm import Session

from clubhouse.core.security import dummy_password_hash, hash_password, verify_password
from clubhouse.models import User
from clubhouse.schemas.auth import LoginForm, SignupForm
from clubhouse.services.users import find_by_email, insert_user

logger = logging.getLogger(__name__)

AUTH_FAILED_MESSAGE = "Incorrect email or password."
EMAIL_TAKEN_MESSAGE = "An account with that email already exists."


class AuthenticationError(Exception):
    """Login rejected. The message never reveals whether the email exists."""

    def __init__(self, message: str = AUTH_FAILED_MESSAGE) -> None:
        super().__init__(message)
        self.message = message


class EmailTakenError(Exception):
    """Signup rejected because an account already uses this email."""

    def __init__(self, message: str = EMAIL_TAKEN_MESSAGE) -> None:
        super().__init__(message)
        self.message = message


def register(db: Session, form: SignupForm) -> User:
    """Create an account from a validated signup form. First account becomes admin."""
    if find_by_email(db, form.email) is not None:
        raise EmailTakenError()
    user = insert_user(
        db,
        name=form.name,
        email=form.email,
        password_hash=hash_password(form.password),
    )
    logger.info("Signup: user_id=%s role=%s", user.id, user.role)
    return user


def authenticate(db: Session, form: LoginForm) -> User:
    """Return the account matching the credentials or raise AuthenticationError."""
    user = find_by_email(db, form.email)
    if user is None:
        # Same bcrypt cost as a real check so response time does not reveal the email.
        verify_password(form.password, dummy_password_hash())
        logger.info("Login failed")
        raise AuthenticationError()
    if not verify_password(form.password, user.password_hash):
        logger.info("Login failed")
        raise AuthenticationError()
    logger.info("Login: user_id=%s", user.id)
    return user
