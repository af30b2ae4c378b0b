"""ORM model for member accounts (credentials and role)."""

from sqlalchemy import Boolean, Column, DateTime, Integer, String, func

from clubhouse.models.base import Base

ROLE_USER = "user"
ROLE_ADMIN = "admin"
ROLES = (ROLE_USER, ROLE_ADMIN)


class User(Base):
    """
    Member account used for login and role-based access control.

    role: 'admin' or 'user'
    founder: True on the first account ever created, NULL on every other one.
    The unique constraint admits a single True row, which makes the
    first-account-becomes-admin rule safe under concurrent signups.
    """

    __tablename__ = "users"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(20), nullable=False)
    email = Column(String(320), nullable=False, index=True)
    password_hash = Column(String(255), nullable=False)
    role = Column(String(32), nullable=False, default=ROLE_USER)
    founder = Column(Boolean, nullable=True, unique=True)
    created_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )
