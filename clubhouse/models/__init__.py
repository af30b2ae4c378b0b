"""SQLAlchemy ORM models."""

from clubhouse.models.base import Base
from clubhouse.models.session import SessionRecord
from clubhouse.models.user import User

__all__ = ["Base", "SessionRecord", "User"]
