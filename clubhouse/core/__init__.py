"""Core app configuration, database and security primitives."""

from clubhouse.core.config import get_settings, settings
from clubhouse.core.database import get_db

__all__ = ["get_settings", "settings", "get_db"]
