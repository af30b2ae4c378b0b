"""Database connection and session management."""

import logging
from collections.abc import Generator
from typing import Any

from sqlalchemy import create_engine, text
from sqlalchemy.engine import URL, make_url
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from clubhouse.core.config import Settings, settings

logger = logging.getLogger(__name__)


def resolve_database_url(cfg: Settings) -> URL:
    """Build the engine URL from DATABASE_URL, applying DATABASE_NAME when set."""
    raw = cfg.DATABASE_URL
    # SQLAlchemy only knows the "postgresql" dialect name
    if raw.startswith("postgres://") or raw.startswith("postgres+"):
        raw = "postgresql" + raw[len("postgres"):]
    url = make_url(raw)
    if cfg.DATABASE_NAME:
        url = url.set(database=cfg.DATABASE_NAME)
    return url


def _engine_options(url: URL) -> dict[str, Any]:
    if url.get_backend_name() == "sqlite":
        options: dict[str, Any] = {"connect_args": {"check_same_thread": False}}
        # In-memory SQLite lives on one connection; share it across threads.
        if not url.database or url.database == ":memory:":
            options["poolclass"] = StaticPool
        return options
    return {"pool_pre_ping": True}


_url = resolve_database_url(settings)
engine = create_engine(_url, echo=settings.DEBUG, **_engine_options(_url))

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def init_db() -> None:
    """Create the users and sessions tables if they do not exist."""
    from clubhouse.models import Base

    Base.metadata.create_all(bind=engine)
    logger.info("Database ready: backend=%s", engine.url.get_backend_name())


def get_db() -> Generator[Session, None, None]:
    """Dependency that yields a DB session and closes it when done."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def check_db_connected(db: Session) -> bool:
    """Run a trivial query to verify the database is reachable."""
    try:
        db.execute(text("SELECT 1"))
        return True
    except Exception:
        return False
