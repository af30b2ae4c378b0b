"""Unit and integration tests for the expired-session purge and its CLI."""

import unittest
from datetime import UTC, datetime, timedelta
from unittest.mock import MagicMock, patch

from app_harness import DatabaseTestCase
from clubhouse import retention
from clubhouse.core.database import SessionLocal
from clubhouse.models import SessionRecord
from clubhouse.services.sessions import purge_expired_sessions


class TestPurgeNothingExpired(unittest.TestCase):
    """When no session has expired, purge_expired_sessions returns 0."""

    def test_returns_zero(self) -> None:
        session = MagicMock()
        session.query.return_value.filter.return_value.delete.return_value = 0
        self.assertEqual(purge_expired_sessions(session), 0)
        session.commit.assert_called_once()


class TestPurgeDeletesExpired(unittest.TestCase):
    """When sessions have expired, purge_expired_sessions deletes them and returns the count."""

    def test_deletes_expired(self) -> None:
        session = MagicMock()
        session.query.return_value.filter.return_value.delete.return_value = 3
        self.assertEqual(purge_expired_sessions(session), 3)
        session.query.assert_called_once_with(SessionRecord)
        session.commit.assert_called_once()


class TestRetentionCli(unittest.TestCase):
    """python -m clubhouse.retention exits 0 on success and 1 on failure, always closing the session."""

    def test_success_exit_code(self) -> None:
        db = MagicMock()
        with patch.object(retention, "SessionLocal", return_value=db), patch.object(
            retention, "purge_expired_sessions", return_value=2
        ) as purge:
            self.assertEqual(retention.main(), 0)
        purge.assert_called_once_with(db)
        db.close.assert_called_once()

    def test_failure_exit_code(self) -> None:
        db = MagicMock()
        with patch.object(retention, "SessionLocal", return_value=db), patch.object(
            retention, "purge_expired_sessions", side_effect=RuntimeError("db down")
        ):
            self.assertEqual(retention.main(), 1)
        db.close.assert_called_once()


class TestPurgeIntegration(DatabaseTestCase):
    """Against SQLite: only rows past expires_at are removed."""

    def test_purge_against_real_db(self) -> None:
        now = datetime.now(UTC)
        db = SessionLocal()
        try:
            db.add(SessionRecord(id="old", data="x", expires_at=now - timedelta(minutes=1)))
            db.add(SessionRecord(id="live", data="x", expires_at=now + timedelta(hours=1)))
            db.commit()
            self.assertEqual(purge_expired_sessions(db), 1)
            self.assertEqual([r.id for r in db.query(SessionRecord).all()], ["live"])
        finally:
            db.close()


if __name__ == "__main__":
    unittest.main()
