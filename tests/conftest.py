"""Point the app at an in-memory SQLite database before any clubhouse module is imported."""

import os

os.environ["DATABASE_URL"] = "sqlite://"
os.environ.pop("DATABASE_NAME", None)
os.environ.setdefault("SESSION_SECRET", "test-session-secret")
os.environ.setdefault("SESSION_ENCRYPTION_SECRET", "test-encryption-secret")
