"""
Expired-session sweeper. Sessions past their TTL are already ignored on read;
this removes the dead rows. Schedule it from cron:

  */15 * * * * cd /path/to/clubhouse && .venv/bin/python -m clubhouse.retention
"""

import logging
import sys

from clubhouse.core.database import SessionLocal
from clubhouse.services.sessions import purge_expired_sessions

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s %(message)s",
    datefmt="%Y-%m-%dT%H:%M:%SZ",
)
logger = logging.getLogger(__name__)


def main() -> int:
    """Sweep the sessions table once. Exit status 0 on success, 1 if the store failed."""
    db = SessionLocal()
    try:
        removed = purge_expired_sessions(db)
        logger.info("Session sweep done: removed=%s", removed)
        return 0
    except Exception as e:
        logger.exception("Session sweep failed: %s", e)
        return 1
    finally:
        db.close()


if __name__ == "__main__":
    sys.exit(main())
