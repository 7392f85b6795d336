"""
CLI entrypoint for the refresh-session sweep. Run from cron, e.g.:

  python -m yearbook.session_sweep

Or daily: 0 3 * * * cd /path/to/yearbook && .venv/bin/python -m yearbook.session_sweep
"""

import logging
import sys

from sqlalchemy.exc import SQLAlchemyError

from yearbook.core.config import get_settings
from yearbook.core.errors import InternalError
from yearbook.core.database import SessionLocal
from yearbook.services.session_sweep import sweep_sessions

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s %(message)s",
    datefmt="%Y-%m-%dT%H:%M:%SZ",
)
logger = logging.getLogger(__name__)


def main() -> int:
    """Run the sweep: delete invalidated and expired refresh sessions."""
    settings = get_settings()
    db = SessionLocal()
    try:
        deleted = sweep_sessions(db, settings)
        logger.info("Session sweep completed: sessions_deleted=%s", deleted)
        return 0
    except (SQLAlchemyError, InternalError) as e:
        logger.exception("Session sweep failed: %s", e)
        return 1
    finally:
        db.close()


if __name__ == "__main__":
    sys.exit(main())
