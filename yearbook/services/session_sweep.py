"""Session sweep: delete refresh sessions that are invalidated or expired."""

import logging
from datetime import UTC, datetime
from typing import TYPE_CHECKING

from sqlalchemy.orm import Session

from yearbook.services.session_store import RefreshSessionStore

if TYPE_CHECKING:
    from yearbook.core.config import Settings

logger = logging.getLogger(__name__)


def sweep_sessions(session: Session, settings: "Settings", now: datetime | None = None) -> int:
    """
    Delete inert refresh-session rows and return how many were removed.

    Inert rows are never usable again, so removing them changes no behavior.
    Idempotent: safe to run repeatedly.
    """
    if not settings.SESSION_SWEEP_ENABLED:
        logger.info("Session sweep is disabled (SESSION_SWEEP_ENABLED=false); skipping.")
        return 0

    cutoff = now or datetime.now(UTC)
    deleted_count = RefreshSessionStore(session).delete_inert(cutoff)
    if deleted_count > 0:
        logger.info(
            "Session sweep run: cutoff=%s, sessions_deleted=%s",
            cutoff.isoformat(),
            deleted_count,
        )
    return deleted_count
