"""Refresh-session issuance, verification and invalidation."""

import logging
from collections.abc import Callable
from datetime import UTC, datetime, timedelta

from sqlalchemy.orm import Session

from yearbook.core.config import settings
from yearbook.core.security import generate_refresh_token
from yearbook.models import RefreshSession
from yearbook.services.session_store import RefreshSessionStore

logger = logging.getLogger(__name__)


def utc_now() -> datetime:
    return datetime.now(UTC)


class SessionManager:
    """
    Bridges refresh tokens and the session store.

    Invalidation is idempotent: unknown or already-invalid tokens are a no-op.
    Verification returns None instead of raising; callers map that to 401.
    """

    def __init__(
        self,
        db: Session,
        lifetime: timedelta | None = None,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        self.store = RefreshSessionStore(db)
        self.lifetime = lifetime or timedelta(days=settings.REFRESH_TOKEN_EXPIRE_DAYS)
        self.clock = clock

    def issue_refresh_session(self, principal_id: int, principal_type: str) -> str:
        """Persist a new session and return its opaque token."""
        token = generate_refresh_token()
        self.store.insert(
            principal_id=principal_id,
            principal_type=principal_type,
            token=token,
            expires_at=self.clock() + self.lifetime,
        )
        logger.info(
            "Refresh session issued",
            extra={"principal_id": principal_id, "principal_type": principal_type},
        )
        return token

    def verify_refresh_session(self, token: str) -> RefreshSession | None:
        if not token:
            return None
        return self.store.find_usable(token, self.clock())

    def invalidate(self, token: str) -> None:
        if not token:
            return
        self.store.mark_invalid(token)

    def invalidate_all(self, principal_id: int, principal_type: str) -> int:
        count = self.store.mark_all_invalid(principal_id, principal_type)
        logger.info(
            "Refresh sessions revoked",
            extra={
                "principal_id": principal_id,
                "principal_type": principal_type,
                "sessions_revoked": count,
            },
        )
        return count
