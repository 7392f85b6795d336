"""Persistence of opaque refresh sessions."""

from datetime import datetime

import logging

from sqlalchemy import or_
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from yearbook.core.errors import InternalError
from yearbook.models import RefreshSession

logger = logging.getLogger(__name__)


class RefreshSessionStore:
    """Narrow read/write surface over the refresh_sessions table."""

    def __init__(self, db: Session) -> None:
        self.db = db

    def insert(
        self,
        *,
        principal_id: int,
        principal_type: str,
        token: str,
        expires_at: datetime,
    ) -> RefreshSession:
        row = RefreshSession(
            principal_id=principal_id,
            principal_type=principal_type,
            token=token,
            expires_at=expires_at,
            is_valid=True,
        )
        self.db.add(row)
        self._commit()
        self.db.refresh(row)
        return row

    def find_usable(self, token: str, now: datetime) -> RefreshSession | None:
        """Return the session only if it exists, is valid and has not expired."""
        return (
            self.db.query(RefreshSession)
            .filter(
                RefreshSession.token == token,
                RefreshSession.is_valid.is_(True),
                RefreshSession.expires_at > now,
            )
            .first()
        )

    def mark_invalid(self, token: str) -> int:
        """Invalidate the row holding token. Returns rows affected (0 or 1)."""
        count = (
            self.db.query(RefreshSession)
            .filter(RefreshSession.token == token)
            .update({RefreshSession.is_valid: False}, synchronize_session=False)
        )
        self._commit()
        return count

    def mark_all_invalid(self, principal_id: int, principal_type: str) -> int:
        """Invalidate every session of one principal. Returns rows affected."""
        count = (
            self.db.query(RefreshSession)
            .filter(
                RefreshSession.principal_id == principal_id,
                RefreshSession.principal_type == principal_type,
            )
            .update({RefreshSession.is_valid: False}, synchronize_session=False)
        )
        self._commit()
        return count

    def delete_inert(self, now: datetime) -> int:
        """Delete invalidated or expired rows. Returns rows deleted."""
        count = (
            self.db.query(RefreshSession)
            .filter(or_(RefreshSession.is_valid.is_(False), RefreshSession.expires_at <= now))
            .delete(synchronize_session=False)
        )
        self._commit()
        return count

    def _commit(self) -> None:
        try:
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error("Refresh session store commit failed: %s", type(e).__name__)
            raise InternalError("Refresh session store unavailable") from e
