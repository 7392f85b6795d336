"""Tests for SessionManager and RefreshSessionStore against an in-memory database."""

import unittest
from datetime import UTC, datetime, timedelta
from unittest.mock import MagicMock

from sqlalchemy.exc import OperationalError
from support import make_session_factory

from yearbook.core.errors import InternalError
from yearbook.models import RefreshSession
from yearbook.services.session_manager import SessionManager
from yearbook.services.session_store import RefreshSessionStore


class FakeClock:
    def __init__(self, now: datetime) -> None:
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, delta: timedelta) -> None:
        self.now = self.now + delta


class TestSessionLifecycle(unittest.TestCase):
    def setUp(self) -> None:
        self.db = make_session_factory()()
        self.clock = FakeClock(datetime(2026, 1, 1, 12, 0, tzinfo=UTC))
        self.sessions = SessionManager(self.db, lifetime=timedelta(days=15), clock=self.clock)

    def tearDown(self) -> None:
        self.db.close()

    def test_issue_persists_valid_row(self) -> None:
        token = self.sessions.issue_refresh_session(1, "User")
        row = self.db.query(RefreshSession).filter_by(token=token).one()
        self.assertTrue(row.is_valid)
        self.assertEqual(row.principal_type, "User")
        self.assertEqual(row.expires_at.replace(tzinfo=UTC), self.clock.now + timedelta(days=15))

    def test_verify_returns_session(self) -> None:
        token = self.sessions.issue_refresh_session(1, "Admin")
        session = self.sessions.verify_refresh_session(token)
        self.assertIsNotNone(session)
        self.assertEqual(session.principal_id, 1)
        self.assertEqual(session.principal_type, "Admin")

    def test_unknown_or_empty_token_is_none(self) -> None:
        self.assertIsNone(self.sessions.verify_refresh_session("f" * 80))
        self.assertIsNone(self.sessions.verify_refresh_session(""))

    def test_usable_until_expiry_then_never(self) -> None:
        token = self.sessions.issue_refresh_session(1, "User")
        self.clock.advance(timedelta(days=14, hours=23))
        self.assertIsNotNone(self.sessions.verify_refresh_session(token))
        self.clock.advance(timedelta(hours=1))
        self.assertIsNone(self.sessions.verify_refresh_session(token))
        self.clock.advance(timedelta(days=1))
        self.assertIsNone(self.sessions.verify_refresh_session(token))

    def test_invalidate_is_idempotent(self) -> None:
        token = self.sessions.issue_refresh_session(1, "User")
        self.sessions.invalidate(token)
        self.sessions.invalidate(token)
        self.sessions.invalidate("unknown-token")
        self.assertIsNone(self.sessions.verify_refresh_session(token))

    def test_invalidate_all_is_scoped_to_principal(self) -> None:
        a1 = self.sessions.issue_refresh_session(1, "User")
        a2 = self.sessions.issue_refresh_session(1, "User")
        other_user = self.sessions.issue_refresh_session(2, "User")
        same_id_admin = self.sessions.issue_refresh_session(1, "Admin")

        self.assertEqual(self.sessions.invalidate_all(1, "User"), 2)

        self.assertIsNone(self.sessions.verify_refresh_session(a1))
        self.assertIsNone(self.sessions.verify_refresh_session(a2))
        self.assertIsNotNone(self.sessions.verify_refresh_session(other_user))
        self.assertIsNotNone(self.sessions.verify_refresh_session(same_id_admin))

    def test_sessions_are_independent(self) -> None:
        first = self.sessions.issue_refresh_session(1, "User")
        second = self.sessions.issue_refresh_session(1, "User")
        self.assertNotEqual(first, second)
        self.sessions.invalidate(first)
        self.assertIsNotNone(self.sessions.verify_refresh_session(second))


class TestStoreFailure(unittest.TestCase):
    """A failed commit is rolled back and surfaces as InternalError."""

    def test_commit_failure_raises_internal_error(self) -> None:
        db = MagicMock()
        db.commit.side_effect = OperationalError("UPDATE refresh_sessions", {}, Exception("db down"))
        store = RefreshSessionStore(db)
        with self.assertLogs("yearbook.services.session_store", level="ERROR"):
            with self.assertRaises(InternalError) as ctx:
                store.mark_invalid("f" * 80)
        self.assertEqual(ctx.exception.status_code, 500)
        db.rollback.assert_called_once()

    def test_insert_failure_raises_internal_error(self) -> None:
        db = MagicMock()
        db.commit.side_effect = OperationalError("INSERT", {}, Exception("db down"))
        with self.assertLogs("yearbook.services.session_store", level="ERROR"):
            with self.assertRaises(InternalError):
                SessionManager(db).issue_refresh_session(1, "User")
        db.refresh.assert_not_called()
