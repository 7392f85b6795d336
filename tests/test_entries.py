"""Tests for yearbook entries: one per student, roster-ordered yearbook, pagination, moderation."""

import unittest

from support import make_session_factory, seed_admin, seed_batch, seed_user

from yearbook.core.errors import BadRequestError, ConflictError, NotFoundError
from yearbook.schemas.auth import UserPrincipal
from yearbook.services import entries as entry_service


class EntriesTestCase(unittest.TestCase):
    def setUp(self) -> None:
        self.db = make_session_factory()()
        self.admin = seed_admin(self.db)
        self.batch = seed_batch(self.db, self.admin, enrollment_numbers=["E1", "E2", "E3"])
        self.ana = UserPrincipal.model_validate(seed_user(self.db, self.batch, "a@x.com", "E1", "Ana"))
        self.ben = UserPrincipal.model_validate(seed_user(self.db, self.batch, "b@x.com", "E2", "Ben"))
        self.cam = UserPrincipal.model_validate(seed_user(self.db, self.batch, "c@x.com", "E3", "Cam"))

    def tearDown(self) -> None:
        self.db.close()

    def _entry(self, user: UserPrincipal, message: str = "Great years"):
        return entry_service.create_entry(
            self.db,
            user,
            message=message,
            image_url="https://img.example/a.jpg",
            activities=["chess", " ", "debate "],
        )


class TestCreateEntry(EntriesTestCase):
    def test_entry_copies_batch_placement(self) -> None:
        entry = self._entry(self.ana)
        self.assertEqual(entry.batch_id, self.batch.id)
        self.assertEqual(entry.college_id, self.batch.college_id)
        self.assertEqual(entry.degree, "BSc")
        self.assertEqual(entry.activities, ["chess", "debate"])

    def test_one_entry_per_student(self) -> None:
        self._entry(self.ana)
        with self.assertRaises(ConflictError):
            self._entry(self.ana, message="Again")

    def test_message_and_image_required(self) -> None:
        with self.assertRaises(BadRequestError):
            entry_service.create_entry(self.db, self.ana, message=" ", image_url="https://img.example/a.jpg")
        with self.assertRaises(BadRequestError):
            entry_service.create_entry(self.db, self.ana, message="Hi", image_url=None)


class TestBatchYearbook(EntriesTestCase):
    def test_slots_follow_roster_order(self) -> None:
        self._entry(self.cam, message="from cam")
        self._entry(self.ana, message="from ana")

        yearbook = entry_service.batch_yearbook(self.db, self.ben)

        self.assertEqual(yearbook.batch_info.total_students, 3)
        self.assertEqual(yearbook.batch_info.enrollment_numbers, ["E1", "E2", "E3"])
        self.assertEqual(yearbook.entries[0].message, "from ana")
        self.assertIsNone(yearbook.entries[1])
        self.assertEqual(yearbook.entries[2].message, "from cam")
        self.assertEqual(yearbook.entries[2].user.name, "Cam")


class TestPagination(EntriesTestCase):
    def test_batch_page_metadata(self) -> None:
        for user in (self.ana, self.ben, self.cam):
            self._entry(user)

        page = entry_service.batch_entries_page(self.db, self.batch.id, page=2, limit=2)

        self.assertEqual(page.pagination.total_entries, 3)
        self.assertEqual(page.pagination.total_pages, 2)
        self.assertEqual(page.pagination.current_page, 2)
        self.assertEqual(len(page.entries), 1)

    def test_user_entries_only_own(self) -> None:
        self._entry(self.ana)
        self._entry(self.ben)
        page = entry_service.user_entries(self.db, self.ana)
        self.assertEqual([e.user_id for e in page.entries], [self.ana.id])

    def test_unknown_batch(self) -> None:
        with self.assertRaises(NotFoundError):
            entry_service.batch_entries_page(self.db, 999)


class TestModeration(EntriesTestCase):
    def test_remove_entry(self) -> None:
        entry = self._entry(self.ana)
        self.assertEqual(len(entry_service.all_batch_entries(self.db, self.batch.id)), 1)
        entry_service.remove_entry(self.db, entry.id, self.admin.id)
        self.assertEqual(entry_service.all_batch_entries(self.db, self.batch.id), [])
        with self.assertRaises(NotFoundError):
            entry_service.remove_entry(self.db, entry.id, self.admin.id)
