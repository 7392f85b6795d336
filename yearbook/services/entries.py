"""Yearbook entries: creation, browsing and moderation."""

import logging
import math

from sqlalchemy.orm import Session, joinedload

from yearbook.core.errors import BadRequestError, ConflictError, NotFoundError
from yearbook.models import Batch, Entry
from yearbook.schemas.auth import UserPrincipal
from yearbook.schemas.batch import BatchInfo
from yearbook.schemas.entry import BatchYearbook, EntryOut, EntryPage, Pagination
from yearbook.services.batches import get_batch

logger = logging.getLogger(__name__)

DEFAULT_PAGE_SIZE = 10
MAX_PAGE_SIZE = 100


def _user_batch(db: Session, user: UserPrincipal) -> Batch:
    batch = db.get(Batch, user.batch_id)
    if batch is None:
        raise NotFoundError("User's batch not found")
    return batch


def create_entry(
    db: Session,
    user: UserPrincipal,
    *,
    message: str | None,
    image_url: str | None,
    activities: list[str] | None = None,
    ambition: str | None = None,
    memories: str | None = None,
    message_to_classmates: str | None = None,
) -> Entry:
    """Create the caller's single entry for their batch."""
    if not message or not message.strip():
        raise BadRequestError("Message is required")
    if not image_url or not image_url.strip():
        raise BadRequestError("Image is required")

    batch = _user_batch(db, user)
    existing = (
        db.query(Entry).filter(Entry.user_id == user.id, Entry.batch_id == batch.id).first()
    )
    if existing is not None:
        raise ConflictError("You have already created an entry. Multiple entries are not allowed")

    entry = Entry(
        user_id=user.id,
        image_url=image_url.strip(),
        message=message.strip(),
        activities=[a.strip() for a in activities or [] if a and a.strip()],
        ambition=ambition.strip() if ambition else None,
        memories=memories.strip() if memories else None,
        message_to_classmates=message_to_classmates.strip() if message_to_classmates else None,
        batch_id=batch.id,
        college_id=batch.college_id,
        degree=batch.degree,
    )
    db.add(entry)
    db.commit()
    db.refresh(entry)
    logger.info("Entry created", extra={"entry_id": entry.id, "user_id": user.id})
    return entry


def batch_yearbook(db: Session, user: UserPrincipal) -> BatchYearbook:
    """The caller's batch laid out in roster order, None where a student has no entry."""
    batch = _user_batch(db, user)
    entries = (
        db.query(Entry)
        .options(joinedload(Entry.user))
        .filter(Entry.batch_id == batch.id)
        .all()
    )
    by_enrollment = {e.user.enrollment_number: e for e in entries}
    roster = list(batch.enrollment_numbers or [])
    slots = [by_enrollment.get(number) for number in roster]
    return BatchYearbook(
        entries=[EntryOut.model_validate(e) if e is not None else None for e in slots],
        batch_info=BatchInfo(
            total_students=len(roster),
            batch_year=batch.batch_year,
            batch_code=batch.batch_code,
            enrollment_numbers=roster,
        ),
    )


def _paginate(query, page: int, limit: int) -> EntryPage:
    page = max(page, 1)
    limit = min(max(limit, 1), MAX_PAGE_SIZE)
    total = query.count()
    rows = (
        query.order_by(Entry.created_at.desc(), Entry.id.desc())
        .offset((page - 1) * limit)
        .limit(limit)
        .all()
    )
    return EntryPage(
        entries=[EntryOut.model_validate(e) for e in rows],
        pagination=Pagination(
            total_entries=total,
            total_pages=math.ceil(total / limit),
            current_page=page,
            entries_per_page=limit,
        ),
    )


def user_entries(db: Session, user: UserPrincipal, page: int = 1, limit: int = DEFAULT_PAGE_SIZE) -> EntryPage:
    return _paginate(db.query(Entry).filter(Entry.user_id == user.id), page, limit)


def batch_entries_page(db: Session, batch_id: int, page: int = 1, limit: int = DEFAULT_PAGE_SIZE) -> EntryPage:
    batch = get_batch(db, batch_id)
    query = (
        db.query(Entry)
        .options(joinedload(Entry.user))
        .filter(
            Entry.batch_id == batch.id,
            Entry.college_id == batch.college_id,
            Entry.degree == batch.degree,
        )
    )
    return _paginate(query, page, limit)


def all_batch_entries(db: Session, batch_id: int) -> list[Entry]:
    """Every entry of a batch, newest first (moderation view)."""
    get_batch(db, batch_id)
    return (
        db.query(Entry)
        .options(joinedload(Entry.user))
        .filter(Entry.batch_id == batch_id)
        .order_by(Entry.created_at.desc(), Entry.id.desc())
        .all()
    )


def remove_entry(db: Session, entry_id: int, admin_id: int) -> None:
    entry = db.get(Entry, entry_id)
    if entry is None:
        raise NotFoundError("Entry not found")
    db.delete(entry)
    db.commit()
    logger.info("Entry removed", extra={"entry_id": entry_id, "admin_id": admin_id})
