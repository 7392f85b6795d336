"""Montage requests from a student's batch entries."""

import logging

from sqlalchemy.orm import Session

from yearbook.core.errors import BadRequestError, ForbiddenError, NotFoundError
from yearbook.models import Entry, Montage
from yearbook.schemas.auth import UserPrincipal
from yearbook.services.montage_queue import MontageJob, MontageQueue

logger = logging.getLogger(__name__)


def request_montage(
    db: Session,
    user: UserPrincipal,
    queue: MontageQueue,
    *,
    entry_ids: list[int] | None,
    selected_audio: str | None,
) -> tuple[Montage, str]:
    """Persist a queued montage of entries from the caller's batch and submit its job."""
    if not entry_ids or not selected_audio or not selected_audio.strip():
        raise BadRequestError("Image IDs and audio selection are required")

    wanted = list(dict.fromkeys(entry_ids))
    entries = (
        db.query(Entry)
        .filter(Entry.id.in_(wanted), Entry.batch_id == user.batch_id)
        .all()
    )
    if len(entries) != len(wanted):
        raise BadRequestError("One or more images are invalid or inaccessible")

    by_id = {e.id: e for e in entries}
    image_urls = [by_id[i].image_url for i in wanted]
    montage = Montage(
        user_id=user.id,
        image_urls=image_urls,
        selected_audio=selected_audio.strip(),
        status="queued",
        batch_id=user.batch_id,
    )
    db.add(montage)
    db.commit()
    db.refresh(montage)

    job_id = queue.submit(
        MontageJob(montage_id=montage.id, image_urls=image_urls, selected_audio=montage.selected_audio)
    )
    return montage, job_id


def get_montage(db: Session, user: UserPrincipal, montage_id: int) -> Montage:
    montage = db.get(Montage, montage_id)
    if montage is None:
        raise NotFoundError("Montage request not found")
    if montage.user_id != user.id:
        raise ForbiddenError("You are not authorized to access this montage request")
    return montage


def user_montages(db: Session, user: UserPrincipal) -> list[Montage]:
    return (
        db.query(Montage)
        .filter(Montage.user_id == user.id)
        .order_by(Montage.created_at.desc(), Montage.id.desc())
        .all()
    )
