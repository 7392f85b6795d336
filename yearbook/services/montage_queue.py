"""Montage job submission and processing."""

import logging
import uuid
from collections.abc import Callable
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Protocol

from sqlalchemy.orm import Session, sessionmaker

from yearbook.models import Montage

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MontageJob:
    montage_id: int
    image_urls: list[str]
    selected_audio: str


# Takes a job, returns the URL of the rendered video.
MontageRenderer = Callable[[MontageJob], str]


class MontageQueue(Protocol):
    """Opaque submit-job capability used by the montage service."""

    def submit(self, job: MontageJob) -> str:
        """Enqueue job and return its id."""


def url_renderer(base_url: str) -> MontageRenderer:
    """Renderer that publishes montages under base_url/<montage id>.mp4."""

    def render(job: MontageJob) -> str:
        return f"{base_url.rstrip('/')}/{job.montage_id}.mp4"

    return render


def process_montage(db: Session, job: MontageJob, renderer: MontageRenderer) -> Montage | None:
    """
    Run one job: queued -> processing -> completed, or failed if rendering raises.

    Returns the updated montage, or None if it was deleted before the job ran.
    """
    montage = db.get(Montage, job.montage_id)
    if montage is None:
        logger.warning("Montage vanished before processing", extra={"montage_id": job.montage_id})
        return None

    montage.status = "processing"
    db.commit()
    try:
        output_url = renderer(job)
    except Exception:
        logger.exception("Montage rendering failed", extra={"montage_id": job.montage_id})
        montage.status = "failed"
        db.commit()
        return montage

    montage.status = "completed"
    montage.output_url = output_url
    montage.completed_at = datetime.now(UTC)
    db.commit()
    logger.info("Montage completed", extra={"montage_id": job.montage_id})
    return montage


class ThreadPoolMontageQueue:
    """Runs montage jobs on a small thread pool, each with its own DB session."""

    def __init__(
        self,
        session_factory: sessionmaker,
        renderer: MontageRenderer,
        max_workers: int = 2,
    ) -> None:
        self.session_factory = session_factory
        self.renderer = renderer
        self._executor = ThreadPoolExecutor(max_workers=max_workers, thread_name_prefix="montage")

    def submit(self, job: MontageJob) -> str:
        job_id = uuid.uuid4().hex
        self._executor.submit(self._run, job_id, job)
        logger.info("Montage job queued", extra={"job_id": job_id, "montage_id": job.montage_id})
        return job_id

    def _run(self, job_id: str, job: MontageJob) -> None:
        db = self.session_factory()
        try:
            process_montage(db, job, self.renderer)
        except Exception:
            logger.exception("Montage job crashed", extra={"job_id": job_id})
        finally:
            db.close()

    def shutdown(self) -> None:
        self._executor.shutdown(wait=True)
