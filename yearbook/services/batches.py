"""Batch creation from enrollment spreadsheets, and batch lookups."""

import logging
import secrets
import string
import time

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from yearbook.core.errors import BadRequestError, ConflictError, NotFoundError
from yearbook.models import Batch, College
from yearbook.services.enrollment_sheet import read_enrollment_numbers

logger = logging.getLogger(__name__)

_BASE36 = string.digits + string.ascii_lowercase


def generate_batch_code() -> str:
    """BATCH_<epoch millis>_<9 random base36 chars>."""
    suffix = "".join(secrets.choice(_BASE36) for _ in range(9))
    return f"BATCH_{int(time.time() * 1000)}_{suffix}"


def is_spreadsheet_content_type(content_type: str | None) -> bool:
    ct = (content_type or "").lower()
    return "spreadsheet" in ct or "excel" in ct


def create_batch(
    db: Session,
    *,
    batch_year: str | None,
    college_id: int | None,
    degree: str | None,
    sheet: bytes | None,
    sheet_content_type: str | None,
    max_sheet_bytes: int,
    created_by_id: int,
) -> Batch:
    if not batch_year or not batch_year.strip() or not college_id or not degree or not degree.strip():
        raise BadRequestError("Batch year, college, and degree are required")
    if sheet is None:
        raise BadRequestError("Excel file is required")
    if not is_spreadsheet_content_type(sheet_content_type):
        raise BadRequestError("Please upload a valid Excel file (.xlsx)")
    if len(sheet) > max_sheet_bytes:
        raise BadRequestError(
            f"Excel file size should be less than {max_sheet_bytes // (1024 * 1024)}MB"
        )
    batch_year, degree = batch_year.strip(), degree.strip()

    college = db.get(College, college_id)
    if college is None:
        raise NotFoundError("College not found")
    if not any(d.name == degree for d in college.degrees):
        raise BadRequestError("Specified degree is not offered by this college")

    existing = (
        db.query(Batch)
        .filter(Batch.batch_year == batch_year, Batch.college_id == college_id, Batch.degree == degree)
        .first()
    )
    if existing is not None:
        raise ConflictError("A batch for this year, college, and degree already exists")

    enrollment_numbers = read_enrollment_numbers(sheet)

    batch = Batch(
        batch_year=batch_year,
        batch_code=generate_batch_code(),
        college_id=college_id,
        degree=degree,
        enrollment_numbers=enrollment_numbers,
        created_by_id=created_by_id,
    )
    db.add(batch)
    try:
        db.commit()
    except IntegrityError as e:
        db.rollback()
        raise ConflictError("A batch for this year, college, and degree already exists") from e
    db.refresh(batch)
    logger.info(
        "Batch created",
        extra={
            "batch_id": batch.id,
            "college_id": college_id,
            "students": len(enrollment_numbers),
        },
    )
    return batch


def get_batch(db: Session, batch_id: int) -> Batch:
    batch = db.get(Batch, batch_id)
    if batch is None:
        raise NotFoundError("Batch not found")
    return batch
