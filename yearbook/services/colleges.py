"""College management (admin only)."""

import logging

from sqlalchemy import or_
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from yearbook.core.errors import BadRequestError, ConflictError, NotFoundError
from yearbook.models import College, Degree
from yearbook.schemas.college import DegreeIn

logger = logging.getLogger(__name__)


def _degrees(items: list[DegreeIn]) -> list[Degree]:
    return [Degree(name=d.name.strip(), code=d.code.strip(), duration=d.duration) for d in items]


def _commit(db: Session, message: str) -> None:
    try:
        db.commit()
    except IntegrityError as e:
        db.rollback()
        raise ConflictError(message) from e


def create_college(
    db: Session,
    *,
    name: str | None,
    code: str | None,
    degrees: list[DegreeIn] | None,
    created_by_id: int,
) -> College:
    if not name or not name.strip() or not code or not code.strip() or not degrees:
        raise BadRequestError("College name, code, and at least one degree are required")
    name, code = name.strip(), code.strip()

    existing = db.query(College).filter(or_(College.name == name, College.code == code)).first()
    if existing is not None:
        raise ConflictError("College with this name or code already exists")

    college = College(name=name, code=code, created_by_id=created_by_id, degrees=_degrees(degrees))
    db.add(college)
    _commit(db, "College with this name or code already exists")
    db.refresh(college)
    logger.info("College created", extra={"college_id": college.id, "admin_id": created_by_id})
    return college


def list_colleges(db: Session) -> list[College]:
    return db.query(College).order_by(College.name).all()


def get_college(db: Session, college_id: int) -> College:
    college = db.get(College, college_id)
    if college is None:
        raise NotFoundError("College not found")
    return college


def update_college(
    db: Session,
    college_id: int,
    *,
    name: str | None = None,
    code: str | None = None,
    degrees: list[DegreeIn] | None = None,
) -> College:
    """Apply the non-empty fields; degrees, when given, replace the whole list."""
    college = get_college(db, college_id)
    if name and name.strip():
        college.name = name.strip()
    if code and code.strip():
        college.code = code.strip()
    if degrees:
        college.degrees = _degrees(degrees)
    _commit(db, "College with this name or code already exists")
    db.refresh(college)
    return college


def delete_college(db: Session, college_id: int) -> None:
    college = get_college(db, college_id)
    db.delete(college)
    _commit(db, "College still has batches and cannot be deleted")
    logger.info("College deleted", extra={"college_id": college_id})
