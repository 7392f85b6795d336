"""Student profile operations."""

from sqlalchemy.orm import Session

from yearbook.core.errors import NotFoundError
from yearbook.models import User
from yearbook.schemas.auth import UserPrincipal


def update_profile(
    db: Session,
    user: UserPrincipal,
    *,
    name: str | None = None,
    profile_picture: str | None = None,
) -> User:
    row = db.get(User, user.id)
    if row is None:
        raise NotFoundError("User not found")
    if name and name.strip():
        row.name = name.strip()
    if profile_picture and profile_picture.strip():
        row.profile_picture = profile_picture.strip()
    db.commit()
    db.refresh(row)
    return row


def classmates(db: Session, user: UserPrincipal) -> list[User]:
    return (
        db.query(User)
        .filter(User.batch_id == user.batch_id, User.id != user.id)
        .order_by(User.enrollment_number)
        .all()
    )
