"""ORM model for students (the User principal)."""

from sqlalchemy import Boolean, Column, ForeignKey, Integer, String, UniqueConstraint
from sqlalchemy.orm import relationship

from yearbook.models.base import Base, TimestampMixin


class User(TimestampMixin, Base):
    """
    Student account registered against a batch.

    email is stored trimmed and lower-cased; password_hash is a bcrypt hash and
    is set only through CredentialStore.
    """

    __tablename__ = "users"
    __table_args__ = (
        UniqueConstraint("enrollment_number", "batch_id", name="uq_users_enrollment_batch"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(255), nullable=False)
    email = Column(String(320), nullable=False, unique=True, index=True)
    password_hash = Column(String(255), nullable=False)
    enrollment_number = Column(String(64), nullable=False)
    batch_id = Column(Integer, ForeignKey("batches.id"), nullable=False, index=True)
    profile_picture = Column(String(2048), nullable=False, default="")
    is_verified = Column(Boolean, nullable=False, default=False)

    batch = relationship("Batch")
