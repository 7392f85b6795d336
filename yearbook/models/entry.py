"""ORM model for yearbook entries."""

from sqlalchemy import JSON, Boolean, Column, ForeignKey, Index, Integer, String, Text
from sqlalchemy.orm import relationship

from yearbook.models.base import Base, TimestampMixin


class Entry(TimestampMixin, Base):
    """A student's yearbook page: photo plus reflections. One per user per batch."""

    __tablename__ = "entries"
    __table_args__ = (
        Index("ix_entries_college_degree_batch", "college_id", "degree", "batch_id"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    image_url = Column(String(2048), nullable=False)
    message = Column(Text, nullable=False)
    activities = Column(JSON, nullable=False, default=list)
    ambition = Column(Text, nullable=True)
    memories = Column(Text, nullable=True)
    message_to_classmates = Column(Text, nullable=True)
    batch_id = Column(Integer, ForeignKey("batches.id"), nullable=False)
    college_id = Column(Integer, ForeignKey("colleges.id"), nullable=False)
    degree = Column(String(255), nullable=False)
    is_moderated = Column(Boolean, nullable=False, default=False)
    moderated_by_id = Column(Integer, ForeignKey("admins.id"), nullable=True)

    user = relationship("User")
