"""ORM model for direct and anonymous messages between classmates."""

from sqlalchemy import Boolean, Column, ForeignKey, Index, Integer, String, Text
from sqlalchemy.orm import relationship

from yearbook.models.base import Base, TimestampMixin


class PrivateMessage(TimestampMixin, Base):
    """
    Message between two users of the same batch.

    anonymous_thread_id groups an anonymous message with the replies to it.
    """

    __tablename__ = "private_messages"
    __table_args__ = (
        Index("ix_private_messages_pair", "sender_id", "recipient_id", "created_at"),
        Index("ix_private_messages_thread", "anonymous_thread_id", "created_at"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    sender_id = Column(Integer, ForeignKey("users.id"), nullable=False)
    recipient_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    message = Column(Text, nullable=False)
    batch_id = Column(Integer, ForeignKey("batches.id"), nullable=False)
    is_anonymous = Column(Boolean, nullable=False, default=False)
    anonymous_thread_id = Column(String(64), nullable=True)
    is_reply_to_anonymous = Column(Boolean, nullable=False, default=False)
    is_read = Column(Boolean, nullable=False, default=False)

    sender = relationship("User", foreign_keys=[sender_id])
    recipient = relationship("User", foreign_keys=[recipient_id])
