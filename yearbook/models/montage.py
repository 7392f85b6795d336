"""ORM model for requested photo montages."""

from sqlalchemy import JSON, Column, DateTime, ForeignKey, Integer, String

from yearbook.models.base import Base, TimestampMixin

MONTAGE_STATUSES = ("queued", "processing", "completed", "failed")


class Montage(TimestampMixin, Base):
    """Montage request; status moves queued -> processing -> completed | failed."""

    __tablename__ = "montages"

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    image_urls = Column(JSON, nullable=False, default=list)
    selected_audio = Column(String(255), nullable=False)
    status = Column(String(16), nullable=False, default="queued")
    output_url = Column(String(2048), nullable=False, default="")
    completed_at = Column(DateTime(timezone=True), nullable=True)
    batch_id = Column(Integer, ForeignKey("batches.id"), nullable=False)
