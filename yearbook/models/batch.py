"""ORM model for graduating batches."""

from sqlalchemy import JSON, Column, ForeignKey, Integer, String, UniqueConstraint
from sqlalchemy.orm import relationship

from yearbook.models.base import Base, TimestampMixin


class Batch(TimestampMixin, Base):
    """
    One graduating class of a college degree.

    enrollment_numbers is the ordered roster read from the uploaded sheet;
    students register with batch_code and an enrollment number from the roster.
    """

    __tablename__ = "batches"
    __table_args__ = (
        UniqueConstraint("batch_year", "college_id", "degree", name="uq_batches_year_college_degree"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    batch_year = Column(String(16), nullable=False)
    batch_code = Column(String(64), nullable=False, unique=True, index=True)
    college_id = Column(Integer, ForeignKey("colleges.id"), nullable=False, index=True)
    degree = Column(String(255), nullable=False)
    enrollment_numbers = Column(JSON, nullable=False, default=list)
    created_by_id = Column(Integer, ForeignKey("admins.id"), nullable=False)

    college = relationship("College")
