"""ORM models for colleges and the degrees they offer."""

from sqlalchemy import Column, ForeignKey, Integer, String
from sqlalchemy.orm import relationship

from yearbook.models.base import Base, TimestampMixin


class College(TimestampMixin, Base):
    __tablename__ = "colleges"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(255), nullable=False, unique=True)
    code = Column(String(64), nullable=False, unique=True)
    created_by_id = Column(Integer, ForeignKey("admins.id"), nullable=False)

    degrees = relationship(
        "Degree",
        back_populates="college",
        cascade="all, delete-orphan",
        order_by="Degree.id",
    )


class Degree(Base):
    """Degree offered by a college; duration is in years."""

    __tablename__ = "degrees"

    id = Column(Integer, primary_key=True, autoincrement=True)
    college_id = Column(
        Integer, ForeignKey("colleges.id", ondelete="CASCADE"), nullable=False, index=True
    )
    name = Column(String(255), nullable=False)
    code = Column(String(64), nullable=False)
    duration = Column(Integer, nullable=False)

    college = relationship("College", back_populates="degrees")
