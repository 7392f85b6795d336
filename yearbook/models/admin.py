"""ORM model for administrators (the Admin principal)."""

from sqlalchemy import Column, ForeignKey, Integer, String

from yearbook.models.base import Base, TimestampMixin


class Admin(TimestampMixin, Base):
    """
    Administrator account.

    role: 'admin' or 'superadmin'. created_by_id is NULL for the bootstrap admin.
    """

    __tablename__ = "admins"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(255), nullable=False)
    email = Column(String(320), nullable=False, unique=True, index=True)
    password_hash = Column(String(255), nullable=False)
    role = Column(String(32), nullable=False, default="admin")
    created_by_id = Column(Integer, ForeignKey("admins.id"), nullable=True)
