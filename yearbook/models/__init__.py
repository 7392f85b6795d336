"""SQLAlchemy ORM models."""

from yearbook.models.admin import Admin
from yearbook.models.base import Base
from yearbook.models.batch import Batch
from yearbook.models.college import College, Degree
from yearbook.models.entry import Entry
from yearbook.models.montage import Montage
from yearbook.models.private_message import PrivateMessage
from yearbook.models.refresh_session import RefreshSession
from yearbook.models.user import User

__all__ = [
    "Admin",
    "Base",
    "Batch",
    "College",
    "Degree",
    "Entry",
    "Montage",
    "PrivateMessage",
    "RefreshSession",
    "User",
]
