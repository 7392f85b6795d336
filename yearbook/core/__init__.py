"""Core app configuration, database and security primitives."""

from yearbook.core.config import get_settings, settings
from yearbook.core.database import get_db

__all__ = ["get_settings", "settings", "get_db"]
