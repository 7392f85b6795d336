"""ORM model for persisted refresh sessions."""

from sqlalchemy import Boolean, Column, DateTime, Index, Integer, String, func

from yearbook.models.base import Base


class RefreshSession(Base):
    """
    Opaque refresh token owned by a User or Admin.

    A row is usable iff is_valid and now < expires_at. Rows are invalidated,
    never re-validated; the session sweep deletes inert rows.
    """

    __tablename__ = "refresh_sessions"
    __table_args__ = (
        Index("ix_refresh_sessions_principal", "principal_id", "principal_type"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    principal_id = Column(Integer, nullable=False)
    # 'User' or 'Admin'
    principal_type = Column(String(16), nullable=False)
    token = Column(String(128), nullable=False, unique=True, index=True)
    expires_at = Column(DateTime(timezone=True), nullable=False, index=True)
    is_valid = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
