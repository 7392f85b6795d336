"""Pydantic request/response schemas."""

from yearbook.schemas.auth import AdminPrincipal, Principal, UserPrincipal
from yearbook.schemas.health import HealthResponse

__all__ = [
    "AdminPrincipal",
    "HealthResponse",
    "Principal",
    "UserPrincipal",
]
