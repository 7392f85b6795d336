"""Health endpoint payload."""

from typing import Literal

from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    """Liveness plus the result of a SELECT 1 against the yearbook database."""

    status: Literal["ok"] = "ok"
    environment: str = Field(description="APP_ENV the service runs under (dev or prod)")
    database: Literal["connected", "disconnected"] = Field(
        description="Whether the yearbook database answered SELECT 1",
    )
