"""Schemas for montage requests."""

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, Field


class MontageCreateRequest(BaseModel):
    entry_ids: list[int] | None = Field(default=None, max_length=200)
    selected_audio: str | None = Field(default=None, max_length=255)


class MontageOut(BaseModel):
    id: int
    user_id: int
    image_urls: list[str]
    selected_audio: str
    status: Literal["queued", "processing", "completed", "failed"]
    output_url: str = ""
    completed_at: datetime | None = None
    batch_id: int
    created_at: datetime | None = None

    class Config:
        from_attributes = True


class MontageQueuedResponse(BaseModel):
    montage: MontageOut
    job_id: str
