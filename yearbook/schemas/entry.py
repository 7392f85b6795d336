"""Schemas for yearbook entries."""

from datetime import datetime

from pydantic import BaseModel, Field

from yearbook.schemas.batch import BatchInfo


class EntryCreateRequest(BaseModel):
    message: str | None = Field(default=None, max_length=5000)
    image_url: str | None = Field(default=None, max_length=2048)
    activities: list[str] = Field(default_factory=list, max_length=50)
    ambition: str | None = Field(default=None, max_length=2000)
    memories: str | None = Field(default=None, max_length=5000)
    message_to_classmates: str | None = Field(default=None, max_length=5000)


class EntryAuthor(BaseModel):
    id: int
    name: str
    enrollment_number: str
    profile_picture: str = ""

    class Config:
        from_attributes = True


class EntryOut(BaseModel):
    id: int
    user_id: int
    image_url: str
    message: str
    activities: list[str]
    ambition: str | None = None
    memories: str | None = None
    message_to_classmates: str | None = None
    batch_id: int
    college_id: int
    degree: str
    is_moderated: bool = False
    created_at: datetime | None = None
    user: EntryAuthor | None = None

    class Config:
        from_attributes = True


class Pagination(BaseModel):
    total_entries: int
    total_pages: int
    current_page: int
    entries_per_page: int


class EntryPage(BaseModel):
    entries: list[EntryOut]
    pagination: Pagination


class BatchYearbook(BaseModel):
    """One slot per enrollment number in roster order; None where no entry exists."""

    entries: list[EntryOut | None]
    batch_info: BatchInfo
