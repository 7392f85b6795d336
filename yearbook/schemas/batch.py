"""Schemas for batches."""

from datetime import datetime

from pydantic import BaseModel


class BatchOut(BaseModel):
    id: int
    batch_year: str
    batch_code: str
    college_id: int
    degree: str
    enrollment_numbers: list[str]
    created_by_id: int
    created_at: datetime | None = None

    class Config:
        from_attributes = True


class BatchInfo(BaseModel):
    """Summary shown above a batch's yearbook."""

    total_students: int
    batch_year: str
    batch_code: str
    enrollment_numbers: list[str]
