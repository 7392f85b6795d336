"""Schemas for user profile endpoints."""

from pydantic import BaseModel, Field


class ProfileUpdateRequest(BaseModel):
    """Fields left empty keep their current value."""

    name: str | None = Field(default=None, max_length=255)
    profile_picture: str | None = Field(default=None, max_length=2048)


class Classmate(BaseModel):
    id: int
    name: str
    enrollment_number: str
    profile_picture: str = ""

    class Config:
        from_attributes = True
