"""Schemas for college management."""

from datetime import datetime

from pydantic import BaseModel, Field


class DegreeIn(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    code: str = Field(..., min_length=1, max_length=64)
    duration: int = Field(..., ge=1, le=10, description="Duration in years")


class DegreeOut(DegreeIn):
    id: int

    class Config:
        from_attributes = True


class CollegeCreateRequest(BaseModel):
    name: str | None = Field(default=None, max_length=255)
    code: str | None = Field(default=None, max_length=64)
    degrees: list[DegreeIn] | None = None


class CollegeUpdateRequest(BaseModel):
    name: str | None = Field(default=None, max_length=255)
    code: str | None = Field(default=None, max_length=64)
    degrees: list[DegreeIn] | None = None


class CollegeOut(BaseModel):
    id: int
    name: str
    code: str
    degrees: list[DegreeOut]
    created_at: datetime | None = None
    updated_at: datetime | None = None

    class Config:
        from_attributes = True
