"""Yearbook entries for students."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from yearbook.api.deps import get_current_user
from yearbook.core.database import get_db
from yearbook.schemas.auth import UserPrincipal
from yearbook.schemas.entry import BatchYearbook, EntryCreateRequest, EntryOut, EntryPage
from yearbook.services import entries as entry_service

router = APIRouter()

Page = Annotated[int, Query(ge=1)]
Limit = Annotated[int, Query(ge=1, le=entry_service.MAX_PAGE_SIZE)]


@router.post("/", response_model=EntryOut, status_code=status.HTTP_201_CREATED)
def create_entry(
    body: EntryCreateRequest,
    user: Annotated[UserPrincipal, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
) -> EntryOut:
    """Create the caller's entry; the image must already be hosted (image_url)."""
    entry = entry_service.create_entry(
        db,
        user,
        message=body.message,
        image_url=body.image_url,
        activities=body.activities,
        ambition=body.ambition,
        memories=body.memories,
        message_to_classmates=body.message_to_classmates,
    )
    return EntryOut.model_validate(entry)


@router.get("/", response_model=BatchYearbook)
def get_batch_yearbook(
    user: Annotated[UserPrincipal, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
) -> BatchYearbook:
    """The caller's batch in roster order."""
    return entry_service.batch_yearbook(db, user)


@router.get("/user", response_model=EntryPage)
def get_user_entries(
    user: Annotated[UserPrincipal, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
    page: Page = 1,
    limit: Limit = entry_service.DEFAULT_PAGE_SIZE,
) -> EntryPage:
    return entry_service.user_entries(db, user, page, limit)


@router.get("/batch/{batch_id}", response_model=EntryPage)
def get_batch_entries(
    batch_id: int,
    _user: Annotated[UserPrincipal, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
    page: Page = 1,
    limit: Limit = entry_service.DEFAULT_PAGE_SIZE,
) -> EntryPage:
    return entry_service.batch_entries_page(db, batch_id, page, limit)
