"""Montage requests and status."""

from typing import Annotated

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from yearbook.api.deps import get_current_user, get_montage_queue
from yearbook.core.database import get_db
from yearbook.schemas.auth import UserPrincipal
from yearbook.schemas.montage import MontageCreateRequest, MontageOut, MontageQueuedResponse
from yearbook.services import montages as montage_service
from yearbook.services.montage_queue import MontageQueue

router = APIRouter()


@router.post("/", response_model=MontageQueuedResponse, status_code=status.HTTP_201_CREATED)
def request_montage(
    body: MontageCreateRequest,
    user: Annotated[UserPrincipal, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
    queue: Annotated[MontageQueue, Depends(get_montage_queue)],
) -> MontageQueuedResponse:
    """Queue a montage of entries from the caller's batch."""
    montage, job_id = montage_service.request_montage(
        db, user, queue, entry_ids=body.entry_ids, selected_audio=body.selected_audio
    )
    return MontageQueuedResponse(montage=MontageOut.model_validate(montage), job_id=job_id)


@router.get("/{montage_id}", response_model=MontageOut)
def get_montage_status(
    montage_id: int,
    user: Annotated[UserPrincipal, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
) -> MontageOut:
    return MontageOut.model_validate(montage_service.get_montage(db, user, montage_id))


@router.get("/", response_model=list[MontageOut])
def list_montages(
    user: Annotated[UserPrincipal, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
) -> list[MontageOut]:
    return [MontageOut.model_validate(m) for m in montage_service.user_montages(db, user)]
