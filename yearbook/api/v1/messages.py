"""Private and anonymous messages between classmates."""

from typing import Annotated

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from yearbook.api.deps import get_current_user
from yearbook.core.database import get_db
from yearbook.schemas.auth import MessageResponse, UserPrincipal
from yearbook.schemas.message import (
    AnonymousThread,
    MessageOut,
    ReplyAnonymousRequest,
    SendMessageRequest,
)
from yearbook.services import messages as message_service

router = APIRouter()

CurrentUser = Annotated[UserPrincipal, Depends(get_current_user)]
Db = Annotated[Session, Depends(get_db)]


@router.post("/", response_model=MessageOut, status_code=status.HTTP_201_CREATED)
def send_message(body: SendMessageRequest, user: CurrentUser, db: Db) -> MessageOut:
    row = message_service.send_message(
        db,
        user,
        recipient_id=body.recipient_id,
        message=body.message,
        is_anonymous=body.is_anonymous,
        anonymous_thread_id=body.anonymous_thread_id,
    )
    return message_service.to_message_out(row)


@router.get("/", response_model=list[MessageOut])
def received_messages(user: CurrentUser, db: Db) -> list[MessageOut]:
    """Messages sent to the caller; anonymous senders are hidden."""
    return message_service.received_messages(db, user)


@router.get("/sent", response_model=list[MessageOut])
def sent_messages(user: CurrentUser, db: Db) -> list[MessageOut]:
    return message_service.sent_messages(db, user)


@router.get("/anonymous-threads", response_model=list[AnonymousThread])
def anonymous_threads(user: CurrentUser, db: Db) -> list[AnonymousThread]:
    return message_service.anonymous_threads(db, user)


@router.post("/reply-anonymous", response_model=MessageOut, status_code=status.HTTP_201_CREATED)
def reply_anonymous(body: ReplyAnonymousRequest, user: CurrentUser, db: Db) -> MessageOut:
    row = message_service.reply_to_anonymous(
        db, user, anonymous_thread_id=body.anonymous_thread_id, message=body.message
    )
    return message_service.to_message_out(row)


@router.patch("/{message_id}/read", response_model=MessageOut)
def mark_read(message_id: int, user: CurrentUser, db: Db) -> MessageOut:
    row = message_service.mark_as_read(db, user, message_id)
    return message_service.to_message_out(row, hide_sender=row.is_anonymous)


@router.delete("/{message_id}", response_model=MessageResponse)
def delete_message(message_id: int, user: CurrentUser, db: Db) -> MessageResponse:
    message_service.delete_message(db, user, message_id)
    return MessageResponse(message="Message deleted successfully")
