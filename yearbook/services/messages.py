"""Direct and anonymous messaging between classmates."""

import logging
import uuid

from sqlalchemy import func, or_
from sqlalchemy.orm import Session, joinedload

from yearbook.core.errors import BadRequestError, ForbiddenError, NotFoundError
from yearbook.models import PrivateMessage, User
from yearbook.schemas.auth import UserPrincipal
from yearbook.schemas.message import AnonymousThread, Correspondent, MessageOut

logger = logging.getLogger(__name__)


def to_message_out(message: PrivateMessage, hide_sender: bool = False) -> MessageOut:
    return MessageOut(
        id=message.id,
        sender=None if hide_sender else Correspondent.model_validate(message.sender),
        recipient=Correspondent.model_validate(message.recipient),
        message=message.message,
        batch_id=message.batch_id,
        is_anonymous=message.is_anonymous,
        anonymous_thread_id=message.anonymous_thread_id,
        is_reply_to_anonymous=message.is_reply_to_anonymous,
        is_read=message.is_read,
        created_at=message.created_at,
    )


def _with_people(db: Session):
    return db.query(PrivateMessage).options(
        joinedload(PrivateMessage.sender), joinedload(PrivateMessage.recipient)
    )


def send_message(
    db: Session,
    sender: UserPrincipal,
    *,
    recipient_id: int | None,
    message: str | None,
    is_anonymous: bool = False,
    anonymous_thread_id: str | None = None,
) -> PrivateMessage:
    """
    Send to a classmate. Anonymous messages get a thread id: the supplied one
    to continue a thread, otherwise a fresh UUID.
    """
    if not recipient_id or not message or not message.strip():
        raise BadRequestError("Recipient and message are required")

    recipient = db.get(User, recipient_id)
    if recipient is None:
        raise NotFoundError("Recipient not found")
    if recipient.batch_id != sender.batch_id:
        raise ForbiddenError("You can only send messages to users in your batch")

    thread_id = (anonymous_thread_id or uuid.uuid4().hex) if is_anonymous else None
    row = PrivateMessage(
        sender_id=sender.id,
        recipient_id=recipient.id,
        message=message.strip(),
        batch_id=sender.batch_id,
        is_anonymous=bool(is_anonymous),
        anonymous_thread_id=thread_id,
    )
    db.add(row)
    db.commit()
    db.refresh(row)
    logger.info(
        "Private message sent",
        extra={"message_id": row.id, "anonymous": row.is_anonymous},
    )
    return row


def received_messages(db: Session, user: UserPrincipal) -> list[MessageOut]:
    rows = (
        _with_people(db)
        .filter(PrivateMessage.recipient_id == user.id)
        .order_by(PrivateMessage.created_at.desc(), PrivateMessage.id.desc())
        .all()
    )
    return [to_message_out(m, hide_sender=m.is_anonymous) for m in rows]


def sent_messages(db: Session, user: UserPrincipal) -> list[MessageOut]:
    rows = (
        _with_people(db)
        .filter(PrivateMessage.sender_id == user.id)
        .order_by(PrivateMessage.created_at.desc(), PrivateMessage.id.desc())
        .all()
    )
    return [to_message_out(m) for m in rows]


def reply_to_anonymous(
    db: Session,
    user: UserPrincipal,
    *,
    anonymous_thread_id: str | None,
    message: str | None,
) -> PrivateMessage:
    """Reply (non-anonymously) to whoever opened an anonymous thread with the caller."""
    if not anonymous_thread_id or not message or not message.strip():
        raise BadRequestError("Thread ID and message are required")

    opener = (
        db.query(PrivateMessage)
        .filter(
            PrivateMessage.anonymous_thread_id == anonymous_thread_id,
            PrivateMessage.recipient_id == user.id,
            PrivateMessage.is_anonymous.is_(True),
        )
        .first()
    )
    if opener is None:
        raise NotFoundError("Anonymous thread not found")

    reply = PrivateMessage(
        sender_id=user.id,
        recipient_id=opener.sender_id,
        message=message.strip(),
        batch_id=user.batch_id,
        is_anonymous=False,
        anonymous_thread_id=anonymous_thread_id,
        is_reply_to_anonymous=True,
    )
    db.add(reply)
    db.commit()
    db.refresh(reply)
    return reply


def anonymous_threads(db: Session, user: UserPrincipal) -> list[AnonymousThread]:
    """Threads the caller takes part in, most recently active first."""
    involved = or_(PrivateMessage.sender_id == user.id, PrivateMessage.recipient_id == user.id)
    stats = (
        db.query(
            PrivateMessage.anonymous_thread_id,
            func.count(PrivateMessage.id),
            func.max(PrivateMessage.created_at),
        )
        .filter(PrivateMessage.anonymous_thread_id.isnot(None), involved)
        .group_by(PrivateMessage.anonymous_thread_id)
        .order_by(func.max(PrivateMessage.created_at).desc())
        .all()
    )

    threads: list[AnonymousThread] = []
    for thread_id, count, last_activity in stats:
        rows = (
            _with_people(db)
            .filter(PrivateMessage.anonymous_thread_id == thread_id)
            .order_by(PrivateMessage.created_at.asc(), PrivateMessage.id.asc())
            .all()
        )
        messages = [
            to_message_out(m, hide_sender=m.is_anonymous and m.recipient_id == user.id)
            for m in rows
        ]
        threads.append(
            AnonymousThread(
                thread_id=thread_id,
                messages=messages,
                message_count=count,
                last_activity=last_activity,
            )
        )
    return threads


def mark_as_read(db: Session, user: UserPrincipal, message_id: int) -> PrivateMessage:
    row = db.get(PrivateMessage, message_id)
    if row is None:
        raise NotFoundError("Message not found")
    if row.recipient_id != user.id:
        raise ForbiddenError("You are not authorized to mark this message as read")
    row.is_read = True
    db.commit()
    db.refresh(row)
    return row


def delete_message(db: Session, user: UserPrincipal, message_id: int) -> None:
    row = db.get(PrivateMessage, message_id)
    if row is None:
        raise NotFoundError("Message not found")
    if user.id not in (row.sender_id, row.recipient_id):
        raise ForbiddenError("You are not authorized to delete this message")
    db.delete(row)
    db.commit()
