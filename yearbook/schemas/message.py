"""Schemas for private and anonymous messages."""

from datetime import datetime

from pydantic import BaseModel, Field


class SendMessageRequest(BaseModel):
    recipient_id: int | None = None
    message: str | None = Field(default=None, max_length=5000)
    is_anonymous: bool = False
    anonymous_thread_id: str | None = Field(default=None, max_length=64)


class ReplyAnonymousRequest(BaseModel):
    anonymous_thread_id: str | None = Field(default=None, max_length=64)
    message: str | None = Field(default=None, max_length=5000)


class Correspondent(BaseModel):
    id: int
    name: str
    profile_picture: str = ""

    class Config:
        from_attributes = True


class MessageOut(BaseModel):
    """sender is None when the message is anonymous to the viewer."""

    id: int
    sender: Correspondent | None = None
    recipient: Correspondent | None = None
    message: str
    batch_id: int
    is_anonymous: bool
    anonymous_thread_id: str | None = None
    is_reply_to_anonymous: bool = False
    is_read: bool
    created_at: datetime | None = None


class AnonymousThread(BaseModel):
    thread_id: str
    messages: list[MessageOut]
    message_count: int
    last_activity: datetime | None = None
