"""Pydantic schemas for chat procedures."""
from datetime import datetime
from typing import Annotated

from pydantic import BaseModel, StringConstraints

MessageText = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=2000)]
SessionTitle = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=255)]


class SendMessageSchema(BaseModel):
    message: MessageText
    session_id: str | None = None


class SendMessageOutSchema(BaseModel):
    response: str
    session_id: str


class MessageOutSchema(BaseModel):
    id: str
    chat_session_id: str | None
    role: str
    content: str
    question_type: str | None
    timestamp: datetime

    class Config:
        from_attributes = True


class ChatSessionOutSchema(BaseModel):
    id: str
    title: str
    created_at: datetime
    updated_at: datetime
    message_count: int = 0

    class Config:
        from_attributes = True


class ChatSessionCreateSchema(BaseModel):
    title: SessionTitle | None = None


class ChatSessionRenameSchema(BaseModel):
    title: SessionTitle
