"""Chat sessions and the append-only message log."""
from sqlalchemy import Column, DateTime, ForeignKey, Index, String, Text
from sqlalchemy.orm import relationship

from codehelper.db.session import Base
from codehelper.models.base import new_id, utcnow

DEFAULT_SESSION_TITLE = "New Chat"


class ChatSession(Base):
    __tablename__ = "chat_sessions"
    __table_args__ = (Index("ix_chat_sessions_user_id_updated_at", "user_id", "updated_at"),)

    id = Column(String(32), primary_key=True, default=new_id)
    user_id = Column(String(191), ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    title = Column(String(255), nullable=False, default=DEFAULT_SESSION_TITLE)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)

    user = relationship("User", back_populates="chat_sessions")


class Message(Base):
    __tablename__ = "messages"
    __table_args__ = (
        Index("ix_messages_user_id_timestamp", "user_id", "timestamp"),
        Index("ix_messages_chat_session_id_timestamp", "chat_session_id", "timestamp"),
    )

    id = Column(String(32), primary_key=True, default=new_id)
    user_id = Column(String(191), ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    chat_session_id = Column(
        String(32), ForeignKey("chat_sessions.id", ondelete="CASCADE"), nullable=True
    )
    role = Column(String(16), nullable=False, index=True)  # user | assistant
    content = Column(Text, nullable=False)
    # cached classification of user messages (one of QUESTION_TYPES)
    question_type = Column(String(64), nullable=True, index=True)
    timestamp = Column(DateTime(timezone=True), nullable=False, default=utcnow)
