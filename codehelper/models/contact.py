"""Contact form submissions."""
from sqlalchemy import Column, DateTime, Index, String, Text

from codehelper.db.session import Base
from codehelper.models.base import new_id, utcnow


class ContactMessage(Base):
    __tablename__ = "contact_messages"
    __table_args__ = (Index("ix_contact_messages_status_created_at", "status", "created_at"),)

    id = Column(String(32), primary_key=True, default=new_id)
    name = Column(String(255), nullable=False)
    email = Column(String(255), nullable=False)
    subject = Column(String(255), nullable=False)
    message = Column(Text, nullable=False)
    status = Column(String(16), nullable=False, default="pending")  # pending | sent | failed
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=utcnow, onupdate=utcnow)
