"""Per-user counters and per-(user, language) progress."""
from sqlalchemy import Column, DateTime, Float, ForeignKey, Integer, String, UniqueConstraint
from sqlalchemy.orm import relationship

from codehelper.db.session import Base
from codehelper.models.base import new_id, utcnow


class Stats(Base):
    """One row per user. avg_response_time is the exact mean over questions_asked samples."""

    __tablename__ = "stats"

    id = Column(String(32), primary_key=True, default=new_id)
    user_id = Column(
        String(191), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, unique=True
    )
    questions_asked = Column(Integer, nullable=False, default=0)
    avg_response_time = Column(Float, nullable=False, default=0.0)  # seconds
    most_frequent_response_type = Column(String(64), nullable=True)
    tasks_completed = Column(Integer, nullable=False, default=0)
    total_time_spent = Column(Integer, nullable=False, default=0)  # seconds
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=utcnow, onupdate=utcnow)

    user = relationship("User", back_populates="stats")


class LanguageProgress(Base):
    __tablename__ = "language_progress"
    __table_args__ = (UniqueConstraint("user_id", "language", name="uq_language_progress_user_language"),)

    id = Column(String(32), primary_key=True, default=new_id)
    user_id = Column(String(191), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    language = Column(String(32), nullable=False)
    questions_asked = Column(Integer, nullable=False, default=0)
    tasks_completed = Column(Integer, nullable=False, default=0)
    last_used_at = Column(DateTime(timezone=True), nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=utcnow, onupdate=utcnow)
