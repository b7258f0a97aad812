"""Programming practice tasks and per-user progress on them."""
from sqlalchemy import (
    Boolean,
    Column,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    JSON,
    String,
    Text,
    UniqueConstraint,
)

from codehelper.db.session import Base
from codehelper.models.base import new_id, utcnow

STATUS_NOT_STARTED = "not_started"
STATUS_IN_PROGRESS = "in_progress"
STATUS_COMPLETED = "completed"


class ProgrammingTask(Base):
    __tablename__ = "programming_tasks"
    __table_args__ = (Index("ix_programming_tasks_language_difficulty", "language", "difficulty"),)

    id = Column(String(32), primary_key=True, default=new_id)
    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=False)
    language = Column(String(32), nullable=False)
    difficulty = Column(String(16), nullable=False)
    category = Column(String(32), nullable=False, index=True)
    starter_code = Column(Text, nullable=True)
    hints = Column(JSON, nullable=False, default=list)
    solution = Column(Text, nullable=True)
    test_cases = Column(JSON, nullable=True)
    is_active = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=utcnow, onupdate=utcnow)


class UserTaskProgress(Base):
    __tablename__ = "user_task_progress"
    __table_args__ = (
        UniqueConstraint("user_id", "task_id", name="uq_user_task_progress_user_task"),
        Index("ix_user_task_progress_user_id_status", "user_id", "status"),
    )

    id = Column(String(32), primary_key=True, default=new_id)
    user_id = Column(String(191), ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    task_id = Column(String(32), ForeignKey("programming_tasks.id", ondelete="CASCADE"), nullable=False)
    status = Column(String(16), nullable=False, default=STATUS_NOT_STARTED)
    attempts = Column(Integer, nullable=False, default=0)
    completed_at = Column(DateTime(timezone=True), nullable=True)
    chat_session_id = Column(String(32), nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=utcnow, onupdate=utcnow)
