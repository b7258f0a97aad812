"""SQLAlchemy declarative base and model imports for Alembic."""
from codehelper.db.session import Base

# Import all models so Alembic can see them
from codehelper.models.assessment import Assessment, AssessmentQuestion  # noqa: F401
from codehelper.models.chat import ChatSession, Message  # noqa: F401
from codehelper.models.contact import ContactMessage  # noqa: F401
from codehelper.models.stats import LanguageProgress, Stats  # noqa: F401
from codehelper.models.task import ProgrammingTask, UserTaskProgress  # noqa: F401
from codehelper.models.user import User  # noqa: F401

__all__ = [
    "Base",
    "User",
    "ChatSession",
    "Message",
    "Stats",
    "LanguageProgress",
    "Assessment",
    "AssessmentQuestion",
    "ProgrammingTask",
    "UserTaskProgress",
    "ContactMessage",
]
