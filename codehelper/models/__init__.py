from codehelper.models.user import User
from codehelper.models.chat import ChatSession, Message
from codehelper.models.stats import Stats, LanguageProgress
from codehelper.models.assessment import Assessment, AssessmentQuestion
from codehelper.models.task import ProgrammingTask, UserTaskProgress
from codehelper.models.contact import ContactMessage

__all__ = [
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
