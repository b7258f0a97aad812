from codehelper.schemas.chat import MessageOutSchema, SendMessageOutSchema, SendMessageSchema
from codehelper.schemas.stats import GlobalStatsOutSchema, LanguageProgressOutSchema, UserStatsOutSchema
from codehelper.schemas.assessment import EligibilityOutSchema, PostAssessmentEligibility

__all__ = [
    "MessageOutSchema",
    "SendMessageOutSchema",
    "SendMessageSchema",
    "GlobalStatsOutSchema",
    "LanguageProgressOutSchema",
    "UserStatsOutSchema",
    "EligibilityOutSchema",
    "PostAssessmentEligibility",
]
