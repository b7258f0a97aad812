from codehelper.services.eligibility import check_post_assessment_eligibility, get_post_assessment_message
from codehelper.services.prompts import detect_language, get_system_prompt
from codehelper.services.seeding import seed_content
from codehelper.services.validator import get_rejection_message, is_programming_related

__all__ = [
    "check_post_assessment_eligibility",
    "get_post_assessment_message",
    "detect_language",
    "get_system_prompt",
    "seed_content",
    "is_programming_related",
    "get_rejection_message",
]
