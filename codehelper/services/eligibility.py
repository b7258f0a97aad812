"""Post-assessment eligibility: time since registration only."""
import math
from datetime import datetime

from codehelper.models.base import as_utc, utcnow
from codehelper.schemas.assessment import PostAssessmentEligibility

MIN_MINUTES_REQUIRED = 30


def check_post_assessment_eligibility(
    registered_at: datetime,
    now: datetime | None = None,
    min_minutes: int = MIN_MINUTES_REQUIRED,
) -> PostAssessmentEligibility:
    """Pure function of (registration time, now); safe to call repeatedly."""
    now = as_utc(now or utcnow())
    elapsed = (now - as_utc(registered_at)).total_seconds()
    minutes = max(0, math.floor(elapsed / 60))
    progress = min(minutes / min_minutes * 100, 100) if min_minutes > 0 else 100
    return PostAssessmentEligibility(
        is_eligible=minutes >= min_minutes,
        minutes_since_registration=minutes,
        min_minutes_required=min_minutes,
        progress_percentage=round(progress),
    )


def get_post_assessment_message(eligibility: PostAssessmentEligibility) -> str:
    if eligibility.is_eligible:
        return "You're ready for post-assessment!"
    left = eligibility.min_minutes_required - eligibility.minutes_since_registration
    return f"Complete {left} more minute{'s' if left > 1 else ''} to unlock post-assessment"
