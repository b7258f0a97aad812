"""Onboarding procedures."""
from fastapi import APIRouter

from codehelper.models.user import User
from codehelper.routers.deps import CurrentUser, DbSession
from codehelper.schemas.profile import OnboardingStatusSchema

router = APIRouter(prefix="/api/onboarding", tags=["onboarding"])


def _status(user: User) -> OnboardingStatusSchema:
    return OnboardingStatusSchema(
        profile_completed=user.profile_completed,
        pre_assessment_completed=user.pre_assessment_completed,
        tour_completed=user.tour_completed,
        onboarding_completed=user.onboarding_completed,
    )


@router.get("/status", response_model=OnboardingStatusSchema)
async def get_status(user: CurrentUser):
    return _status(user)


@router.post("/tour", response_model=OnboardingStatusSchema)
async def complete_tour(db: DbSession, user: CurrentUser):
    user.tour_completed = True
    await db.commit()
    return _status(user)
