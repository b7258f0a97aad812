"""Assessment procedures: questions, submissions, post-assessment eligibility."""
from typing import Annotated

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy import select

from codehelper.core.config import Settings
from codehelper.models.assessment import Assessment
from codehelper.routers.deps import CurrentUser, DbSession, get_settings_dep
from codehelper.schemas.assessment import (
    AssessmentOutSchema,
    AssessmentQuestionOutSchema,
    AssessmentSubmitSchema,
    EligibilityOutSchema,
)
from codehelper.services import assessment as assessment_service
from codehelper.services.eligibility import check_post_assessment_eligibility, get_post_assessment_message

router = APIRouter(prefix="/api/assessment", tags=["assessment"])


@router.get("/questions", response_model=list[AssessmentQuestionOutSchema])
async def get_questions(
    db: DbSession,
    user: CurrentUser,
    language: str | None = None,
    difficulty: str | None = None,
    limit: Annotated[int, Query(ge=1, le=50)] = 10,
):
    """Questions without their answers."""
    return await assessment_service.list_questions(db, language, difficulty, limit)


@router.post("", response_model=AssessmentOutSchema, status_code=status.HTTP_201_CREATED)
async def submit_assessment(
    body: AssessmentSubmitSchema,
    db: DbSession,
    user: CurrentUser,
    settings: Annotated[Settings, Depends(get_settings_dep)],
):
    return await assessment_service.submit_assessment(db, user, body, settings.post_assessment_min_minutes)


@router.get("", response_model=list[AssessmentOutSchema])
async def get_assessments(db: DbSession, user: CurrentUser):
    result = await db.execute(
        select(Assessment).where(Assessment.user_id == user.id).order_by(Assessment.completed_at.desc())
    )
    return result.scalars().all()


@router.get("/post-eligibility", response_model=EligibilityOutSchema)
async def check_post_assessment_eligibility_route(
    db: DbSession,
    user: CurrentUser,
    settings: Annotated[Settings, Depends(get_settings_dep)],
):
    eligibility = check_post_assessment_eligibility(
        user.created_at, min_minutes=settings.post_assessment_min_minutes
    )
    return EligibilityOutSchema(
        **eligibility.model_dump(),
        message=get_post_assessment_message(eligibility),
        has_post_assessment=await assessment_service.has_post_assessment(db, user.id),
    )
