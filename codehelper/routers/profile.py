"""Profile procedures: read and update the learner profile and languages."""
from fastapi import APIRouter
from sqlalchemy import select

from codehelper.models.stats import LanguageProgress
from codehelper.models.user import User
from codehelper.routers.deps import CurrentUser, DbSession
from codehelper.schemas.profile import LanguagesUpdateSchema, ProfileOutSchema, ProfileUpdateSchema
from codehelper.schemas.stats import LanguageProgressOutSchema
from codehelper.services.reconciliation import ensure_language_progress

router = APIRouter(prefix="/api/profile", tags=["profile"])


async def _profile_out(db, user: User) -> ProfileOutSchema:
    result = await db.execute(
        select(LanguageProgress).where(LanguageProgress.user_id == user.id).order_by(LanguageProgress.language)
    )
    return ProfileOutSchema(
        id=user.id,
        role=user.role,
        experience=user.experience,
        focus_areas=user.focus_areas or [],
        confidence=user.confidence,
        ai_experience=user.ai_experience,
        preferred_languages=user.preferred_languages or [],
        primary_language=user.primary_language,
        profile_completed=user.profile_completed,
        language_progress=[LanguageProgressOutSchema.model_validate(p) for p in result.scalars().all()],
    )


@router.get("", response_model=ProfileOutSchema)
async def get_profile(db: DbSession, user: CurrentUser):
    return await _profile_out(db, user)


@router.put("", response_model=ProfileOutSchema)
async def update_profile(body: ProfileUpdateSchema, db: DbSession, user: CurrentUser):
    user.experience = body.experience
    user.focus_areas = body.focus_areas
    user.confidence = body.confidence
    user.ai_experience = body.ai_experience
    if body.primary_language:
        user.primary_language = body.primary_language
    user.profile_completed = True
    await db.commit()
    return await _profile_out(db, user)


@router.put("/languages", response_model=ProfileOutSchema)
async def update_languages(body: LanguagesUpdateSchema, db: DbSession, user: CurrentUser):
    """Store the preferred languages; one progress row per language, never duplicated."""
    languages = list(dict.fromkeys(body.languages))
    user.preferred_languages = languages
    user.primary_language = body.primary_language or languages[0]
    await ensure_language_progress(db, user.id, languages)
    await db.commit()
    return await _profile_out(db, user)
