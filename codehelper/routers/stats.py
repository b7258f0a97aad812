"""Stats procedures: per-user counters, language progress, public totals."""
from fastapi import APIRouter
from sqlalchemy import distinct, func, select

from codehelper.models.chat import Message
from codehelper.models.stats import LanguageProgress, Stats
from codehelper.models.user import User
from codehelper.routers.deps import CurrentUser, DbSession
from codehelper.schemas.stats import GlobalStatsOutSchema, LanguageProgressOutSchema, UserStatsOutSchema

router = APIRouter(prefix="/api/stats", tags=["stats"])


@router.get("/me", response_model=UserStatsOutSchema)
async def get_user_stats(db: DbSession, user: CurrentUser):
    result = await db.execute(select(Stats).where(Stats.user_id == user.id))
    stats = result.scalar_one_or_none()
    if stats is None:
        return UserStatsOutSchema()
    return stats


@router.get("/languages", response_model=list[LanguageProgressOutSchema])
async def get_language_progress(db: DbSession, user: CurrentUser):
    result = await db.execute(
        select(LanguageProgress)
        .where(LanguageProgress.user_id == user.id)
        .order_by(LanguageProgress.last_used_at.desc().nulls_last(), LanguageProgress.language)
    )
    return result.scalars().all()


@router.get("/global", response_model=GlobalStatsOutSchema)
async def get_global_stats(db: DbSession):
    """Public totals for the landing page."""
    total_users = (await db.execute(select(func.count(User.id)))).scalar_one()
    active_users = (
        await db.execute(select(func.count(distinct(Message.user_id))).where(Message.role == "user"))
    ).scalar_one()
    total_questions = (
        await db.execute(select(func.count(Message.id)).where(Message.role == "user"))
    ).scalar_one()
    total_solutions = (
        await db.execute(select(func.count(Message.id)).where(Message.role == "assistant"))
    ).scalar_one()
    return GlobalStatsOutSchema(
        total_users=total_users,
        active_users=active_users,
        total_questions=total_questions,
        total_solutions=total_solutions,
    )
