"""Counter bookkeeping after a question or a completed task.

Every counter change is a single UPDATE evaluated by the database
(``col = col + 1``, in-place mean), preceded by an insert-if-missing, so
concurrent requests from one user never lose an update.
"""
from collections import Counter
from datetime import datetime

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from codehelper.models.base import utcnow
from codehelper.models.chat import Message
from codehelper.models.stats import LanguageProgress, Stats

RECENT_TYPES_WINDOW = 10


def _dialect_insert(db: AsyncSession, model):
    dialect = db.get_bind().dialect.name
    if dialect == "postgresql":
        from sqlalchemy.dialects.postgresql import insert
    elif dialect == "sqlite":
        from sqlalchemy.dialects.sqlite import insert
    else:
        raise NotImplementedError(f"upsert is not supported on {dialect}")
    return insert(model)


async def _ensure_row(db: AsyncSession, model, conflict_cols: list[str], **values) -> None:
    stmt = _dialect_insert(db, model).values(**values).on_conflict_do_nothing(index_elements=conflict_cols)
    await db.execute(stmt)


async def most_frequent_question_type(
    db: AsyncSession,
    user_id: str,
    current_type: str,
    exclude_message_id: str | None = None,
) -> str:
    """Mode of the current label and the previous RECENT_TYPES_WINDOW classified user messages.

    Ties go to the label seen first, starting with the current one and then
    walking back in time.
    """
    stmt = (
        select(Message.question_type)
        .where(
            Message.user_id == user_id,
            Message.role == "user",
            Message.question_type.is_not(None),
        )
        .order_by(Message.timestamp.desc())
        .limit(RECENT_TYPES_WINDOW)
    )
    if exclude_message_id is not None:
        stmt = stmt.where(Message.id != exclude_message_id)
    result = await db.execute(stmt)
    labels = [current_type, *result.scalars().all()]
    return Counter(labels).most_common(1)[0][0]


async def record_question(
    db: AsyncSession,
    user_id: str,
    response_time: float,
    question_type: str | None,
) -> None:
    """Fold one response latency (seconds) into the user's Stats row.

    new_avg = (old_avg * old_count + sample) / (old_count + 1), computed by
    the database against the row's current values.
    """
    await _ensure_row(db, Stats, ["user_id"], user_id=user_id)
    values = {
        "avg_response_time": (Stats.avg_response_time * Stats.questions_asked + response_time)
        / (Stats.questions_asked + 1),
        "questions_asked": Stats.questions_asked + 1,
        "updated_at": utcnow(),
    }
    if question_type is not None:
        values["most_frequent_response_type"] = question_type
    await db.execute(
        update(Stats)
        .where(Stats.user_id == user_id)
        .values(**values)
        .execution_options(synchronize_session=False)
    )


async def record_language_question(
    db: AsyncSession,
    user_id: str,
    language: str,
    now: datetime | None = None,
) -> None:
    now = now or utcnow()
    await _ensure_row(db, LanguageProgress, ["user_id", "language"], user_id=user_id, language=language)
    await db.execute(
        update(LanguageProgress)
        .where(LanguageProgress.user_id == user_id, LanguageProgress.language == language)
        .values(
            questions_asked=LanguageProgress.questions_asked + 1,
            last_used_at=now,
            updated_at=now,
        )
        .execution_options(synchronize_session=False)
    )


async def ensure_language_progress(db: AsyncSession, user_id: str, languages: list[str]) -> None:
    """One row per (user, language); existing rows are left untouched."""
    for language in dict.fromkeys(languages):
        await _ensure_row(db, LanguageProgress, ["user_id", "language"], user_id=user_id, language=language)


async def record_task_completion(db: AsyncSession, user_id: str, language: str | None) -> None:
    now = utcnow()
    await _ensure_row(db, Stats, ["user_id"], user_id=user_id)
    await db.execute(
        update(Stats)
        .where(Stats.user_id == user_id)
        .values(tasks_completed=Stats.tasks_completed + 1, updated_at=now)
        .execution_options(synchronize_session=False)
    )
    if not language:
        return
    await _ensure_row(db, LanguageProgress, ["user_id", "language"], user_id=user_id, language=language)
    await db.execute(
        update(LanguageProgress)
        .where(LanguageProgress.user_id == user_id, LanguageProgress.language == language)
        .values(
            tasks_completed=LanguageProgress.tasks_completed + 1,
            last_used_at=now,
            updated_at=now,
        )
        .execution_options(synchronize_session=False)
    )
