"""Programming task catalogue and per-user progress."""
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from codehelper.core.errors import NotFoundError
from codehelper.models.base import utcnow
from codehelper.models.task import (
    STATUS_COMPLETED,
    STATUS_IN_PROGRESS,
    STATUS_NOT_STARTED,
    ProgrammingTask,
    UserTaskProgress,
)
from codehelper.services.reconciliation import record_task_completion


async def list_tasks(
    db: AsyncSession,
    user_id: str,
    language: str | None = None,
    difficulty: str | None = None,
    include_progress: bool = True,
) -> list[tuple[ProgrammingTask, str]]:
    """Active tasks with the user's status (not_started when untouched)."""
    stmt = select(ProgrammingTask).where(ProgrammingTask.is_active.is_(True))
    if language:
        stmt = stmt.where(ProgrammingTask.language == language)
    if difficulty:
        stmt = stmt.where(ProgrammingTask.difficulty == difficulty)
    result = await db.execute(stmt.order_by(ProgrammingTask.difficulty, ProgrammingTask.title))
    tasks = list(result.scalars().all())

    statuses: dict[str, str] = {}
    if include_progress and tasks:
        progress = await db.execute(
            select(UserTaskProgress.task_id, UserTaskProgress.status).where(
                UserTaskProgress.user_id == user_id,
                UserTaskProgress.task_id.in_([t.id for t in tasks]),
            )
        )
        statuses = dict(progress.all())
    return [(t, statuses.get(t.id, STATUS_NOT_STARTED)) for t in tasks]


async def get_task(db: AsyncSession, task_id: str) -> ProgrammingTask:
    result = await db.execute(
        select(ProgrammingTask).where(ProgrammingTask.id == task_id, ProgrammingTask.is_active.is_(True))
    )
    task = result.scalar_one_or_none()
    if task is None:
        raise NotFoundError("Task", task_id)
    return task


async def _get_or_create_progress(db: AsyncSession, user_id: str, task_id: str) -> UserTaskProgress:
    result = await db.execute(
        select(UserTaskProgress).where(UserTaskProgress.user_id == user_id, UserTaskProgress.task_id == task_id)
    )
    progress = result.scalar_one_or_none()
    if progress is None:
        progress = UserTaskProgress(user_id=user_id, task_id=task_id, status=STATUS_NOT_STARTED, attempts=0)
        db.add(progress)
    return progress


async def complete_task(db: AsyncSession, user_id: str, task_id: str) -> UserTaskProgress:
    """Mark the task completed. Only the first completion moves the counters."""
    task = await get_task(db, task_id)
    progress = await _get_or_create_progress(db, user_id, task.id)
    if progress.status == STATUS_COMPLETED:
        return progress

    progress.status = STATUS_COMPLETED
    progress.completed_at = utcnow()
    await db.flush()
    await record_task_completion(db, user_id, task.language)
    await db.commit()
    return progress


async def update_task_progress(
    db: AsyncSession,
    user_id: str,
    task_id: str,
    status: str,
    chat_session_id: str | None = None,
) -> UserTaskProgress:
    if status == STATUS_COMPLETED:
        progress = await complete_task(db, user_id, task_id)
        if chat_session_id and progress.chat_session_id != chat_session_id:
            progress.chat_session_id = chat_session_id
            await db.commit()
        return progress

    task = await get_task(db, task_id)
    progress = await _get_or_create_progress(db, user_id, task.id)
    if progress.status == STATUS_COMPLETED:
        # completed is terminal, so a task is never counted twice
        return progress
    if status == STATUS_IN_PROGRESS:
        progress.attempts = (progress.attempts or 0) + 1
    progress.status = status
    if chat_session_id:
        progress.chat_session_id = chat_session_id
    await db.commit()
    return progress


async def get_task_status(db: AsyncSession, user_id: str, task_id: str) -> str:
    result = await db.execute(
        select(UserTaskProgress.status).where(UserTaskProgress.user_id == user_id, UserTaskProgress.task_id == task_id)
    )
    return result.scalar_one_or_none() or STATUS_NOT_STARTED
