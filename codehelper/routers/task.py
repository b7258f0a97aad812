"""Programming task procedures."""
from fastapi import APIRouter

from codehelper.routers.deps import CurrentUser, DbSession
from codehelper.schemas.task import (
    TaskCompleteSchema,
    TaskDetailOutSchema,
    TaskOutSchema,
    TaskProgressOutSchema,
    TaskProgressUpdateSchema,
)
from codehelper.services import tasks as task_service

router = APIRouter(prefix="/api/tasks", tags=["task"])


@router.get("", response_model=list[TaskOutSchema])
async def get_tasks(
    db: DbSession,
    user: CurrentUser,
    language: str | None = None,
    difficulty: str | None = None,
    include_progress: bool = True,
):
    rows = await task_service.list_tasks(db, user.id, language, difficulty, include_progress)
    return [
        TaskOutSchema.model_validate(task).model_copy(update={"status": task_status})
        for task, task_status in rows
    ]


@router.get("/{task_id}", response_model=TaskDetailOutSchema)
async def get_task(task_id: str, db: DbSession, user: CurrentUser):
    task = await task_service.get_task(db, task_id)
    task_status = await task_service.get_task_status(db, user.id, task.id)
    return TaskDetailOutSchema.model_validate(task).model_copy(update={"status": task_status})


@router.post("/progress", response_model=TaskProgressOutSchema)
async def update_task_progress(body: TaskProgressUpdateSchema, db: DbSession, user: CurrentUser):
    return await task_service.update_task_progress(
        db, user.id, body.task_id, body.status, body.chat_session_id
    )


@router.post("/complete", response_model=TaskProgressOutSchema)
async def complete_task(body: TaskCompleteSchema, db: DbSession, user: CurrentUser):
    """Idempotent: only the first completion moves the counters."""
    return await task_service.complete_task(db, user.id, body.task_id)
