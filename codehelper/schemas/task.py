"""Pydantic schemas for programming tasks."""
from datetime import datetime
from typing import Literal

from pydantic import BaseModel


class TaskOutSchema(BaseModel):
    id: str
    title: str
    description: str
    language: str
    difficulty: str
    category: str
    starter_code: str | None
    hints: list[str]
    status: str = "not_started"

    class Config:
        from_attributes = True


class TaskDetailOutSchema(TaskOutSchema):
    test_cases: list | dict | None = None


class TaskProgressUpdateSchema(BaseModel):
    task_id: str
    status: Literal["not_started", "in_progress", "completed"]
    chat_session_id: str | None = None


class TaskCompleteSchema(BaseModel):
    task_id: str


class TaskProgressOutSchema(BaseModel):
    task_id: str
    status: str
    attempts: int
    completed_at: datetime | None
    chat_session_id: str | None

    class Config:
        from_attributes = True
