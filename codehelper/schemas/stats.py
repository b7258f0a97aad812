"""Pydantic schemas for stats and progress."""
from datetime import datetime

from pydantic import BaseModel


class UserStatsOutSchema(BaseModel):
    questions_asked: int = 0
    avg_response_time: float = 0.0
    most_frequent_response_type: str | None = None
    tasks_completed: int = 0
    total_time_spent: int = 0

    class Config:
        from_attributes = True


class LanguageProgressOutSchema(BaseModel):
    language: str
    questions_asked: int
    tasks_completed: int
    last_used_at: datetime | None

    class Config:
        from_attributes = True


class GlobalStatsOutSchema(BaseModel):
    total_users: int
    active_users: int
    total_questions: int
    total_solutions: int
