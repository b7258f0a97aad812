"""Pydantic schemas for the admin dashboard."""
from datetime import datetime
from typing import Literal

from pydantic import BaseModel


class UserCountsSchema(BaseModel):
    total: int
    new_24h: int
    new_7d: int
    active_24h: int
    active_7d: int


class MessageCountsSchema(BaseModel):
    total: int
    user_messages: int
    last_24h: int


class SessionCountsSchema(BaseModel):
    total: int
    last_24h: int
    last_7d: int


class AnalyticsSchema(BaseModel):
    avg_response_time: float
    question_type_distribution: dict[str, int]


class DashboardStatsSchema(BaseModel):
    users: UserCountsSchema
    messages: MessageCountsSchema
    sessions: SessionCountsSchema
    analytics: AnalyticsSchema


class AdminUserSchema(BaseModel):
    id: str
    email: str | None
    role: str
    is_blocked: bool
    created_at: datetime
    message_count: int
    session_count: int


class PaginationSchema(BaseModel):
    page: int
    limit: int
    total: int
    total_pages: int


class UsersPageSchema(BaseModel):
    users: list[AdminUserSchema]
    pagination: PaginationSchema


class SetBlockedSchema(BaseModel):
    user_id: str
    blocked: bool


class ExportRequestSchema(BaseModel):
    format: Literal["json", "markdown", "txt"] = "json"


class ExportOutSchema(BaseModel):
    data: str
    filename: str
    mime_type: str
