"""Admin-only procedures."""
import logging
from typing import Annotated

from fastapi import APIRouter, Query

from codehelper.routers.deps import AdminUser, DbSession
from codehelper.schemas.admin import (
    DashboardStatsSchema,
    ExportOutSchema,
    ExportRequestSchema,
    SetBlockedSchema,
    UsersPageSchema,
)
from codehelper.schemas.profile import BlockedOutSchema
from codehelper.services import admin as admin_service

router = APIRouter(prefix="/api/admin", tags=["admin"])
logger = logging.getLogger(__name__)


@router.get("/dashboard", response_model=DashboardStatsSchema)
async def get_dashboard_stats(db: DbSession, admin: AdminUser):
    return await admin_service.get_dashboard_stats(db)


@router.get("/users", response_model=UsersPageSchema)
async def get_users(
    db: DbSession,
    admin: AdminUser,
    page: Annotated[int, Query(ge=1)] = 1,
    limit: Annotated[int, Query(ge=1, le=100)] = 20,
    search: str | None = None,
):
    return await admin_service.list_users(db, page, limit, search)


@router.post("/users/blocked", response_model=BlockedOutSchema)
async def set_user_blocked(body: SetBlockedSchema, db: DbSession, admin: AdminUser):
    user = await admin_service.set_user_blocked(db, body.user_id, body.blocked)
    logger.info("Admin %s set blocked=%s for user %s", admin.id, body.blocked, user.id)
    return BlockedOutSchema(is_blocked=user.is_blocked)


@router.post("/export", response_model=ExportOutSchema)
async def export_data(body: ExportRequestSchema, db: DbSession, admin: AdminUser):
    logger.info("Admin %s exported data as %s", admin.id, body.format)
    return await admin_service.export_data(db, body.format)
