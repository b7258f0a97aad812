"""Auth procedures: role lookup and blocked check."""
from typing import Annotated

from fastapi import APIRouter, Depends

from codehelper.core.security import Identity
from codehelper.models.user import User
from codehelper.routers.deps import CurrentUser, DbSession, get_identity
from codehelper.schemas.profile import BlockedOutSchema, RoleOutSchema

router = APIRouter(prefix="/api/auth", tags=["auth"])


@router.get("/role", response_model=RoleOutSchema)
async def get_my_role(user: CurrentUser):
    return RoleOutSchema(role=user.role)


@router.get("/blocked", response_model=BlockedOutSchema)
async def check_blocked(
    db: DbSession,
    identity: Annotated[Identity | None, Depends(get_identity)],
):
    """Public: false when not signed in or not yet registered."""
    if identity is None:
        return BlockedOutSchema(is_blocked=False)
    user = await db.get(User, identity.user_id)
    return BlockedOutSchema(is_blocked=bool(user and user.is_blocked))
