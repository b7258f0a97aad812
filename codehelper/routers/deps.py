"""Shared route dependencies: caller identity, admin tier, app-level clients."""
import logging
from typing import Annotated

from fastapi import Depends, Header, Request
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from codehelper.core.config import Settings
from codehelper.core.errors import ForbiddenError, UnauthorizedError
from codehelper.core.rate_limit import RateLimiter
from codehelper.core.security import Identity, extract_token, identity_from_token
from codehelper.db.session import get_db
from codehelper.models.user import ROLE_ADMIN, User
from codehelper.services.email import EmailSender
from codehelper.services.llm import LLMProvider

logger = logging.getLogger(__name__)


def get_settings_dep(request: Request) -> Settings:
    return request.app.state.settings


def get_llm(request: Request) -> LLMProvider:
    return request.app.state.llm


def get_rate_limiter(request: Request) -> RateLimiter:
    return request.app.state.rate_limiter


def get_email_sender(request: Request) -> EmailSender:
    return request.app.state.email_sender


def get_identity(
    request: Request,
    settings: Annotated[Settings, Depends(get_settings_dep)],
    authorization: Annotated[str | None, Header()] = None,
) -> Identity | None:
    """Identity from the bearer header or the auth cookie; None if absent or invalid."""
    token = extract_token(authorization, request.cookies.get(settings.auth_cookie_name))
    return identity_from_token(settings, token)


async def _mirror_user(db: AsyncSession, identity: Identity, settings: Settings) -> User:
    user = await db.get(User, identity.user_id)
    if user is None:
        user = User(id=identity.user_id, email=identity.email)
        db.add(user)
        try:
            await db.commit()
            logger.info("Registered user %s", identity.user_id)
        except IntegrityError:
            # another request inserted the row first
            await db.rollback()
            result = await db.execute(select(User).where(User.id == identity.user_id))
            user = result.scalar_one()

    changed = False
    if identity.email and user.email != identity.email:
        user.email = identity.email
        changed = True
    if identity.email and identity.email in settings.admin_email_set and user.role != ROLE_ADMIN:
        user.role = ROLE_ADMIN
        changed = True
        logger.info("Promoted user %s to admin", user.id)
    if changed:
        await db.commit()
    return user


async def get_current_user(
    request: Request,
    db: Annotated[AsyncSession, Depends(get_db)],
    identity: Annotated[Identity | None, Depends(get_identity)],
    settings: Annotated[Settings, Depends(get_settings_dep)],
) -> User:
    if identity is None:
        raise UnauthorizedError()
    request.state.user_id = identity.user_id
    user = await _mirror_user(db, identity, settings)
    if user.is_blocked:
        raise ForbiddenError("Your account has been blocked")
    return user


async def require_admin(user: Annotated[User, Depends(get_current_user)]) -> User:
    if not user.is_admin:
        raise ForbiddenError("Admin access required")
    return user


CurrentUser = Annotated[User, Depends(get_current_user)]
AdminUser = Annotated[User, Depends(require_admin)]
DbSession = Annotated[AsyncSession, Depends(get_db)]
