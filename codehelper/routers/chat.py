"""Chat procedures: send a message, read history, manage sessions."""
import logging
from typing import Annotated

from fastapi import APIRouter, Depends, Response, status

from codehelper.core.config import Settings
from codehelper.core.errors import PreconditionFailedError, TooManyRequestsError
from codehelper.core.rate_limit import RateLimiter
from codehelper.models.user import User
from codehelper.routers.deps import CurrentUser, DbSession, get_llm, get_rate_limiter, get_settings_dep
from codehelper.schemas.chat import (
    ChatSessionCreateSchema,
    ChatSessionOutSchema,
    ChatSessionRenameSchema,
    MessageOutSchema,
    SendMessageOutSchema,
    SendMessageSchema,
)
from codehelper.services import chat as chat_service
from codehelper.services.llm import LLMProvider

router = APIRouter(prefix="/api/chat", tags=["chat"])
logger = logging.getLogger(__name__)


async def enforce_rate_limit(limiter: RateLimiter, user: User) -> None:
    result = await limiter.hit(user.id)
    if not result.success:
        retry_after = result.retry_after_seconds(limiter.now())
        logger.warning("Rate limit exceeded for user %s, retry in %ss", user.id, retry_after)
        raise TooManyRequestsError(retry_after)


def _require_onboarding(user: User, settings: Settings) -> None:
    if not settings.require_onboarding:
        return
    if not user.profile_completed:
        raise PreconditionFailedError("Please complete your profile before using the chat")
    if not user.pre_assessment_completed:
        raise PreconditionFailedError("Please complete the knowledge assessment before using the chat")


@router.post("/messages", response_model=SendMessageOutSchema)
async def send_message(
    body: SendMessageSchema,
    db: DbSession,
    user: CurrentUser,
    limiter: Annotated[RateLimiter, Depends(get_rate_limiter)],
    llm: Annotated[LLMProvider, Depends(get_llm)],
    settings: Annotated[Settings, Depends(get_settings_dep)],
):
    """Ask the assistant; returns the reply and the session it was stored in.

    The budget is charged only once the body has parsed.
    """
    await enforce_rate_limit(limiter, user)
    _require_onboarding(user, settings)
    response, session_id = await chat_service.send_message(
        db,
        llm,
        user,
        body.message,
        body.session_id,
        history_limit=settings.chat_history_limit,
        max_tokens=settings.llm_max_tokens,
        temperature=settings.llm_temperature,
        topic_filter=settings.chat_topic_filter,
    )
    return SendMessageOutSchema(response=response, session_id=session_id)


@router.get("/messages", response_model=list[MessageOutSchema])
async def get_messages(db: DbSession, user: CurrentUser, session_id: str | None = None):
    return await chat_service.list_messages(db, user.id, session_id)


@router.get("/sessions", response_model=list[ChatSessionOutSchema])
async def get_sessions(db: DbSession, user: CurrentUser):
    rows = await chat_service.list_sessions(db, user.id)
    return [
        ChatSessionOutSchema(
            id=s.id,
            title=s.title,
            created_at=s.created_at,
            updated_at=s.updated_at,
            message_count=count,
        )
        for s, count in rows
    ]


@router.post("/sessions", response_model=ChatSessionOutSchema, status_code=status.HTTP_201_CREATED)
async def create_session(body: ChatSessionCreateSchema, db: DbSession, user: CurrentUser):
    session = await chat_service.create_session(db, user.id, body.title)
    await db.commit()
    return session


@router.patch("/sessions/{session_id}", response_model=ChatSessionOutSchema)
async def rename_session(session_id: str, body: ChatSessionRenameSchema, db: DbSession, user: CurrentUser):
    session = await chat_service.get_owned_session(db, user.id, session_id)
    session.title = body.title
    await db.commit()
    return ChatSessionOutSchema(
        id=session.id,
        title=session.title,
        created_at=session.created_at,
        updated_at=session.updated_at,
        message_count=await chat_service.count_session_messages(db, session.id),
    )


@router.delete("/sessions/{session_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_session(session_id: str, db: DbSession, user: CurrentUser):
    await chat_service.delete_session(db, user.id, session_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
