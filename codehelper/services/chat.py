"""Chat exchange: persist the question, ask the provider, persist the reply, reconcile counters."""
import logging
import time
from typing import Callable

from sqlalchemy import delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from codehelper.core.errors import NotFoundError
from codehelper.models.base import utcnow
from codehelper.models.chat import DEFAULT_SESSION_TITLE, ChatSession, Message
from codehelper.models.user import User
from codehelper.services.assistant import (
    analyze_question_type,
    fallback_title,
    generate_chat_title,
    generate_response,
)
from codehelper.services.llm import LLMProvider
from codehelper.services.prompts import detect_language
from codehelper.services.validator import get_rejection_message, is_programming_related
from codehelper.services.reconciliation import (
    most_frequent_question_type,
    record_language_question,
    record_question,
)

logger = logging.getLogger(__name__)


async def get_owned_session(db: AsyncSession, user_id: str, session_id: str) -> ChatSession:
    result = await db.execute(
        select(ChatSession).where(ChatSession.id == session_id, ChatSession.user_id == user_id)
    )
    session = result.scalar_one_or_none()
    if session is None:
        raise NotFoundError("Chat session", session_id)
    return session


async def create_session(db: AsyncSession, user_id: str, title: str | None = None) -> ChatSession:
    session = ChatSession(user_id=user_id, title=title or DEFAULT_SESSION_TITLE)
    db.add(session)
    await db.flush()
    return session


async def load_history(db: AsyncSession, session_id: str, limit: int) -> list[dict]:
    """Last `limit` messages of the session, oldest first, as provider turns."""
    result = await db.execute(
        select(Message.role, Message.content)
        .where(Message.chat_session_id == session_id)
        .order_by(Message.timestamp.desc())
        .limit(limit)
    )
    rows = result.all()
    return [{"role": role, "content": content} for role, content in reversed(rows)]


async def count_session_messages(db: AsyncSession, session_id: str) -> int:
    result = await db.execute(
        select(func.count(Message.id)).where(Message.chat_session_id == session_id)
    )
    return result.scalar_one()


async def _retitle(db: AsyncSession, provider: LLMProvider, session: ChatSession, message: str) -> None:
    try:
        title = await generate_chat_title(provider, message)
    except Exception:
        logger.warning("Title generation failed for session %s", session.id, exc_info=True)
        title = fallback_title(message)
    session.title = title


async def _refuse(db: AsyncSession, user: User, session: ChatSession, message: str) -> str:
    reply = get_rejection_message()
    db.add(Message(user_id=user.id, chat_session_id=session.id, role="user", content=message))
    db.add(Message(user_id=user.id, chat_session_id=session.id, role="assistant", content=reply))
    session.updated_at = utcnow()
    await db.commit()
    logger.info("Refused off-topic question from user %s in session %s", user.id, session.id)
    return reply


async def send_message(
    db: AsyncSession,
    provider: LLMProvider,
    user: User,
    message: str,
    session_id: str | None = None,
    *,
    history_limit: int = 20,
    max_tokens: int = 1000,
    temperature: float = 0.7,
    clock: Callable[[], float] = time.perf_counter,
    topic_filter: bool = False,
) -> tuple[str, str]:
    """Run one question/answer exchange and return (response, session_id).

    The question is committed before the provider is called; a provider
    failure propagates and leaves the counters untouched. With
    ``topic_filter`` an off-topic question gets a canned refusal without
    reaching the provider and is not counted.
    """
    if session_id:
        session = await get_owned_session(db, user.id, session_id)
    else:
        session = await create_session(db, user.id)
    history = await load_history(db, session.id, history_limit)

    if topic_filter and not is_programming_related(message, history):
        return await _refuse(db, user, session, message), session.id

    question_type = await analyze_question_type(provider, message)
    question = Message(
        user_id=user.id,
        chat_session_id=session.id,
        role="user",
        content=message,
        question_type=question_type,
    )
    db.add(question)
    session.updated_at = utcnow()
    await db.commit()

    started = clock()
    response = await generate_response(
        provider, message, history, max_tokens=max_tokens, temperature=temperature
    )
    response_time = clock() - started

    db.add(
        Message(
            user_id=user.id,
            chat_session_id=session.id,
            role="assistant",
            content=response,
        )
    )
    session.updated_at = utcnow()
    await db.flush()

    # first exchange in a session that still has the placeholder title
    if session.title == DEFAULT_SESSION_TITLE and await count_session_messages(db, session.id) == 2:
        await _retitle(db, provider, session, message)

    top_type = await most_frequent_question_type(db, user.id, question_type, exclude_message_id=question.id)
    await record_question(db, user.id, response_time, top_type)

    language = detect_language(message)
    if language != "general":
        await record_language_question(db, user.id, language)

    await db.commit()
    logger.info(
        "Answered question for user %s in session %s (%.2fs, %s)",
        user.id, session.id, response_time, question_type,
    )
    return response, session.id


async def list_messages(db: AsyncSession, user_id: str, session_id: str | None = None) -> list[Message]:
    """Messages of one session, or all of the user's messages, in send order."""
    stmt = select(Message).where(Message.user_id == user_id)
    if session_id:
        await get_owned_session(db, user_id, session_id)
        stmt = stmt.where(Message.chat_session_id == session_id)
    result = await db.execute(stmt.order_by(Message.timestamp.asc()))
    return list(result.scalars().all())


async def list_sessions(db: AsyncSession, user_id: str) -> list[tuple[ChatSession, int]]:
    counts = (
        select(Message.chat_session_id, func.count(Message.id).label("cnt"))
        .where(Message.user_id == user_id)
        .group_by(Message.chat_session_id)
        .subquery()
    )
    result = await db.execute(
        select(ChatSession, func.coalesce(counts.c.cnt, 0))
        .outerjoin(counts, counts.c.chat_session_id == ChatSession.id)
        .where(ChatSession.user_id == user_id)
        .order_by(ChatSession.updated_at.desc())
    )
    return [(s, n) for s, n in result.all()]


async def delete_session(db: AsyncSession, user_id: str, session_id: str) -> None:
    session = await get_owned_session(db, user_id, session_id)
    await db.execute(delete(Message).where(Message.chat_session_id == session.id))
    await db.delete(session)
    await db.commit()
