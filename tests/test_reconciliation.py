"""Counter bookkeeping driven through the chat service against a real schema."""
import asyncio

import pytest
from sqlalchemy import select

from codehelper.core.errors import LLMProviderError, NotFoundError
from codehelper.db.base import Base
from codehelper.db.session import create_engine, create_sessionmaker
from codehelper.models.chat import ChatSession, Message
from codehelper.models.stats import LanguageProgress, Stats
from codehelper.models.user import User
from codehelper.services.chat import send_message
from codehelper.services.reconciliation import (
    ensure_language_progress,
    most_frequent_question_type,
    record_question,
    record_task_completion,
)
from fakes import FakeLLMProvider


def step_clock(latencies):
    """perf_counter stand-in: each pair of calls is `latency` seconds apart."""
    ticks = []
    t = 0.0
    for latency in latencies:
        ticks += [t, t + latency]
        t += 100.0
    it = iter(ticks)
    return lambda: next(it)


async def _stats(db, user_id="user_1"):
    db.expire_all()
    result = await db.execute(select(Stats).where(Stats.user_id == user_id))
    return result.scalar_one_or_none()


@pytest.mark.anyio
async def test_average_is_exact_mean_of_latencies(db, user):
    latencies = [1.5, 0.25, 4.0, 2.25, 3.0]
    provider = FakeLLMProvider()
    clock = step_clock(latencies)
    session_id = None
    for i in range(len(latencies)):
        _, session_id = await send_message(db, provider, user, f"question {i}", session_id, clock=clock)

    stats = await _stats(db)
    assert stats.questions_asked == len(latencies)
    assert stats.avg_response_time == pytest.approx(sum(latencies) / len(latencies))


@pytest.mark.anyio
async def test_provider_failure_leaves_counters_untouched(db, user):
    provider = FakeLLMProvider()
    await send_message(db, provider, user, "first", clock=step_clock([1.0]))

    provider.fail = True
    with pytest.raises(LLMProviderError):
        await send_message(db, provider, user, "second", clock=step_clock([1.0]))
    await db.rollback()

    stats = await _stats(db)
    assert stats.questions_asked == 1
    # the question itself was stored before the provider was called
    roles = (await db.execute(select(Message.role).order_by(Message.timestamp))).scalars().all()
    assert roles == ["user", "assistant", "user"]


@pytest.mark.anyio
async def test_first_exchange_retitles_session(db, user):
    provider = FakeLLMProvider(title="Loop Basics")
    _, session_id = await send_message(db, provider, user, "how do loops work", clock=step_clock([1.0]))
    session = await db.get(ChatSession, session_id)
    assert session.title == "Loop Basics"

    provider.title = "Something Else"
    await send_message(db, provider, user, "and while loops?", session_id, clock=step_clock([1.0]))
    await db.refresh(session)
    assert session.title == "Loop Basics"


@pytest.mark.anyio
async def test_title_failure_falls_back_to_message(db, user):
    provider = FakeLLMProvider()
    provider.fail_title = True
    _, session_id = await send_message(db, provider, user, "why is my loop infinite", clock=step_clock([1.0]))
    session = await db.get(ChatSession, session_id)
    assert session.title == "why is my loop infinite"
    assert (await _stats(db)).questions_asked == 1


@pytest.mark.anyio
async def test_foreign_session_is_not_found(db, user):
    db.add(User(id="other"))
    db.add(ChatSession(id="s-other", user_id="other", title="theirs"))
    await db.commit()
    with pytest.raises(NotFoundError):
        await send_message(db, FakeLLMProvider(), user, "hi", "s-other", clock=step_clock([1.0]))


@pytest.mark.anyio
async def test_language_progress_follows_detected_language(db, user):
    provider = FakeLLMProvider()
    clock = step_clock([1.0, 1.0, 1.0])
    await send_message(db, provider, user, "python decorators?", clock=clock)
    await send_message(db, provider, user, "python generators?", clock=clock)
    await send_message(db, provider, user, "what is a linked list", clock=clock)

    db.expire_all()
    rows = (await db.execute(select(LanguageProgress))).scalars().all()
    assert [(r.language, r.questions_asked) for r in rows] == [("python", 2)]
    assert rows[0].last_used_at is not None


@pytest.mark.anyio
async def test_most_frequent_type_tie_goes_to_current_label(db, user):
    for i, label in enumerate(["Code Review", "Algorithm Help"]):
        db.add(Message(id=f"m{i}", user_id=user.id, role="user", content="x", question_type=label))
    await db.commit()
    # current label plus one earlier match
    assert await most_frequent_question_type(db, user.id, "Algorithm Help") == "Algorithm Help"
    # one of each: the current label is seen first
    assert await most_frequent_question_type(db, user.id, "Code Debugging") == "Code Debugging"


@pytest.mark.anyio
async def test_most_frequent_type_majority_wins(db, user):
    for i in range(3):
        db.add(Message(id=f"m{i}", user_id=user.id, role="user", content="x", question_type="Code Review"))
    await db.commit()
    assert await most_frequent_question_type(db, user.id, "Code Debugging") == "Code Review"


@pytest.mark.anyio
async def test_record_question_creates_missing_row(db, user):
    await record_question(db, user.id, 2.0, "Code Review")
    await record_question(db, user.id, 4.0, "Code Review")
    await db.commit()
    stats = await _stats(db)
    assert stats.questions_asked == 2
    assert stats.avg_response_time == pytest.approx(3.0)
    assert stats.most_frequent_response_type == "Code Review"


@pytest.mark.anyio
async def test_ensure_language_progress_is_idempotent(db, user):
    await ensure_language_progress(db, user.id, ["python", "go", "python"])
    await ensure_language_progress(db, user.id, ["python", "go"])
    await db.commit()
    rows = (await db.execute(select(LanguageProgress.language))).scalars().all()
    assert sorted(rows) == ["go", "python"]


@pytest.mark.anyio
async def test_record_task_completion_moves_both_counters(db, user):
    await record_task_completion(db, user.id, "rust")
    await record_task_completion(db, user.id, None)
    await db.commit()
    assert (await _stats(db)).tasks_completed == 2
    progress = (await db.execute(select(LanguageProgress))).scalar_one()
    assert (progress.language, progress.tasks_completed) == ("rust", 1)


@pytest.mark.anyio
async def test_concurrent_questions_are_all_counted(tmp_path):
    engine = create_engine(f"sqlite+aiosqlite:///{tmp_path / 'counters.db'}")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    sessionmaker = create_sessionmaker(engine)
    async with sessionmaker() as db:
        db.add(User(id="user_1"))
        await db.commit()

    async def ask(latency):
        async with sessionmaker() as db:
            await record_question(db, "user_1", latency, "Code Debugging")
            await db.commit()

    latencies = [float(n) for n in range(1, 21)]
    try:
        await asyncio.gather(*(ask(latency) for latency in latencies))
        async with sessionmaker() as db:
            stats = await _stats(db)
    finally:
        await engine.dispose()

    assert stats.questions_asked == len(latencies)
    assert stats.avg_response_time == pytest.approx(sum(latencies) / len(latencies))
