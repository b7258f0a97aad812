import pytest
from sqlalchemy import select

from codehelper.core.config import Settings
from codehelper.models.chat import Message
from codehelper.models.stats import Stats
from codehelper.services.chat import send_message
from codehelper.services.validator import REJECTION_MESSAGES, get_rejection_message, is_programming_related
from fakes import FakeLLMProvider

PROGRAMMING_HISTORY = [
    {"role": "user", "content": "How do I sort an array in Python?"},
    {"role": "assistant", "content": "Use sorted()."},
]
SMALL_TALK_HISTORY = [{"role": "user", "content": "I love pizza"}]


@pytest.mark.parametrize(
    "message",
    [
        "How do I reverse a list in Python?",
        "x = 5",
        "why does my essay generator in python crash",
        "main.rs",
    ],
)
def test_programming_questions_pass(message):
    assert is_programming_related(message)


@pytest.mark.parametrize("message", ["hi", "  ok  ", "Tell me about the weather", "any more tips?"])
def test_off_topic_without_history(message):
    assert not is_programming_related(message)


def test_follow_up_continues_programming_conversation():
    assert is_programming_related("any more tips?", PROGRAMMING_HISTORY)
    assert not is_programming_related("any more tips?", SMALL_TALK_HISTORY)


def test_off_topic_word_allowed_after_programming_turns():
    assert is_programming_related("Tell me about the weather", PROGRAMMING_HISTORY)
    assert not is_programming_related("Tell me about the weather", SMALL_TALK_HISTORY)


def test_short_message_rejected_even_with_history():
    assert not is_programming_related("hm", PROGRAMMING_HISTORY)


def test_rejection_message():
    assert get_rejection_message() in REJECTION_MESSAGES
    assert get_rejection_message(choice=lambda options: options[-1]) == REJECTION_MESSAGES[-1]


@pytest.mark.anyio
async def test_refused_question_skips_provider_and_counters(db, user):
    provider = FakeLLMProvider()
    reply, session_id = await send_message(db, provider, user, "Tell me about the weather", topic_filter=True)

    assert reply in REJECTION_MESSAGES
    assert provider.calls == []
    stored = (await db.execute(select(Message.role).where(Message.chat_session_id == session_id))).scalars().all()
    assert sorted(stored) == ["assistant", "user"]
    assert (await db.execute(select(Stats))).scalar_one_or_none() is None


@pytest.fixture
def settings():
    return Settings(
        database_url="sqlite+aiosqlite:///:memory:",
        auth_secret_key="test-secret",
        llm_provider="mock",
        chat_topic_filter=True,
        _env_file=None,
    )


def test_chat_filters_off_topic_questions(client, onboarded_headers, llm):
    r = client.post("/api/chat/messages", json={"message": "Tell me about the weather"}, headers=onboarded_headers)
    assert r.status_code == 200
    assert r.json()["response"] in REJECTION_MESSAGES
    assert llm.calls == []

    session_id = r.json()["session_id"]
    r = client.post(
        "/api/chat/messages",
        json={"message": "How do I sort a list in Python?", "session_id": session_id},
        headers=onboarded_headers,
    )
    assert r.json()["response"] == llm.answer

    r = client.post(
        "/api/chat/messages",
        json={"message": "any more tips?", "session_id": session_id},
        headers=onboarded_headers,
    )
    assert r.json()["response"] == llm.answer
    assert client.get("/api/stats/me", headers=onboarded_headers).json()["questions_asked"] == 2
