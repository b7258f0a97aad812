"""Shared fixtures: in-memory database, scripted LLM provider, signed-in clients."""
import pytest
from fastapi.testclient import TestClient

from codehelper.core.config import Settings
from codehelper.core.security import create_access_token
from codehelper.db.base import Base
from codehelper.db.session import create_engine, create_sessionmaker
from codehelper.main import create_app
from codehelper.models.user import User
from fakes import FakeLLMProvider

TEST_DB_URL = "sqlite+aiosqlite:///:memory:"


@pytest.fixture
def anyio_backend():
    return "asyncio"


@pytest.fixture
def settings():
    return Settings(
        database_url=TEST_DB_URL,
        auth_secret_key="test-secret",
        admin_emails="admin@example.com",
        llm_provider="mock",
        resend_api_key=None,
        chat_topic_filter=False,
        _env_file=None,
    )


@pytest.fixture
def llm():
    return FakeLLMProvider()


@pytest.fixture
def app(settings, llm):
    return create_app(settings=settings, llm_provider=llm)


@pytest.fixture
def client(app):
    with TestClient(app) as c:
        yield c


@pytest.fixture
def make_headers(settings):
    def _make(user_id="user_1", email=None):
        extra = {"email": email} if email else None
        return {"Authorization": f"Bearer {create_access_token(settings, user_id, extra=extra)}"}

    return _make


@pytest.fixture
def headers(make_headers):
    return make_headers("user_1", "learner@example.com")


@pytest.fixture
def admin_headers(make_headers):
    return make_headers("admin_1", "admin@example.com")


def complete_onboarding(client: TestClient, headers: dict) -> None:
    """Fill in the profile and take the pre-assessment so the chat opens."""
    r = client.put(
        "/api/profile",
        json={"experience": "beginner", "focus_areas": ["debugging"], "confidence": 3},
        headers=headers,
    )
    assert r.status_code == 200
    questions = client.get("/api/assessment/questions", params={"limit": 3}, headers=headers).json()
    r = client.post(
        "/api/assessment",
        json={
            "type": "pre",
            "confidence": 3,
            "answers": [{"question_id": q["id"], "answer": "no idea"} for q in questions],
        },
        headers=headers,
    )
    assert r.status_code == 201


@pytest.fixture
def onboarded_headers(client, headers):
    complete_onboarding(client, headers)
    return headers


@pytest.fixture
async def db():
    """Bare async session over a fresh in-memory schema, for service-level tests."""
    engine = create_engine(TEST_DB_URL)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    async with create_sessionmaker(engine)() as session:
        yield session
    await engine.dispose()


@pytest.fixture
async def user(db):
    u = User(id="user_1", email="learner@example.com")
    db.add(u)
    await db.commit()
    return u
