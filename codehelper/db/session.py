"""Async engine / session factory and the declarative Base."""
from collections.abc import AsyncIterator

from fastapi import Request
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import declarative_base
from sqlalchemy.pool import StaticPool

Base = declarative_base()


def create_engine(database_url: str, echo: bool = False) -> AsyncEngine:
    kwargs = {"echo": echo}
    if database_url.startswith("sqlite") and ":memory:" in database_url:
        # one shared connection, otherwise every checkout sees an empty database
        kwargs.update(poolclass=StaticPool, connect_args={"check_same_thread": False})
    return create_async_engine(database_url, **kwargs)


def create_sessionmaker(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(engine, expire_on_commit=False)


async def get_db(request: Request) -> AsyncIterator[AsyncSession]:
    """FastAPI dependency: one session per request."""
    async with request.app.state.sessionmaker() as db:
        yield db
