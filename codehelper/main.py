"""Programming Helper AI - FastAPI app entry point."""
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from codehelper.core.config import Settings, get_settings
from codehelper.core.errors import AppError, LLMProviderError
from codehelper.core.logging_config import configure_logging
from codehelper.core.rate_limit import RateLimiter
from codehelper.db.base import Base
from codehelper.db.session import create_engine, create_sessionmaker
from codehelper.routers import admin, assessment, auth, chat, contact, onboarding, profile, stats, task
from codehelper.services.email import create_email_sender
from codehelper.services.llm import LLMProvider, create_llm_provider
from codehelper.services.seeding import seed_content

logger = logging.getLogger(__name__)

GENERIC_ERROR = "An unexpected error occurred. Please try again."


def create_app(settings: Settings | None = None, llm_provider: LLMProvider | None = None) -> FastAPI:
    settings = settings or get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        configure_logging(settings.log_level)
        engine = create_engine(settings.database_url, echo=settings.database_echo)
        app.state.engine = engine
        app.state.sessionmaker = create_sessionmaker(engine)

        if settings.create_tables_on_startup:
            async with engine.begin() as conn:
                await conn.run_sync(Base.metadata.create_all)
            async with app.state.sessionmaker() as db:
                await seed_content(db)

        app.state.llm = llm_provider or create_llm_provider(settings)
        app.state.rate_limiter = RateLimiter(settings.chat_rate_limit, settings.chat_rate_window_ms)
        app.state.email_sender = create_email_sender(settings)
        logger.info("%s started (llm=%s)", settings.app_name, app.state.llm.name)

        yield

        await app.state.llm.aclose()
        await app.state.email_sender.aclose()
        await engine.dispose()
        logger.info("%s stopped", settings.app_name)

    app = FastAPI(
        title=settings.app_name,
        description="AI programming assistant with learning progress tracking",
        debug=settings.debug,
        lifespan=lifespan,
    )
    app.state.settings = settings

    @app.exception_handler(AppError)
    async def app_error_handler(request: Request, exc: AppError):
        return JSONResponse(
            status_code=exc.status_code,
            content={"detail": exc.detail, "code": exc.error_code, **exc.extra},
            headers=exc.headers,
        )

    @app.exception_handler(LLMProviderError)
    async def llm_error_handler(request: Request, exc: LLMProviderError):
        logger.error(
            "LLM provider failed for user %s on %s: %s",
            getattr(request.state, "user_id", None), request.url.path, exc,
        )
        return JSONResponse(
            status_code=500,
            content={"detail": str(exc) if settings.debug else GENERIC_ERROR, "code": "INTERNAL_SERVER_ERROR"},
        )

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception):
        logger.exception(
            "Unhandled error for user %s on %s %s",
            getattr(request.state, "user_id", None), request.method, request.url.path,
        )
        return JSONResponse(
            status_code=500,
            content={"detail": str(exc) if settings.debug else GENERIC_ERROR, "code": "INTERNAL_SERVER_ERROR"},
        )

    for module in (auth, chat, stats, profile, onboarding, assessment, task, admin, contact):
        app.include_router(module.router)

    @app.get("/health")
    async def health():
        return {"status": "ok"}

    return app


app = create_app()
