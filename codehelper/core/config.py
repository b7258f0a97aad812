"""Application configuration from environment."""
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """App settings loaded from env / .env."""

    app_name: str = "Programming Helper AI"
    debug: bool = False
    log_level: str = "INFO"

    # Database
    database_url: str = "sqlite+aiosqlite:///./programming_helper.db"
    database_echo: bool = False
    create_tables_on_startup: bool = True

    # Identity tokens issued by the auth provider
    auth_secret_key: str = "change-me-in-production-use-env"
    auth_algorithm: str = "HS256"
    auth_token_expire_minutes: int = 60 * 24 * 7  # 7 days
    auth_cookie_name: str = "__session"
    admin_emails: str = ""  # comma separated

    # LLM provider
    llm_provider: str = "openai"  # openai | mock
    openai_api_key: str | None = None
    openai_model: str = "gpt-3.5-turbo"
    openai_timeout: float = 60.0
    llm_max_tokens: int = 1000
    llm_temperature: float = 0.7

    # Chat
    chat_rate_limit: int = 10
    chat_rate_window_ms: int = 60_000
    chat_history_limit: int = 20
    require_onboarding: bool = True
    chat_topic_filter: bool = True  # answer off-topic questions locally

    # Contact form email (Resend)
    resend_api_key: str | None = None
    contact_email: str = "support@programming-helper.dev"
    contact_from_email: str = "Programming Helper AI <onboarding@resend.dev>"

    # Assessments
    post_assessment_min_minutes: int = 30

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        extra = "ignore"

    @property
    def admin_email_set(self) -> set[str]:
        return {e.strip().lower() for e in self.admin_emails.split(",") if e.strip()}


def get_settings() -> Settings:
    return Settings()
