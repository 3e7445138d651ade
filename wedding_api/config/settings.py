from functools import lru_cache

from pydantic import model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # App
    app_host: str = "0.0.0.0"
    app_port: int = 8000
    debug: bool = False
    frontend_url: str = "http://localhost:5173"
    cors_origins: list[str] = []

    ENVIRONMENT: str = "production"

    # Database - either a full URL or the individual credentials
    database_url: str = ""
    db_user: str = "postgres"
    db_password: str = "postgres"
    db_host: str = "localhost"
    db_port: int = 5432
    db_name: str = "wedding_rsvp"
    LOG_DB: bool = False

    # RSVP
    rsvp_by_date: str = ""
    wedding_name: str = "Sagar & Grace"
    travel_booking_url: str = ""

    # JWT
    secret_key: str = "your-super-secret-key-change-in-production"
    algorithm: str = "HS256"
    access_token_expire_minutes: int = 60 * 24 * 7  # 7 days

    # Email (SMTP)
    confirmation_email_enabled: bool = True
    smtp_host: str = "localhost"
    smtp_port: int = 1025
    smtp_user: str = ""
    smtp_password: str = ""
    emails_from: str = "rsvp@sagar-grace.wedding"

    # Email (Resend) - if set, use Resend API instead of SMTP
    resend_api_key: str = ""

    SENTRY_DSN: str = ""
    SENTRY_TRACES_SAMPLE_RATE: float = 0.0
    SENTRY_PROFILES_SAMPLE_RATE: float = 0.0

    RUN_MIGRATIONS_ON_STARTUP: bool = False

    @model_validator(mode="after")
    def default_cors_to_frontend(self) -> "Settings":
        if not self.cors_origins:
            self.cors_origins = [self.frontend_url]
        return self

    @property
    def DB_DSN(self) -> str:
        if self.database_url:
            return self.database_url
        return (
            f"postgresql+asyncpg://{self.db_user}:{self.db_password}"
            f"@{self.db_host}:{self.db_port}/{self.db_name}"
        )

    @property
    def is_development(self) -> bool:
        return self.ENVIRONMENT.lower() == "development"

    @property
    def email_configured(self) -> bool:
        """Whether a sender and at least one delivery provider are set."""
        return bool(self.emails_from) and bool(self.resend_api_key or self.smtp_host)

    @property
    def rsvp_url(self) -> str:
        return f"{self.frontend_url.rstrip('/')}/rsvp"


@lru_cache
def get_settings() -> Settings:
    return Settings()


settings = get_settings()
