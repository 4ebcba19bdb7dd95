# -*- coding: utf-8 -*-
from datetime import timedelta
from enum import Enum
from functools import lru_cache
from pydantic_settings import BaseSettings, SettingsConfigDict


class Environment(str, Enum):
    """Application environment."""

    DEVELOPMENT = "development"
    PRODUCTION = "production"
    TEST = "test"


class Settings(BaseSettings):
    """Application settings.

    Settings are loaded from environment variables with optional .env file support.
    Environment-specific settings are automatically applied based on APP_ENV.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Environment
    app_env: Environment = Environment.DEVELOPMENT

    # App
    app_name: str = "NEST FEST"
    app_version: str = "0.1.0"
    debug: bool = False
    site_url: str = "https://nestfest.org"

    # API
    api_v1_prefix: str = "/api/v1"

    # Server
    host: str = "0.0.0.0"
    port: int = 8000
    workers: int = 1

    # Sessions
    session_secret: str = ""
    session_cookie_name: str = "nest-fest-session"
    cookie_domain: str = ""
    session_hours_development: int = 24 * 7
    session_hours_production: int = 8

    # Google Sheets (service account)
    google_sheet_id: str = ""
    google_client_email: str = ""
    google_private_key: str = ""

    # SendGrid
    sendgrid_api_key: str = ""
    sendgrid_from_email: str = ""
    email_timeout_seconds: float = 10.0

    # Anthropic Claude
    anthropic_api_key: str = ""
    anthropic_model: str = "claude-sonnet-4-5"
    anthropic_max_tokens: int = 1500
    anthropic_timeout_seconds: float = 30.0
    log_ai_usage: bool = False

    # Per-client action limits (count per window seconds)
    submission_limit: int = 3
    submission_window_seconds: int = 60 * 60
    login_limit: int = 5
    login_window_seconds: int = 15 * 60
    generation_limit: int = 10
    generation_window_seconds: int = 60 * 60
    limiter_sweep_seconds: int = 60

    # Background scheduler
    scheduler_enabled: bool = True

    # CORS (comma-separated origins for production)
    cors_origins: str = "*"

    # Logging
    log_level: str = "INFO"
    log_format: str = "json"  # "json" for production, "console" for development

    # Sentry (Error Tracking)
    sentry_dsn: str = ""
    sentry_traces_sample_rate: float = 0.1
    sentry_profiles_sample_rate: float = 0.1

    @property
    def is_development(self) -> bool:
        """Check if running in development mode."""
        return self.app_env == Environment.DEVELOPMENT

    @property
    def is_production(self) -> bool:
        """Check if running in production mode."""
        return self.app_env == Environment.PRODUCTION

    @property
    def is_test(self) -> bool:
        """Check if running in test mode."""
        return self.app_env == Environment.TEST

    @property
    def cors_origins_list(self) -> list[str]:
        """Get CORS origins as a list."""
        if self.cors_origins == "*":
            return ["*"]
        return [origin.strip() for origin in self.cors_origins.split(",")]

    @property
    def session_duration(self) -> timedelta:
        """Lifetime of an admin session for the current environment."""
        if self.is_production:
            return timedelta(hours=self.session_hours_production)
        return timedelta(hours=self.session_hours_development)

    @property
    def google_private_key_pem(self) -> str:
        """Service account key with escaped newlines restored."""
        return self.google_private_key.replace("\\n", "\n")

    @property
    def sheets_configured(self) -> bool:
        """Check if spreadsheet credentials are present."""
        return bool(
            self.google_sheet_id and self.google_client_email and self.google_private_key
        )

    @property
    def email_configured(self) -> bool:
        """Check if SendGrid credentials are present."""
        return bool(self.sendgrid_api_key and self.sendgrid_from_email)


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
