"""Configuration management for TaskNest.

This module uses Pydantic Settings to load and validate configuration from
environment variables and .env files. Configuration is loaded at application
startup and is immutable during runtime.
"""

from functools import lru_cache
from typing import Any, Literal

from pydantic import Field, ValidationInfo, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_OTP_EXPIRY_MINUTES = 10
DEFAULT_INVITATION_EXPIRY_HOURS = 72

_DURATION_DEFAULTS = {
    "otp_expiry_minutes": DEFAULT_OTP_EXPIRY_MINUTES,
    "invitation_expiry_hours": DEFAULT_INVITATION_EXPIRY_HOURS,
}


class Settings(BaseSettings):
    """Application configuration settings.

    Settings are loaded from environment variables prefixed with ``TASKNEST_``
    and from a local .env file.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="TASKNEST_",
        case_sensitive=False,
        extra="ignore",
    )

    # Application Settings
    app_name: str = "TaskNest"
    app_version: str = "0.1.0"
    environment: Literal["development", "production", "testing"] = "development"
    debug: bool = False
    api_prefix: str = "/api"

    # Server Settings
    host: str = "0.0.0.0"
    port: int = 8000
    workers: int = 1

    # Database Settings
    database_url: str = "sqlite+aiosqlite:///./data/tasknest.db"
    db_pool_size: int = 5
    db_max_overflow: int = 10
    db_pool_timeout: int = 30
    db_pool_recycle: int = 3600
    db_echo: bool = False

    # Security Settings
    secret_key: str = Field(
        default="change-me-in-production-use-openssl-rand-hex-32",
        description="Secret key for JWT token signing",
    )
    access_token_expire_minutes: int = 60 * 24 * 7

    # CORS Settings
    cors_origins: list[str] = Field(default=["http://localhost:3000", "http://localhost:5173"])
    cors_allow_credentials: bool = True
    cors_allow_methods: list[str] = Field(default=["*"])
    cors_allow_headers: list[str] = Field(default=["*"])

    # Logging Settings
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    log_format: Literal["json", "console"] = "json"

    # Verification & Invitation Lifecycle
    otp_length: int = Field(default=6, ge=4, le=10)
    otp_expiry_minutes: int = DEFAULT_OTP_EXPIRY_MINUTES
    invitation_expiry_hours: int = DEFAULT_INVITATION_EXPIRY_HOURS
    cleanup_enabled: bool = True
    cleanup_interval_minutes: int = Field(default=60, ge=1)

    # Rate Limiting Settings (code issuance endpoints)
    rate_limit_enabled: bool = True
    rate_limit_per_minute: int = 5
    rate_limit_burst: float = 3.0

    # Email Settings
    email_provider: Literal["console", "smtp"] = "console"
    email_from: str = "noreply@tasknest.app"
    email_from_name: str = "TaskNest"
    smtp_host: str = "localhost"
    smtp_port: int = 587
    smtp_username: str = ""
    smtp_password: str = ""
    smtp_use_tls: bool = True
    smtp_use_ssl: bool = False
    smtp_timeout: int = 10
    frontend_url: str = "http://localhost:3000"

    @field_validator("cors_origins", mode="before")
    @classmethod
    def parse_cors_origins(cls, v: str | list[str]) -> list[str]:
        """Parse CORS origins from comma-separated string or list."""
        if isinstance(v, str):
            return [origin.strip() for origin in v.split(",")]
        return v

    @field_validator("otp_expiry_minutes", "invitation_expiry_hours", mode="before")
    @classmethod
    def fallback_to_default_duration(cls, v: Any, info: ValidationInfo) -> int:
        """Fall back to the documented default for missing or unusable durations."""
        default = _DURATION_DEFAULTS[info.field_name]
        try:
            value = int(v)
        except (TypeError, ValueError):
            return default
        return value if value > 0 else default

    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.environment == "production"

    @property
    def is_development(self) -> bool:
        """Check if running in development environment."""
        return self.environment == "development"

    @property
    def is_testing(self) -> bool:
        """Check if running in testing environment."""
        return self.environment == "testing"

    @model_validator(mode="after")
    def validate_sqlite_workers(self) -> "Settings":
        """Validate that SQLite is not used with multiple workers."""
        if self.workers > 1 and self.database_url.startswith("sqlite"):
            raise ValueError(
                "SQLite does not support multiple worker processes. "
                f"Requested {self.workers} workers, but SQLite requires workers=1. "
                "Either use --workers 1 or switch to PostgreSQL."
            )
        return self

    @property
    def database_url_sync(self) -> str:
        """Get synchronous database URL for migrations."""
        url = self.database_url
        if url.startswith("sqlite+aiosqlite"):
            return url.replace("sqlite+aiosqlite", "sqlite")
        if url.startswith("postgresql+asyncpg"):
            return url.replace("postgresql+asyncpg", "postgresql")
        return url


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance.

    This function caches the settings instance to avoid reloading
    configuration on every call. Settings are loaded once at startup.

    Returns:
        Settings: Cached application settings instance.
    """
    return Settings()
