"""Configuration management for Storefront.

This module uses Pydantic Settings to load and validate configuration from
environment variables and .env files. Configuration is loaded at application
startup and is immutable during runtime.
"""

from functools import lru_cache
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_SECRET_KEY = "change-me-in-production-use-openssl-rand-hex-32"


class Settings(BaseSettings):
    """Application configuration settings.

    Settings are loaded from environment variables and .env files.
    All configuration values are validated at startup.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="STOREFRONT_",
        case_sensitive=False,
        extra="ignore",
    )

    # Application Settings
    app_name: str = "Storefront"
    app_version: str = "0.1.0"
    environment: Literal["development", "production", "testing"] = "development"
    debug: bool = False

    # Server Settings
    host: str = "0.0.0.0"
    port: int = 4000

    # Database Settings
    database_url: str = "sqlite+aiosqlite:///./data/storefront.db"
    db_echo: bool = False

    # Security Settings
    secret_key: str = Field(
        default=DEFAULT_SECRET_KEY,
        description="Secret key for session token signing",
    )
    session_token_ttl_days: int = Field(default=7, ge=1)
    password_hash_time_cost: int = Field(
        default=10,
        ge=1,
        description="Argon2 time cost (number of iterations) for password hashing",
    )

    # CORS Settings
    cors_origins: list[str] = Field(default=[])
    cors_origin_regex: str | None = (
        r"https?://(localhost|127\.0\.0\.1)(:\d+)?|https://[\w.-]+\.github\.io"
    )

    # Logging Settings
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    log_format: Literal["json", "console"] = "json"

    # Product Image Storage Settings
    storage_path: str = "./data/images"
    max_image_size: int = 5 * 1024 * 1024  # 5MB in bytes
    allowed_image_types: list[str] = Field(
        default=[
            "image/jpeg",
            "image/png",
            "image/gif",
            "image/webp",
        ]
    )

    # Rate Limiting Settings
    rate_limit_enabled: bool = True
    rate_limit_max_requests: int = 100
    rate_limit_window_seconds: int = 15 * 60

    # Administrator bootstrap (created on startup if all three are set)
    admin_account: str | None = None
    admin_email: str | None = None
    admin_password: str | None = None

    @field_validator("cors_origins", mode="before")
    @classmethod
    def parse_cors_origins(cls, v: str | list[str]) -> list[str]:
        """Parse CORS origins from comma-separated string or list."""
        if isinstance(v, str):
            return [origin.strip() for origin in v.split(",") if origin.strip()]
        return v

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

    @property
    def has_admin_bootstrap(self) -> bool:
        """Whether an administrator account should be ensured on startup."""
        return bool(self.admin_account and self.admin_email and self.admin_password)


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance.

    This function caches the settings instance to avoid reloading
    configuration on every call. Settings are loaded once at startup.

    Returns:
        Settings: Cached application settings instance.
    """
    return Settings()
