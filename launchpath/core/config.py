"""
Application configuration using Pydantic Settings.

Environment-based infrastructure switching is controlled by the ENVIRONMENT variable.
"""

from functools import lru_cache
from typing import List, Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    # ===========================================
    # Environment
    # ===========================================
    ENVIRONMENT: Literal["local", "test"] = "local"
    DEBUG: bool = True
    LOG_LEVEL: str = "INFO"

    # ===========================================
    # Database
    # ===========================================
    DATABASE_URL: str = "sqlite+aiosqlite:///./launchpath.db"
    DATABASE_ECHO: bool = False

    # ===========================================
    # Auth
    # ===========================================
    # mock: bearer token is treated as the user id (development only)
    # local: password login + HS256 JWT
    AUTH_PROVIDER: Literal["mock", "local"] = "mock"
    LOCAL_JWT_SECRET: str = ""
    LOCAL_JWT_ISSUER: str = "launchpath-local"
    LOCAL_JWT_EXPIRE_MINUTES: int = 60 * 24 * 7

    # ===========================================
    # Server
    # ===========================================
    HOST: str = "0.0.0.0"
    PORT: int = 8000
    ALLOWED_ORIGINS: List[str] = Field(
        default=["http://localhost:3000", "http://localhost:5173"]
    )

    # ===========================================
    # Reminders
    # ===========================================
    REMINDER_SCAN_INTERVAL_MINUTES: int = 30
    # A task is "due soon" when its due date falls within this window
    DUE_SOON_HOURS: int = 48
    # An In Progress task untouched for this long is "stuck"
    STUCK_AFTER_DAYS: int = 7

    @property
    def is_local(self) -> bool:
        """Check if running in local environment."""
        return self.ENVIRONMENT == "local"

    @property
    def is_test(self) -> bool:
        """Check if running under the test suite."""
        return self.ENVIRONMENT == "test"


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Using lru_cache ensures settings are loaded only once.
    """
    return Settings()
