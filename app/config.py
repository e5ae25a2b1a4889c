"""
Configuration module for environment variables.
"""
from functools import lru_cache
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Database
    database_url: str = Field(
        default="sqlite:///./task_management.db",
        description="SQLAlchemy database URL (SQLite or PostgreSQL)"
    )

    # JWT bearer tokens
    jwt_key: str = Field(
        default="ThisIsASecretKeyForDemoPurposesOnlyChangeMe",
        description="Symmetric HS256 signing key"
    )
    jwt_issuer: str = Field(default="TaskManagementDemo")
    jwt_audience: str = Field(default="TaskManagementUsers")
    jwt_expires_minutes: int = Field(
        default=60,
        description="Token lifetime in minutes"
    )

    # Password hashing
    bcrypt_rounds: int = Field(
        default=12,
        description="bcrypt cost factor used for new password hashes"
    )

    # Identity resolution
    allow_identity_header: bool = Field(
        default=True,
        description="Accept X-User-Id when no bearer token is sent (compatibility only)"
    )

    # Bootstrap
    seed_default_users: bool = Field(
        default=True,
        description="Ensure the demo Admin/Manage/Employee accounts exist on startup"
    )

    # Application Settings
    app_env: str = Field(default="development")
    debug: bool = Field(default=False)
    log_level: str = Field(default="INFO")
    log_file: Optional[str] = Field(default=None)

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached settings instance.
    Uses lru_cache to ensure settings are loaded only once.
    """
    return Settings()


# Convenience alias for direct access
settings = get_settings()
