"""Configuration management for PromptGate.

This module uses Pydantic Settings to load and validate configuration from
environment variables and .env files. Configuration is loaded once and is
immutable during runtime.
"""

from functools import lru_cache
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration settings.

    Settings are loaded from environment variables and .env files.
    All configuration values are validated at startup.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="PROMPTGATE_",
        case_sensitive=False,
        extra="ignore",
    )

    # Application Settings
    app_name: str = "PromptGate"
    app_version: str = "0.1.0"
    environment: Literal["development", "production", "testing"] = "development"
    debug: bool = False

    # Logging Settings
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    log_format: Literal["json", "console"] = "json"

    # Database Settings
    database_url: str = "sqlite+aiosqlite:///./pg_data/promptgate.db"
    db_echo: bool = False

    # Access Policy Defaults
    default_allow_when_no_groups: bool = Field(
        default=False,
        description="Allow prompts for users that belong to no group",
    )
    default_allow_when_no_time_windows: bool = Field(
        default=True,
        description="Allow prompts for groups that have no active time windows",
    )
    honor_window_timezones: bool = Field(
        default=False,
        description="Evaluate each window in its own timezone instead of UTC",
    )

    # Roles that skip time window checks entirely
    bypass_roles: list[str] = Field(default=["admin", "system_admin"])

    @field_validator("bypass_roles", mode="before")
    @classmethod
    def parse_bypass_roles(cls, v: str | list[str]) -> list[str]:
        """Parse bypass roles from comma-separated string or list."""
        if isinstance(v, str):
            return [role.strip() for role in v.split(",") if role.strip()]
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


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance.

    This function caches the settings instance to avoid reloading
    configuration on every call. Settings are loaded once at startup.

    Returns:
        Settings: Cached application settings instance.
    """
    return Settings()
