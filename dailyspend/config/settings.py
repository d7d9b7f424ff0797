"""
Configuration Management for Daily Spends

Uses pydantic-settings for type-safe configuration from environment variables.

DESIGN DECISION: All configuration is centralized here.
Which storage backend runs, where it keeps its files and how logs are
rendered are all decided at startup from the environment or a .env file.
"""

from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class StorageSettings(BaseSettings):
    """Record store configuration."""

    model_config = SettingsConfigDict(
        env_prefix="DAILYSPEND_STORAGE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    backend: Literal["memory", "json"] = Field(
        default="json",
        description="'memory' keeps records in process; 'json' persists them to data_dir"
    )
    data_dir: Path = Field(
        default=Path(".dailyspend"),
        description="Directory holding the two JSON collections"
    )
    categories_key: str = Field(
        default="dailyspend_categories",
        description="Collection name (file stem) for categories"
    )
    expenses_key: str = Field(
        default="dailyspend_expenses",
        description="Collection name (file stem) for expenses"
    )
    seed_default_categories: bool = Field(
        default=True,
        description="Create the default categories when the store is empty"
    )

    @field_validator("categories_key", "expenses_key")
    @classmethod
    def validate_key(cls, v: str) -> str:
        """Keys become file names, so no path separators."""
        if not v or "/" in v or "\\" in v:
            raise ValueError(f"Invalid collection key: {v!r}")
        return v


class AppSettings(BaseSettings):
    """
    Main application settings.

    Loads configuration from environment variables and .env file.
    """

    model_config = SettingsConfigDict(
        env_prefix="DAILYSPEND_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    app_environment: str = Field(
        default="development",
        description="Application environment"
    )
    currency: Literal["USD", "INR"] = Field(
        default="USD",
        description="Currency symbol used for display"
    )

    # Logging
    log_level: str = Field(
        default="INFO",
        description="Minimum level for structured logs"
    )
    json_logs: bool = Field(
        default=True,
        description="Render logs as JSON (False: human-readable console output)"
    )

    # HTTP transport
    api_host: str = Field(default="127.0.0.1")
    api_port: int = Field(default=8000, ge=1, le=65535)

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        level = v.upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Unknown log level: {v}")
        return level


class Settings(BaseSettings):
    """
    Root settings container.

    Aggregates all sub-settings for easy access.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    # Note: These are loaded lazily to allow partial configuration

    @property
    def storage(self) -> StorageSettings:
        return StorageSettings()

    @property
    def app(self) -> AppSettings:
        return AppSettings()


@lru_cache()
def get_settings() -> Settings:
    """
    Get application settings (cached).

    Uses LRU cache to ensure settings are only loaded once.
    Call get_settings.cache_clear() to reload if needed.
    """
    return Settings()


def validate_all_settings() -> dict[str, object]:
    """
    Validate all settings are properly configured.

    Returns a dict of {setting_name: is_valid} plus '<name>_error'
    entries for the ones that failed. Useful for startup checks.
    """
    results: dict[str, object] = {}

    settings = get_settings()

    try:
        _ = settings.storage
        results["storage"] = True
    except ValueError as e:
        results["storage"] = False
        results["storage_error"] = str(e)

    try:
        _ = settings.app
        results["app"] = True
    except ValueError as e:
        results["app"] = False
        results["app_error"] = str(e)

    return results
