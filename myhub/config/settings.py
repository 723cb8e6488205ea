"""
Configuration Management for MyHub

Uses pydantic-settings for type-safe configuration from environment variables.

DESIGN DECISION: All configuration is centralized here.
Every tunable (storage location, quota, paging defaults, log format)
is visible in one place and validated at startup.
"""

from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class StorageSettings(BaseSettings):
    """Key-value store configuration."""

    model_config = SettingsConfigDict(
        env_prefix="MYHUB_STORAGE_",
        extra="ignore"
    )

    backend: Literal["memory", "file"] = Field(
        default="file",
        description="Which key-value store backend to use"
    )
    path: Path = Field(
        default=Path.home() / ".myhub" / "storage.json",
        description="Location of the JSON file for the file backend"
    )
    key_prefix: str = Field(
        default="myhub_",
        description="Prefix applied to every storage key"
    )
    # Browsers typically allow ~5MB of local storage per origin
    quota_bytes: int = Field(
        default=5 * 1024 * 1024,
        ge=0,
        description="Maximum total size of stored values (0 disables the quota)"
    )

    @field_validator("key_prefix")
    @classmethod
    def validate_key_prefix(cls, v: str) -> str:
        """Prefixes must not contain whitespace."""
        if any(ch.isspace() for ch in v):
            raise ValueError("Storage key prefix cannot contain whitespace")
        return v


class LoggingSettings(BaseSettings):
    """Structured logging configuration."""

    model_config = SettingsConfigDict(
        env_prefix="MYHUB_LOG_",
        extra="ignore"
    )

    level: str = Field(
        default="INFO",
        description="Minimum log level"
    )
    json_output: bool = Field(
        default=True,
        description="Render log lines as JSON (False renders for the console)"
    )

    @field_validator("level")
    @classmethod
    def validate_level(cls, v: str) -> str:
        allowed = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        if v.upper() not in allowed:
            raise ValueError(f"Unsupported log level: {v}. Allowed: {allowed}")
        return v.upper()


class AppSettings(BaseSettings):
    """
    Main application settings.

    Loads configuration from environment variables and .env file.
    """

    model_config = SettingsConfigDict(
        env_prefix="MYHUB_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    default_page_limit: int = Field(
        default=50,
        ge=1,
        le=1000,
        description="Page size used when a search request gives no limit"
    )
    export_version: str = Field(
        default="1.0",
        description="Version stamped into password export files"
    )
    backup_version: str = Field(
        default="1.0.0",
        description="Version stamped into whole-store backups"
    )
    default_program_id: str = Field(
        default="default",
        description="Program partition used when none is given"
    )


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

    storage: StorageSettings = Field(default_factory=StorageSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)
    app: AppSettings = Field(default_factory=AppSettings)


@lru_cache()
def get_settings() -> Settings:
    """
    Get application settings (cached).

    Uses LRU cache to ensure settings are only loaded once.
    Call get_settings.cache_clear() to reload if needed.
    """
    return Settings()
