"""Application configuration using Pydantic Settings.

Configuration is environment-aware:
- APP_ENV determines which .env file to load
- Supports: development, testing, staging, production
- Each environment has its own .env.{environment} file
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


# Determine which environment to load (default: development)
APP_ENV = os.getenv("APP_ENV", "development")

# Project root (so .env resolution doesn't depend on current working directory)
PROJECT_ROOT = Path(__file__).resolve().parents[2]

ENV_FILE_MAP = {
    "development": ".env.development",
    "testing": ".env.testing",
    "staging": ".env.staging",
    "production": ".env.production",
}

_env_filename = ENV_FILE_MAP.get(APP_ENV, ".env.development")
_env_path = PROJECT_ROOT / _env_filename

# Only load from file if it exists (production might inject via env vars only)
_env_file = str(_env_path) if _env_path.is_file() else None


# Nested BaseSettings don't inherit env_file, so populate os.environ up front
if _env_file:
    from dotenv import load_dotenv
    load_dotenv(_env_file, override=True)


DEFAULT_ENDPOINT_URL = "https://ismp.crpt.ru/api/v3/lk/documents/create"


class ApiSettings(BaseSettings):
    """Outbound document API configuration."""

    endpoint_url: str = Field(
        DEFAULT_ENDPOINT_URL,
        description="URL that receives document creation requests",
    )
    timeout_seconds: float = Field(
        30.0,
        description="Timeout for a single send attempt in seconds",
        gt=0,
    )
    success_status: int = Field(
        200,
        description="HTTP status treated as a successful document creation",
    )
    signature: str = Field(
        "test_signature",
        description="Signature used by the demo runner when none is supplied",
    )

    model_config = SettingsConfigDict(
        env_prefix="API_",
        case_sensitive=False,
    )


class LimiterSettings(BaseSettings):
    """Admission window and quota configuration."""

    window_seconds: float = Field(
        1.0,
        description="Duration of one admission window in seconds",
        gt=0,
    )
    max_requests: int = Field(
        5,
        description="Maximum number of requests admitted per window",
        ge=1,
    )
    policy: Literal["fixed", "sliding"] = Field(
        "fixed",
        description="Window policy: periodic fixed windows or a sliding log",
    )

    model_config = SettingsConfigDict(
        env_prefix="LIMITER_",
        case_sensitive=False,
    )


class LogSettings(BaseSettings):
    """Logging configuration."""

    level: str = Field("INFO", description="Root log level")
    format: Literal["json", "plain"] = Field(
        "json",
        description="Log line format",
    )
    output: Literal["stdout", "file"] = Field(
        "stdout",
        description="Where log lines are written",
    )
    file_path: str | None = Field(
        None,
        description="Log file path when output=file",
    )
    max_bytes: int = Field(
        0,
        description="Rotate the log file at this size (0 disables rotation)",
        ge=0,
    )
    backup_count: int = Field(
        3,
        description="Number of rotated log files to keep",
        ge=0,
    )
    request_id_header: str = Field(
        "X-Request-ID",
        description="Header used to propagate correlation ids",
    )

    model_config = SettingsConfigDict(
        env_prefix="LOG_",
        case_sensitive=False,
    )


class AppSettings(BaseSettings):
    """Application-wide configuration."""

    debug: bool = Field(
        False,
        description="Enable debug mode with verbose logging",
    )
    outcome_store_max_entries: int | None = Field(
        10_000,
        description="Maximum number of submission outcomes kept for lookup",
    )
    outcome_store_ttl_seconds: int = Field(
        3600,
        description="How long a recorded outcome stays available for lookup",
        ge=1,
    )

    model_config = SettingsConfigDict(
        env_prefix="APP_",
        case_sensitive=False,
    )


class Settings(BaseSettings):
    """Main settings container.

    Automatically loads from the appropriate .env.{APP_ENV} file.
    Raises validation errors on startup if settings are invalid.
    """

    app_env: str = APP_ENV
    api: ApiSettings = Field(default_factory=ApiSettings)
    limiter: LimiterSettings = Field(default_factory=LimiterSettings)
    log: LogSettings = Field(default_factory=LogSettings)
    app: AppSettings = Field(default_factory=AppSettings)

    model_config = SettingsConfigDict(
        case_sensitive=False,
    )


# Global settings instance - composed from domain-specific settings
settings = Settings()
