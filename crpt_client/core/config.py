"""Client configuration using Pydantic Settings.

Configuration is environment-aware:
- APP_ENV determines which .env file to load
- Supports: development, testing, staging, production
- Each environment has its own .env.{environment} file
"""

from __future__ import annotations

import os
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


# Determine which environment to load (default: development)
APP_ENV = os.getenv("APP_ENV", "development")

# Project root (so .env resolution doesn't depend on current working directory)
PROJECT_ROOT = Path(__file__).resolve().parents[2]

# Map environments to their respective .env files (relative to PROJECT_ROOT)
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


# Nested BaseSettings don't inherit env_file, so populate os.environ up front.
if _env_file:
    from dotenv import load_dotenv
    load_dotenv(_env_file, override=True)


def _build_api_settings() -> "ApiSettings":
    """Build endpoint settings from environment."""

    return ApiSettings()


def _build_rate_limit_settings() -> "RateLimitSettings":
    """Build limiter settings from environment."""

    return RateLimitSettings()


def _build_log_settings() -> "LogSettings":
    """Build logging settings from environment."""

    return LogSettings()


class ApiSettings(BaseSettings):
    """Remote document endpoint configuration.

    TLS trust is configured here only: either the default CA store, a custom
    CA bundle, or (for test stands) no verification at all.
    """

    base_url: str = Field(
        "https://dev.edo.crpt.tech",
        description="Scheme and host of the document API",
    )
    document_path: str = Field(
        "/api/v1/incoming-documents/unsigned-events",
        description="Path of the document submission endpoint",
    )
    timeout_seconds: float = Field(
        1.0,
        description="Connect/read/write timeout in seconds",
        gt=0,
        allow_inf_nan=False,
    )
    verify_tls: bool = Field(
        True,
        description="Verify the server certificate",
    )
    ca_bundle_path: str | None = Field(
        None,
        description="Custom CA bundle; takes precedence over verify_tls",
    )

    model_config = SettingsConfigDict(
        env_prefix="CRPT_API_",
        case_sensitive=False,
    )


class RateLimitSettings(BaseSettings):
    """Outbound request-rate limit configuration."""

    requests: int = Field(
        5,
        description="Maximum number of submissions admitted per window",
        ge=1,
    )
    period_seconds: float = Field(
        1.0,
        description="Window length in seconds; permits reset to the maximum each window",
        gt=0,
        allow_inf_nan=False,
    )
    shutdown_timeout_seconds: float = Field(
        1.0,
        description="Grace period for stopping the replenishment thread",
        gt=0,
        allow_inf_nan=False,
    )

    model_config = SettingsConfigDict(
        env_prefix="RATE_LIMIT_",
        case_sensitive=False,
    )


class LogSettings(BaseSettings):
    """Logging output configuration."""

    level: str = Field("INFO", description="Root log level")
    format: str = Field("json", description="Log format: 'json' or 'plain'")
    output: str = Field("stdout", description="Log destination: 'stdout' or 'file'")
    file_path: str | None = Field(None, description="Log file path when output is 'file'")
    max_bytes: int = Field(
        10_485_760,
        description="Rotate the log file after this many bytes (0 disables rotation)",
        ge=0,
    )
    backup_count: int = Field(5, description="Rotated files to keep", ge=0)

    model_config = SettingsConfigDict(
        env_prefix="LOG_",
        case_sensitive=False,
    )


class Settings(BaseSettings):
    """Main settings container.

    Automatically loads from the appropriate .env.{APP_ENV} file.
    Raises validation errors on startup if a value is out of range.
    """

    app_env: str = APP_ENV
    api: ApiSettings = Field(default_factory=_build_api_settings)
    rate_limit: RateLimitSettings = Field(default_factory=_build_rate_limit_settings)
    log: LogSettings = Field(default_factory=_build_log_settings)

    model_config = SettingsConfigDict(
        case_sensitive=False,
    )


# Global settings instance - composed from domain-specific settings
settings = Settings()
