"""Application configuration using Pydantic Settings.

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

from portfolio_api.adapters.rate_limit.policy import RateLimitPolicy


APP_VERSION = "1.0.0"

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


# Nested BaseSettings don't inherit env_file, so populate os.environ first
if _env_file:
    from dotenv import load_dotenv
    load_dotenv(_env_file, override=True)


def parse_csv(value: str | None) -> list[str]:
    """Split a comma-separated setting into trimmed, non-empty items.

    Examples:
        >>> parse_csv("GET, POST ,PUT")
        ['GET', 'POST', 'PUT']
        >>> parse_csv(None)
        []
    """
    if not value:
        return []
    return [item.strip() for item in value.split(",") if item.strip()]


class ServerSettings(BaseSettings):
    """HTTP server binding."""

    host: str = Field("0.0.0.0", description="Interface to bind")
    port: int = Field(8080, ge=1, le=65535, description="Port to bind")
    debug: bool = Field(False, description="Enable debug mode with verbose logging")

    model_config = SettingsConfigDict(env_prefix="SERVER_", case_sensitive=False)


class DatabaseSettings(BaseSettings):
    """SQLite storage configuration."""

    path: str = Field(
        "data/portfolio.db",
        min_length=1,
        description="SQLite database file path (':memory:' for an in-process database)",
    )
    seed_demo_data: bool = Field(
        False,
        description="Insert a demo profile and sample rows when tables are empty",
    )
    timeout_seconds: float = Field(
        5.0,
        gt=0,
        description="Seconds to wait on a locked database and for health pings",
    )

    model_config = SettingsConfigDict(env_prefix="DB_", case_sensitive=False)


class CORSSettings(BaseSettings):
    """Cross-origin resource sharing.

    Lists are given as comma-separated strings so they can be set from plain
    environment variables.
    """

    allowed_origins: str = Field(
        "http://localhost:3000,http://localhost:5173",
        description="Comma-separated allowed origins ('*' allows any)",
    )
    allowed_methods: str = Field(
        "GET,POST,PUT,DELETE,OPTIONS",
        description="Comma-separated allowed methods",
    )
    allowed_headers: str = Field(
        "Content-Type,Authorization",
        description="Comma-separated allowed request headers",
    )
    max_age_seconds: int = Field(86400, ge=0, description="Preflight cache duration")

    model_config = SettingsConfigDict(env_prefix="CORS_", case_sensitive=False)

    @property
    def origins(self) -> list[str]:
        return parse_csv(self.allowed_origins)

    @property
    def methods(self) -> list[str]:
        return parse_csv(self.allowed_methods)

    @property
    def headers(self) -> list[str]:
        return parse_csv(self.allowed_headers)


class LogSettings(BaseSettings):
    """Logging output configuration."""

    level: str = Field("info", description="Root log level (debug, info, warning, error)")
    format: str = Field("json", description="'json' or 'plain'")
    output: str = Field("stdout", description="'stdout' or 'file'")
    file_path: str | None = Field(None, description="Log file path when output=file")
    max_bytes: int = Field(0, ge=0, description="Rotate log file at this size (0 disables rotation)")
    backup_count: int = Field(5, ge=0, description="Rotated files to keep")
    correlation_id_header: str = Field(
        "X-Correlation-ID",
        description="Header used to read and echo the request correlation id",
    )

    model_config = SettingsConfigDict(env_prefix="LOG_", case_sensitive=False)


class RateLimitSettings(BaseSettings):
    """Per-client token-bucket rate limiting."""

    enabled: bool = Field(True, description="Enable per-client rate limiting")
    requests_per_second: float = Field(
        10.0,
        gt=0,
        description="Sustained refill rate (tokens per second)",
    )
    burst_size: int = Field(20, ge=1, description="Bucket capacity (maximum burst)")
    cleanup_interval_seconds: float = Field(
        300.0,
        gt=0,
        description="Seconds between idle-client sweeps",
    )
    idle_multiplier: float = Field(
        2.0,
        ge=1,
        description="Clients idle longer than idle_multiplier * cleanup_interval are evicted",
    )
    include_retry_after: bool = Field(
        False,
        description="Send a Retry-After header on 429 responses",
    )

    model_config = SettingsConfigDict(env_prefix="RATE_LIMIT_", case_sensitive=False)

    def to_policy(self) -> RateLimitPolicy:
        """Build the limiter policy from these settings."""
        return RateLimitPolicy(
            requests_per_second=self.requests_per_second,
            burst_size=self.burst_size,
            cleanup_interval=self.cleanup_interval_seconds,
            idle_multiplier=self.idle_multiplier,
        )


class Settings(BaseSettings):
    """Main application settings container.

    Automatically loads from the appropriate .env.{APP_ENV} file.
    Raises validation errors on startup if a setting is malformed.
    """

    app_env: str = APP_ENV
    server: ServerSettings = Field(default_factory=ServerSettings)
    database: DatabaseSettings = Field(default_factory=DatabaseSettings)
    cors: CORSSettings = Field(default_factory=CORSSettings)
    log: LogSettings = Field(default_factory=LogSettings)
    rate_limit: RateLimitSettings = Field(default_factory=RateLimitSettings)

    model_config = SettingsConfigDict(case_sensitive=False)


# Global settings instance - composed from domain-specific settings
settings = Settings()
