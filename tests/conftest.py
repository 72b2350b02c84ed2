"""Pytest configuration and fixtures shared across all test modules.

This file is automatically loaded by pytest before running any tests.
It points the settings at the testing environment before anything imports
``portfolio_api.core.config``, so no developer ``.env`` file leaks in.
"""

import os

# CRITICAL: Set this before any imports that might load settings
os.environ["APP_ENV"] = "testing"

# Defaults every test can rely on
os.environ.setdefault("DB_PATH", ":memory:")
os.environ.setdefault("DB_SEED_DEMO_DATA", "true")
os.environ.setdefault("LOG_LEVEL", "WARNING")
os.environ.setdefault("RATE_LIMIT_ENABLED", "true")

from collections.abc import Iterator  # noqa: E402
from pathlib import Path  # noqa: E402

import pytest  # noqa: E402
from fastapi import FastAPI  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402

from portfolio_api.core.app_factory import create_app  # noqa: E402
from portfolio_api.core.config import (  # noqa: E402
    DatabaseSettings,
    LogSettings,
    RateLimitSettings,
    Settings,
)


def build_test_settings(
    db_path: str = ":memory:",
    *,
    seed: bool = True,
    rate_limit: RateLimitSettings | None = None,
) -> Settings:
    """Build isolated settings for one app instance."""
    return Settings(
        database=DatabaseSettings(path=db_path, seed_demo_data=seed),
        log=LogSettings(level="WARNING"),
        rate_limit=rate_limit or RateLimitSettings(enabled=False),
    )


@pytest.fixture
def make_settings():
    """Factory fixture for per-test ``Settings`` (see ``build_test_settings``)."""
    return build_test_settings


@pytest.fixture
def db_path(tmp_path: Path) -> str:
    return str(tmp_path / "portfolio.db")


@pytest.fixture
def app(db_path: str) -> FastAPI:
    """App backed by a seeded on-disk database with rate limiting disabled."""
    return create_app(build_test_settings(db_path))


@pytest.fixture
def client(app: FastAPI) -> Iterator[TestClient]:
    """Test client with the lifespan running (database open)."""
    with TestClient(app) as test_client:
        yield test_client
