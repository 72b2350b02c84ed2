"""Tests for environment-driven settings."""

import pytest
from pydantic import ValidationError

from portfolio_api.core.config import CORSSettings, RateLimitSettings, parse_csv


def test_parse_csv_trims_and_drops_empty_items():
    assert parse_csv(" GET, POST ,,PUT ") == ["GET", "POST", "PUT"]
    assert parse_csv("") == []
    assert parse_csv(None) == []


def test_cors_lists_come_from_env(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setenv("CORS_ALLOWED_ORIGINS", "https://a.example, https://b.example")
    monkeypatch.setenv("CORS_MAX_AGE_SECONDS", "600")

    cors = CORSSettings()

    assert cors.origins == ["https://a.example", "https://b.example"]
    assert cors.max_age_seconds == 600


def test_rate_limit_settings_build_policy(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setenv("RATE_LIMIT_REQUESTS_PER_SECOND", "5")
    monkeypatch.setenv("RATE_LIMIT_BURST_SIZE", "10")
    monkeypatch.setenv("RATE_LIMIT_IDLE_MULTIPLIER", "3")

    policy = RateLimitSettings().to_policy()

    assert policy.requests_per_second == 5.0
    assert policy.burst_size == 10
    assert policy.cleanup_interval == 300.0
    assert policy.idle_threshold == 900.0


@pytest.mark.parametrize(
    ("name", "value"),
    [
        ("RATE_LIMIT_REQUESTS_PER_SECOND", "0"),
        ("RATE_LIMIT_BURST_SIZE", "0"),
        ("RATE_LIMIT_CLEANUP_INTERVAL_SECONDS", "-1"),
    ],
)
def test_invalid_rate_limit_settings_fail_fast(
    monkeypatch: pytest.MonkeyPatch, name: str, value: str
):
    monkeypatch.setenv(name, value)

    with pytest.raises(ValidationError):
        RateLimitSettings()
