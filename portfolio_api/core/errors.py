"""Application-level exception types.

This module defines domain errors used across services/repositories, enabling
consistent error handling, logging, and API responses.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, ClassVar


@dataclass
class AppError(Exception):
    """Base error for application/domain failures.

    Attributes:
        code: Stable, machine-readable error code.
        message: Human-readable error message.
        details: Optional structured details for clients.
    """

    code: str
    message: str
    details: dict[str, Any] | None = None

    http_status: ClassVar[int] = 400

    def __post_init__(self) -> None:
        # Populate Exception args so str(error) is useful in logs/tracebacks.
        super().__init__(self.message)


class ValidationAppError(AppError):
    """Raised when input validation fails."""


class NotFoundAppError(AppError):
    """Raised when a requested resource does not exist."""

    http_status = 404


class RateLimitAppError(AppError):
    """Raised when a client exceeds its request budget."""

    http_status = 429

    retry_after_seconds: float | None = None


class DatabaseAppError(AppError):
    """Raised when the relational store fails."""

    http_status = 500
