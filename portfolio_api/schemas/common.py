"""Response envelope and health schemas shared across routes."""

from __future__ import annotations

from datetime import datetime
from typing import Generic, TypeVar

from pydantic import BaseModel, Field

T = TypeVar("T")


class APIResponse(BaseModel, Generic[T]):
    """Standard success envelope: ``{"data": ..., "success": true}``."""

    data: T
    success: bool = True
    message: str | None = Field(
        default=None,
        description="Optional human-readable note (e.g., after an update).",
    )


class APIError(BaseModel):
    """Standard error body returned by every exception handler."""

    error: str = Field(..., description="Machine-readable error code.")
    message: str = Field(..., description="Human-readable explanation.")
    details: dict | None = Field(default=None, description="Optional structured context.")


class HealthResponse(BaseModel):
    """Service health including per-component status."""

    status: str = Field(..., description="'healthy' or 'unhealthy'.")
    timestamp: datetime
    version: str
    components: dict[str, str] = Field(default_factory=dict)
