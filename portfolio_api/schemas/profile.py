"""Pydantic schemas for the portfolio owner's profile."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field, HttpUrl

EMAIL_PATTERN = r"^[^@\s]+@[^@\s]+\.[^@\s]+$"


class Profile(BaseModel):
    """Public profile information."""

    name: str
    title: str
    location: str
    email: str
    phone: str | None = None
    linkedin: str | None = None
    summary: str
    updated_at: datetime


class UpdateProfileRequest(BaseModel):
    """Payload for ``PUT /v1/profile``."""

    name: str = Field(..., min_length=2, max_length=100)
    title: str = Field(..., min_length=2, max_length=200)
    location: str = Field(..., min_length=2, max_length=100)
    email: str = Field(..., pattern=EMAIL_PATTERN, max_length=254)
    phone: str | None = Field(default=None, min_length=10, max_length=20)
    linkedin: HttpUrl | None = None
    summary: str = Field(..., min_length=10, max_length=1000)
