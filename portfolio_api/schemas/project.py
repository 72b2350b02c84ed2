"""Pydantic schemas for portfolio projects."""

from __future__ import annotations

from datetime import date, datetime
from typing import Literal

from pydantic import BaseModel, Field

ProjectStatus = Literal["Planning", "In Progress", "Completed", "On Hold", "Cancelled"]


class Project(BaseModel):
    """A showcased project."""

    id: int
    title: str
    description: str
    short_description: str | None = None
    technologies: list[str] = Field(default_factory=list)
    github_url: str | None = None
    live_url: str | None = None
    image_url: str | None = None
    start_date: date
    end_date: date | None = None
    status: ProjectStatus
    featured: bool = False
    sort_order: int = 0
    created_at: datetime
    updated_at: datetime
