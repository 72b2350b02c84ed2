"""Pydantic schemas for experience, skills, education and certifications."""

from __future__ import annotations

from datetime import date, datetime
from typing import Literal

from pydantic import BaseModel, Field

SkillLevel = Literal["Beginner", "Intermediate", "Advanced", "Expert"]


class Experience(BaseModel):
    """A position held at a company."""

    id: int
    company: str
    position: str
    start_date: date
    end_date: date | None = None
    description: str
    location: str
    is_current: bool
    created_at: datetime
    updated_at: datetime


class Skill(BaseModel):
    """A technical skill with a self-assessed level."""

    id: int
    name: str
    category: str
    level: SkillLevel
    years_of_experience: int | None = Field(default=None, ge=0, le=50)
    description: str | None = None
    created_at: datetime
    updated_at: datetime


class SkillCategory(BaseModel):
    """Skills grouped under one category (``?group_by=category``)."""

    category: str
    skills: list[Skill]


class Education(BaseModel):
    """Degree or programme attended."""

    id: int
    institution: str
    degree: str
    field: str
    start_date: date
    end_date: date | None = None
    gpa: float | None = Field(default=None, ge=0.0, le=4.0)
    description: str | None = None
    created_at: datetime
    updated_at: datetime


class Certification(BaseModel):
    """Professional certification."""

    id: int
    name: str
    issuer: str
    issue_date: date
    expiry_date: date | None = None
    credential_id: str | None = None
    url: str | None = None
    description: str | None = None
    created_at: datetime
    updated_at: datetime
