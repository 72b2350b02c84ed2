"""FastAPI dependency providers for services.

The database is owned by the application lifespan and read from
``app.state``; services are cheap and built per request.
"""

from __future__ import annotations

from fastapi import Request

from portfolio_api.core.errors import DatabaseAppError
from portfolio_api.db.connection import Database
from portfolio_api.repositories.profile import ProfileRepository
from portfolio_api.repositories.projects import ProjectRepository
from portfolio_api.repositories.resume import (
    CertificationRepository,
    EducationRepository,
    ExperienceRepository,
    SkillRepository,
)
from portfolio_api.services.experience_service import ExperienceService
from portfolio_api.services.health_service import HealthService
from portfolio_api.services.profile_service import ProfileService
from portfolio_api.services.project_service import ProjectService


def get_database(request: Request) -> Database:
    db: Database | None = getattr(request.app.state, "db", None)
    if db is None:
        raise DatabaseAppError(code="database_unavailable", message="Database is not configured")
    return db


def get_profile_service(request: Request) -> ProfileService:
    return ProfileService(ProfileRepository(get_database(request)))


def get_experience_service(request: Request) -> ExperienceService:
    return ExperienceService(ExperienceRepository(get_database(request)))


def get_project_service(request: Request) -> ProjectService:
    return ProjectService(ProjectRepository(get_database(request)))


def get_skill_repository(request: Request) -> SkillRepository:
    return SkillRepository(get_database(request))


def get_education_repository(request: Request) -> EducationRepository:
    return EducationRepository(get_database(request))


def get_certification_repository(request: Request) -> CertificationRepository:
    return CertificationRepository(get_database(request))


def get_health_service(request: Request) -> HealthService:
    return HealthService(get_database(request))
