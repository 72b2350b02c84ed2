"""Project business logic."""

from __future__ import annotations

import logging

from portfolio_api.core.errors import ValidationAppError
from portfolio_api.repositories.projects import ProjectRepository
from portfolio_api.schemas.project import Project

logger = logging.getLogger(__name__)


class ProjectService:
    def __init__(self, repo: ProjectRepository) -> None:
        self._repo = repo

    async def list_projects(self, *, featured_only: bool = False) -> list[Project]:
        if featured_only:
            projects = await self._repo.list_featured_projects()
        else:
            projects = await self._repo.list_projects()
        logger.debug(
            "project.listed",
            extra={"count": len(projects), "featured_only": featured_only},
        )
        return projects

    async def get_project(self, project_id: int) -> Project:
        if project_id <= 0:
            raise ValidationAppError(
                code="invalid_project_id",
                message="Invalid project ID",
                details={"id": project_id},
            )
        return await self._repo.get_project(project_id)
