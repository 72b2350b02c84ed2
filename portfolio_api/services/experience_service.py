"""Work experience business logic."""

from __future__ import annotations

import logging

from portfolio_api.core.errors import ValidationAppError
from portfolio_api.repositories.resume import ExperienceRepository
from portfolio_api.schemas.resume import Experience

logger = logging.getLogger(__name__)


class ExperienceService:
    def __init__(self, repo: ExperienceRepository) -> None:
        self._repo = repo

    async def list_experiences(self) -> list[Experience]:
        experiences = await self._repo.list_experiences()
        logger.debug("experience.listed", extra={"count": len(experiences)})
        return experiences

    async def get_experience(self, experience_id: int) -> Experience:
        """Fetch one experience.

        Raises:
            ValidationAppError: If the id is not a positive integer.
            NotFoundAppError: If no experience has this id.
        """
        if experience_id <= 0:
            raise ValidationAppError(
                code="invalid_experience_id",
                message="Invalid experience ID",
                details={"id": experience_id},
            )
        return await self._repo.get_experience(experience_id)
