"""Profile business logic."""

from __future__ import annotations

import logging

from portfolio_api.repositories.profile import ProfileRepository
from portfolio_api.schemas.profile import Profile, UpdateProfileRequest

logger = logging.getLogger(__name__)


class ProfileService:
    def __init__(self, repo: ProfileRepository) -> None:
        self._repo = repo

    async def get_profile(self) -> Profile:
        logger.debug("profile.get")
        return await self._repo.get_profile()

    async def update_profile(self, req: UpdateProfileRequest) -> Profile:
        """Persist a validated profile update and return the stored profile."""
        profile = await self._repo.update_profile(req)
        logger.info("profile.updated", extra={"fields": sorted(req.model_fields_set)})
        return profile
