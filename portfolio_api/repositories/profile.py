"""Profile persistence."""

from __future__ import annotations

from portfolio_api.core.errors import NotFoundAppError
from portfolio_api.db.connection import Database
from portfolio_api.schemas.profile import Profile, UpdateProfileRequest

PROFILE_ID = 1

_SELECT_PROFILE = """
    SELECT name, title, location, email, phone, linkedin, summary, updated_at
    FROM profiles
    WHERE id = ?
"""

_UPDATE_PROFILE = """
    UPDATE profiles
    SET name = ?, title = ?, location = ?, email = ?, phone = ?, linkedin = ?,
        summary = ?, updated_at = CURRENT_TIMESTAMP
    WHERE id = ?
"""


class ProfileRepository:
    """Reads and updates the single profile row."""

    def __init__(self, db: Database) -> None:
        self._db = db

    async def get_profile(self) -> Profile:
        row = await self._db.fetch_one(_SELECT_PROFILE, (PROFILE_ID,))
        if row is None:
            raise NotFoundAppError(code="profile_not_found", message="Profile not found")
        return Profile(**dict(row))

    async def update_profile(self, req: UpdateProfileRequest) -> Profile:
        affected = await self._db.execute(
            _UPDATE_PROFILE,
            (
                req.name,
                req.title,
                req.location,
                req.email,
                req.phone,
                str(req.linkedin) if req.linkedin is not None else None,
                req.summary,
                PROFILE_ID,
            ),
        )
        if affected == 0:
            raise NotFoundAppError(code="profile_not_found", message="Profile not found")
        return await self.get_profile()
