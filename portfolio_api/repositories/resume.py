"""Experience, skills, education and certification persistence."""

from __future__ import annotations

from portfolio_api.core.errors import NotFoundAppError
from portfolio_api.db.connection import Database
from portfolio_api.schemas.resume import Certification, Education, Experience, Skill, SkillCategory

_EXPERIENCE_COLUMNS = (
    "id, company, position, start_date, end_date, description, location, "
    "is_current, created_at, updated_at"
)


class ExperienceRepository:
    def __init__(self, db: Database) -> None:
        self._db = db

    async def list_experiences(self) -> list[Experience]:
        rows = await self._db.fetch_all(
            f"SELECT {_EXPERIENCE_COLUMNS} FROM experiences ORDER BY start_date DESC"
        )
        return [Experience(**dict(row)) for row in rows]

    async def get_experience(self, experience_id: int) -> Experience:
        row = await self._db.fetch_one(
            f"SELECT {_EXPERIENCE_COLUMNS} FROM experiences WHERE id = ?",
            (experience_id,),
        )
        if row is None:
            raise NotFoundAppError(
                code="experience_not_found",
                message="Experience not found",
                details={"id": experience_id},
            )
        return Experience(**dict(row))


class SkillRepository:
    def __init__(self, db: Database) -> None:
        self._db = db

    async def list_skills(self) -> list[Skill]:
        rows = await self._db.fetch_all(
            """SELECT id, name, category, level, years_of_experience, description,
                      created_at, updated_at
               FROM skills
               ORDER BY category, name"""
        )
        return [Skill(**dict(row)) for row in rows]

    async def list_skills_by_category(self) -> list[SkillCategory]:
        """Group skills by category, keeping the category order of the query."""
        grouped: dict[str, list[Skill]] = {}
        for skill in await self.list_skills():
            grouped.setdefault(skill.category, []).append(skill)
        return [SkillCategory(category=name, skills=skills) for name, skills in grouped.items()]


class EducationRepository:
    def __init__(self, db: Database) -> None:
        self._db = db

    async def list_education(self) -> list[Education]:
        rows = await self._db.fetch_all(
            """SELECT id, institution, degree, field, start_date, end_date, gpa, description,
                      created_at, updated_at
               FROM education
               ORDER BY start_date DESC"""
        )
        return [Education(**dict(row)) for row in rows]


class CertificationRepository:
    def __init__(self, db: Database) -> None:
        self._db = db

    async def list_certifications(self) -> list[Certification]:
        rows = await self._db.fetch_all(
            """SELECT id, name, issuer, issue_date, expiry_date, credential_id, url, description,
                      created_at, updated_at
               FROM certifications
               ORDER BY issue_date DESC"""
        )
        return [Certification(**dict(row)) for row in rows]
