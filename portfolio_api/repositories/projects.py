"""Project persistence.

``technologies`` is stored as a JSON array in a TEXT column.
"""

from __future__ import annotations

import json
import logging
from typing import Any

import aiosqlite

from portfolio_api.core.errors import NotFoundAppError
from portfolio_api.db.connection import Database
from portfolio_api.schemas.project import Project

logger = logging.getLogger(__name__)

_PROJECT_COLUMNS = (
    "id, title, description, short_description, technologies, github_url, live_url, "
    "image_url, start_date, end_date, status, featured, sort_order, created_at, updated_at"
)
_ORDER = "ORDER BY sort_order ASC, start_date DESC"


def _decode_technologies(raw: Any, project_id: int) -> list[str]:
    if not raw:
        return []
    try:
        value = json.loads(raw)
    except (TypeError, ValueError):
        logger.warning("project.technologies_malformed", extra={"project_id": project_id})
        return []
    if not isinstance(value, list):
        return []
    return [str(item) for item in value]


def _row_to_project(row: aiosqlite.Row) -> Project:
    data = dict(row)
    data["technologies"] = _decode_technologies(data.get("technologies"), data["id"])
    return Project(**data)


class ProjectRepository:
    def __init__(self, db: Database) -> None:
        self._db = db

    async def list_projects(self) -> list[Project]:
        rows = await self._db.fetch_all(f"SELECT {_PROJECT_COLUMNS} FROM projects {_ORDER}")
        return [_row_to_project(row) for row in rows]

    async def list_featured_projects(self) -> list[Project]:
        rows = await self._db.fetch_all(
            f"SELECT {_PROJECT_COLUMNS} FROM projects WHERE featured = 1 {_ORDER}"
        )
        return [_row_to_project(row) for row in rows]

    async def get_project(self, project_id: int) -> Project:
        row = await self._db.fetch_one(
            f"SELECT {_PROJECT_COLUMNS} FROM projects WHERE id = ?",
            (project_id,),
        )
        if row is None:
            raise NotFoundAppError(
                code="project_not_found",
                message="Project not found",
                details={"id": project_id},
            )
        return _row_to_project(row)
