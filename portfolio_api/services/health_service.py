"""Service health checks."""

from __future__ import annotations

import logging
from datetime import datetime, timezone

from portfolio_api.core.config import APP_VERSION
from portfolio_api.core.errors import DatabaseAppError
from portfolio_api.db.connection import Database
from portfolio_api.schemas.common import HealthResponse

logger = logging.getLogger(__name__)

HEALTHY = "healthy"
UNHEALTHY = "unhealthy"


class HealthService:
    def __init__(self, db: Database) -> None:
        self._db = db

    async def check_health(self) -> HealthResponse:
        """Ping each dependency; any failure makes the service unhealthy."""
        components: dict[str, str] = {}
        try:
            await self._db.ping()
            components["database"] = HEALTHY
        except DatabaseAppError as exc:
            logger.error("health.database_failed", extra={"error_code": exc.code})
            components["database"] = UNHEALTHY

        status = HEALTHY if all(v == HEALTHY for v in components.values()) else UNHEALTHY
        return HealthResponse(
            status=status,
            timestamp=datetime.now(timezone.utc),
            version=APP_VERSION,
            components=components,
        )
