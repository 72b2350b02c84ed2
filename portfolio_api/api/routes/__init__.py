from __future__ import annotations

from portfolio_api.api.routes.health import router as health_router
from portfolio_api.api.routes.profile import router as profile_router
from portfolio_api.api.routes.projects import router as projects_router
from portfolio_api.api.routes.resume import router as resume_router

__all__ = ["health_router", "profile_router", "projects_router", "resume_router"]
