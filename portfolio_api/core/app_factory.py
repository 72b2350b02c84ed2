"""Application factory for FastAPI app.

Centralizes app construction (metadata, lifespan resources, middleware,
handlers, routers) so tests can build isolated apps with their own settings.
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import Depends, FastAPI
from fastapi.middleware.cors import CORSMiddleware

from portfolio_api.api.routes import health_router, profile_router, projects_router, resume_router
from portfolio_api.core.cache import etag_middleware
from portfolio_api.core.config import APP_VERSION, Settings, settings
from portfolio_api.core.exception_handlers import setup_exception_handlers
from portfolio_api.core.logging import configure_logging
from portfolio_api.core.middleware import (
    correlation_id_middleware,
    request_logging_middleware,
    security_headers_middleware,
)
from portfolio_api.core.openapi import apply_openapi_customizations
from portfolio_api.core.rate_limit import build_rate_limiter, enforce_rate_limit
from portfolio_api.db.connection import Database

logger = logging.getLogger(__name__)


def create_app(app_settings: Settings | None = None) -> FastAPI:
    """Create and configure the FastAPI application instance.

    Args:
        app_settings: Settings to build from; defaults to the global settings.

    Returns:
        Configured FastAPI app with middleware, handlers, routers and docs.
    """
    cfg = app_settings or settings

    # Logging first so subsequent init logs are formatted as desired
    configure_logging(cfg.log)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        db = Database(cfg.database.path, timeout_seconds=cfg.database.timeout_seconds)
        await db.connect(seed_demo_data=cfg.database.seed_demo_data)
        app.state.db = db
        app.state.rate_limiter = (
            build_rate_limiter(cfg.rate_limit) if cfg.rate_limit.enabled else None
        )
        logger.info(
            "app.started",
            extra={"env": cfg.app_env, "version": APP_VERSION, "port": cfg.server.port},
        )
        try:
            yield
        finally:
            if app.state.rate_limiter is not None:
                app.state.rate_limiter.close()
            await db.close()
            logger.info("app.stopped")

    app = FastAPI(
        title="Portfolio API",
        description=(
            "Read-mostly API serving a personal portfolio: profile, work "
            "experience, skills, education, certifications and projects. "
            "Responses carry cache headers and clients are rate limited per IP."
        ),
        version=APP_VERSION,
        lifespan=lifespan,
        dependencies=[Depends(enforce_rate_limit)],
        license_info={
            "name": "MIT License",
            "url": "https://opensource.org/licenses/MIT",
        },
    )
    app.state.settings = cfg

    # Middleware: the last registered runs first on the way in
    app.middleware("http")(request_logging_middleware)
    app.middleware("http")(correlation_id_middleware)
    app.middleware("http")(etag_middleware)
    app.middleware("http")(security_headers_middleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=cfg.cors.origins,
        allow_credentials=True,
        allow_methods=cfg.cors.methods,
        allow_headers=cfg.cors.headers,
        expose_headers=["Cache-Control", "ETag", "Last-Modified"],
        max_age=cfg.cors.max_age_seconds,
    )

    # Exception handlers
    setup_exception_handlers(app)

    # Routers
    app.include_router(health_router, prefix="/v1")
    app.include_router(profile_router, prefix="/v1")
    app.include_router(resume_router, prefix="/v1")
    app.include_router(projects_router, prefix="/v1")

    apply_openapi_customizations(app)

    return app
