from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from portfolio_api.api.dependencies import get_health_service
from portfolio_api.core.cache import CacheConfig, cache_policy
from portfolio_api.schemas.common import APIResponse, HealthResponse
from portfolio_api.services.health_service import HEALTHY, HealthService

router = APIRouter(tags=["Health"])


@router.get(
    "/health",
    response_model=APIResponse[HealthResponse],
    dependencies=[Depends(cache_policy(CacheConfig.NO_CACHE))],
    responses={503: {"model": HealthResponse}},
)
async def get_health(
    service: Annotated[HealthService, Depends(get_health_service)],
):
    """Health check endpoint.

    Used by load balancers and monitoring systems. Returns 200 with the
    health report when every component is healthy, 503 with the bare report
    otherwise.
    """

    health = await service.check_health()
    if health.status != HEALTHY:
        return JSONResponse(
            status_code=503,
            content=health.model_dump(mode="json"),
            headers={"Cache-Control": CacheConfig.NO_CACHE.cache_control},
        )
    return APIResponse(data=health)
