from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, Query

from portfolio_api.api.dependencies import get_project_service
from portfolio_api.core.cache import CacheConfig, cache_policy
from portfolio_api.schemas.common import APIResponse
from portfolio_api.schemas.project import Project
from portfolio_api.services.project_service import ProjectService

router = APIRouter(tags=["Projects"])

ProjectServiceDep = Annotated[ProjectService, Depends(get_project_service)]


@router.get(
    "/projects",
    response_model=APIResponse[list[Project]],
    dependencies=[Depends(cache_policy(CacheConfig.DEFAULT))],
)
async def list_projects(
    service: ProjectServiceDep,
    featured: Annotated[bool, Query(description="Only featured projects")] = False,
) -> APIResponse[list[Project]]:
    """List projects by sort order, newest first within the same order."""
    return APIResponse(data=await service.list_projects(featured_only=featured))


@router.get(
    "/projects/{project_id}",
    response_model=APIResponse[Project],
    dependencies=[Depends(cache_policy(CacheConfig.DEFAULT))],
)
async def get_project(project_id: int, service: ProjectServiceDep) -> APIResponse[Project]:
    return APIResponse(data=await service.get_project(project_id))
