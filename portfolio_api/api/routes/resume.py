from __future__ import annotations

from typing import Annotated, Union

from fastapi import APIRouter, Depends, Query

from portfolio_api.api.dependencies import (
    get_certification_repository,
    get_education_repository,
    get_experience_service,
    get_skill_repository,
)
from portfolio_api.core.cache import CacheConfig, cache_policy
from portfolio_api.repositories.resume import (
    CertificationRepository,
    EducationRepository,
    SkillRepository,
)
from portfolio_api.schemas.common import APIResponse
from portfolio_api.schemas.resume import Certification, Education, Experience, Skill, SkillCategory
from portfolio_api.services.experience_service import ExperienceService

router = APIRouter(tags=["Resume"])

_long_cache = [Depends(cache_policy(CacheConfig.LONG))]
_default_cache = [Depends(cache_policy(CacheConfig.DEFAULT))]

ExperienceServiceDep = Annotated[ExperienceService, Depends(get_experience_service)]


@router.get("/experience", response_model=APIResponse[list[Experience]], dependencies=_long_cache)
async def list_experiences(service: ExperienceServiceDep) -> APIResponse[list[Experience]]:
    """List work experience, most recent first."""
    return APIResponse(data=await service.list_experiences())


@router.get(
    "/experience/{experience_id}",
    response_model=APIResponse[Experience],
    dependencies=_long_cache,
)
async def get_experience(
    experience_id: int,
    service: ExperienceServiceDep,
) -> APIResponse[Experience]:
    return APIResponse(data=await service.get_experience(experience_id))


@router.get(
    "/skills",
    response_model=Union[APIResponse[list[Skill]], APIResponse[list[SkillCategory]]],
    dependencies=_long_cache,
)
async def list_skills(
    repo: Annotated[SkillRepository, Depends(get_skill_repository)],
    group_by: Annotated[str | None, Query(description="'category' groups skills by category")] = None,
):
    """List skills ordered by category then name, optionally grouped."""
    if group_by == "category":
        return APIResponse(data=await repo.list_skills_by_category())
    return APIResponse(data=await repo.list_skills())


@router.get("/education", response_model=APIResponse[list[Education]], dependencies=_long_cache)
async def list_education(
    repo: Annotated[EducationRepository, Depends(get_education_repository)],
) -> APIResponse[list[Education]]:
    return APIResponse(data=await repo.list_education())


@router.get(
    "/certifications",
    response_model=APIResponse[list[Certification]],
    dependencies=_default_cache,
)
async def list_certifications(
    repo: Annotated[CertificationRepository, Depends(get_certification_repository)],
) -> APIResponse[list[Certification]]:
    return APIResponse(data=await repo.list_certifications())
