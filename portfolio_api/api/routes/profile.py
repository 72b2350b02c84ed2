from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends

from portfolio_api.api.dependencies import get_profile_service
from portfolio_api.core.cache import CacheConfig, cache_policy
from portfolio_api.schemas.common import APIResponse
from portfolio_api.schemas.profile import Profile, UpdateProfileRequest
from portfolio_api.services.profile_service import ProfileService

router = APIRouter(tags=["Profile"])

ProfileServiceDep = Annotated[ProfileService, Depends(get_profile_service)]


@router.get(
    "/profile",
    response_model=APIResponse[Profile],
    dependencies=[Depends(cache_policy(CacheConfig.DEFAULT))],
)
async def get_profile(service: ProfileServiceDep) -> APIResponse[Profile]:
    """Return the portfolio owner's profile."""
    return APIResponse(data=await service.get_profile())


@router.put("/profile", response_model=APIResponse[Profile])
async def update_profile(
    payload: UpdateProfileRequest,
    service: ProfileServiceDep,
) -> APIResponse[Profile]:
    """Replace the profile with a validated payload.

    Raises:
        RequestValidationError: 400 ``validation_failed`` for invalid fields.
        NotFoundAppError: 404 when no profile row exists yet.
    """
    profile = await service.update_profile(payload)
    return APIResponse(data=profile, message="Profile updated successfully")
