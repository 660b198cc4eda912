"""Profile and target endpoints."""

from uuid import UUID

from fastapi import APIRouter, Depends

from savr.api.dependencies import get_container, require_token
from savr.api.models import (
    FieldUpdate,
    ProfilePayload,
    ProfileResponse,
    TargetsResponse,
)
from savr.containers import AppContainer

router = APIRouter(
    prefix="/users/{user_id}",
    tags=["profile"],
    dependencies=[Depends(require_token)],
)


@router.get("/profile")
async def get_profile(
    user_id: UUID, container: AppContainer = Depends(get_container)
) -> ProfileResponse:
    """Return the stored profile."""
    profile = container.profile_service.require_profile(user_id)
    return ProfileResponse.from_domain(profile)


@router.put("/profile")
async def save_profile(
    user_id: UUID,
    payload: ProfilePayload,
    container: AppContainer = Depends(get_container),
) -> ProfileResponse:
    """Create or replace the profile."""
    profile = container.profile_service.save_profile(user_id, payload.to_domain())
    return ProfileResponse.from_domain(profile)


@router.post("/profile/fields")
async def update_profile_field(
    user_id: UUID,
    payload: FieldUpdate,
    container: AppContainer = Depends(get_container),
) -> ProfileResponse:
    """Apply a single-field change."""
    profile = container.profile_service.update_field(
        user_id, payload.field, payload.value, payload.action
    )
    return ProfileResponse.from_domain(profile)


@router.get("/targets")
async def get_targets(
    user_id: UUID, container: AppContainer = Depends(get_container)
) -> TargetsResponse:
    """Return daily targets, falling back to the defaults."""
    return TargetsResponse.from_domain(container.profile_service.get_targets(user_id))
