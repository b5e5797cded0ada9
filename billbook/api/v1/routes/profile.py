# billbook/api/v1/routes/profile.py
"""Business profile read / edit."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, status

from billbook.api.v1.deps import get_current_profile, get_profile_repository
from billbook.api.v1.envelope import error_response, ok
from billbook.api.v1.schemas.profile import ProfileUpdate
from billbook.domain.models.documents import BusinessProfile
from billbook.domain.services.numbering import resolve_prefix
from billbook.infrastructure.db.repositories import ProfileRepository

logger = logging.getLogger("api.v1.profile")

router = APIRouter(prefix="/profile", tags=["Profile"])


def _profile_data(profile: BusinessProfile) -> dict:
    data = profile.model_dump()
    data["effective_prefix"] = resolve_prefix(profile)
    return data


@router.get("", response_model=dict)
async def get_profile(profile: BusinessProfile = Depends(get_current_profile)):
    return ok(data=_profile_data(profile))


@router.put("", response_model=dict)
async def update_profile(
    body: ProfileUpdate,
    profile: BusinessProfile = Depends(get_current_profile),
    profiles: ProfileRepository = Depends(get_profile_repository),
):
    """Overwrite the editable fields; owner and login email stay as they are."""
    updated = BusinessProfile(owner_id=profile.owner_id, email=profile.email, **body.model_dump())
    saved = await profiles.save(updated)
    if not saved.success:
        return error_response(status.HTTP_503_SERVICE_UNAVAILABLE, saved.error or "Failed to save profile")

    logger.info("Profile updated for %s", profile.owner_id)
    return ok(data=_profile_data(saved.data), message="Profile saved")
