# billbook/api/v1/deps.py
"""
FastAPI dependencies for the v1 API layer.

``get_current_user`` validates the ``Authorization: Bearer <jwt>`` header;
the repository and profile dependencies are scoped to that account so
routes never see another owner's data.
"""

from __future__ import annotations

import logging

from fastapi import Depends, Header, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from billbook.core.db import get_db
from billbook.domain.models.documents import BusinessProfile
from billbook.domain.services.identity import current_account
from billbook.infrastructure.db.models import UserAccount
from billbook.infrastructure.db.repositories import DocumentRepository, ProfileRepository

logger = logging.getLogger("api.v1.deps")


async def get_current_user(
    authorization: str | None = Header(None),
    db: AsyncSession = Depends(get_db),
) -> UserAccount:
    """
    Raises HTTP 401 if the token is missing, invalid, expired, or the account
    does not exist.
    """
    if not authorization or not authorization.startswith("Bearer "):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Missing or invalid Authorization header. Expected: Bearer <token>",
            headers={"WWW-Authenticate": "Bearer"},
        )

    account = await current_account(db, authorization[7:])
    if account is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or expired token",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return account


def get_document_repository(db: AsyncSession = Depends(get_db)) -> DocumentRepository:
    return DocumentRepository(db)


def get_profile_repository(db: AsyncSession = Depends(get_db)) -> ProfileRepository:
    return ProfileRepository(db)


async def get_current_profile(
    user: UserAccount = Depends(get_current_user),
    profiles: ProfileRepository = Depends(get_profile_repository),
) -> BusinessProfile:
    """The signed-in owner's profile; a blank one if none was saved yet."""
    found = await profiles.get(user.id)
    if found.success:
        return found.data
    if found.missing:
        return BusinessProfile(owner_id=user.id, email=user.email)
    raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=found.error)
