# billbook/api/v1/routes/auth.py
"""
Account endpoints: signup, login, logout, me.

Password hashing and token handling live in
:mod:`billbook.domain.services.identity`; this module only maps results
onto HTTP.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from billbook.api.v1.deps import get_current_user
from billbook.api.v1.envelope import ok
from billbook.api.v1.schemas.auth import AccountInfo, LoginRequest, SignupRequest, TokenResponse
from billbook.core.db import get_db
from billbook.domain.services import identity
from billbook.infrastructure.db.models import UserAccount

logger = logging.getLogger("api.v1.auth")

router = APIRouter(prefix="/auth", tags=["Auth"])


def _token(result: identity.IdentityResult) -> dict:
    return TokenResponse(access_token=result.access_token, expires_in=result.expires_in).model_dump()


@router.post("/signup", response_model=dict, status_code=status.HTTP_201_CREATED)
async def signup(body: SignupRequest, db: AsyncSession = Depends(get_db)):
    """Create an account plus its default business profile and sign it in."""
    result = await identity.sign_up(db, body.email, body.password, body.tax_id)
    if not result.success:
        if result.error == "Email already registered":
            raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=result.error)
        if result.error in ("Invalid GSTIN format", identity.PASSWORD_TOO_LONG):
            raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=result.error)
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=result.error)

    return ok(data=_token(result), message="Registration successful")


@router.post("/login", response_model=dict)
async def login(body: LoginRequest, db: AsyncSession = Depends(get_db)):
    result = await identity.sign_in(db, body.email, body.password)
    if not result.success:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=result.error)
    return ok(data=_token(result))


@router.post("/logout", response_model=dict)
async def logout(user: UserAccount = Depends(get_current_user)):
    await identity.sign_out(user.id)
    return ok(message="Signed out")


@router.get("/me", response_model=dict)
async def me(user: UserAccount = Depends(get_current_user)):
    return ok(data=AccountInfo.model_validate(user).model_dump())
