# billbook/domain/services/identity.py
"""
Password accounts and JWT bearer sessions.

Every call returns an :class:`IdentityResult`; password hashes never leave
this module.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone

import bcrypt as _bcrypt
from jose import JWTError, jwt
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from billbook.core.config import settings
from billbook.domain.models.documents import BusinessProfile
from billbook.domain.services.gstin_pan_validation import (
    is_valid_gstin,
    normalize_tax_id,
    pan_from_gstin,
)
from billbook.infrastructure.db.models import UserAccount
from billbook.infrastructure.db.repositories.profile_repository import ProfileRepository
from billbook.infrastructure.db.repositories.user_repository import UserRepository

logger = logging.getLogger("identity")

TOKEN_TYPE = "user_access"

# bcrypt only reads the first 72 bytes and rejects longer input
MAX_PASSWORD_BYTES = 72
PASSWORD_TOO_LONG = f"Password must be at most {MAX_PASSWORD_BYTES} bytes"


@dataclass
class IdentityResult:
    success: bool
    account_id: str | None = None
    email: str | None = None
    access_token: str | None = None
    expires_in: int | None = None
    error: str | None = None


# ---------------------------------------------------------------------------
# Password hashing (bcrypt, direct)
# ---------------------------------------------------------------------------

def hash_password(plain: str) -> str:
    return _bcrypt.hashpw(plain.encode(), _bcrypt.gensalt()).decode()


def verify_password(plain: str, hashed: str) -> bool:
    secret = plain.encode()
    if len(secret) > MAX_PASSWORD_BYTES:
        return False
    return _bcrypt.checkpw(secret, hashed.encode())


# ---------------------------------------------------------------------------
# JWT helpers
# ---------------------------------------------------------------------------

def create_access_token(account_id: str) -> tuple[str, int]:
    """Return (encoded_jwt, expires_in_seconds)."""
    expire_minutes = settings.JWT_ACCESS_EXPIRE_MINUTES
    payload = {
        "sub": account_id,
        "type": TOKEN_TYPE,
        "exp": datetime.now(timezone.utc) + timedelta(minutes=expire_minutes),
    }
    token = jwt.encode(payload, settings.JWT_SECRET, algorithm=settings.JWT_ALGORITHM)
    return token, expire_minutes * 60


def decode_access_token(token: str) -> str | None:
    """Account id carried by a valid access token, else None."""
    try:
        payload = jwt.decode(token, settings.JWT_SECRET, algorithms=[settings.JWT_ALGORITHM])
    except JWTError as exc:
        logger.debug("JWT decode failed: %s", exc)
        return None
    if payload.get("type") != TOKEN_TYPE:
        return None
    return payload.get("sub") or None


def _session(account: UserAccount) -> IdentityResult:
    token, expires_in = create_access_token(account.id)
    return IdentityResult(
        success=True,
        account_id=account.id,
        email=account.email,
        access_token=token,
        expires_in=expires_in,
    )


# ---------------------------------------------------------------------------
# Operations
# ---------------------------------------------------------------------------

async def sign_up(db: AsyncSession, email: str, password: str, tax_id: str | None = None) -> IdentityResult:
    """Create the account and its default business profile."""
    tax_id = normalize_tax_id(tax_id) or None
    if tax_id and not is_valid_gstin(tax_id):
        return IdentityResult(success=False, error="Invalid GSTIN format")
    if len(password.encode()) > MAX_PASSWORD_BYTES:
        return IdentityResult(success=False, error=PASSWORD_TOO_LONG)

    users = UserRepository(db)
    try:
        if await users.get_by_email(email):
            return IdentityResult(success=False, error="Email already registered")
        account = await users.create(email, hash_password(password))
    except SQLAlchemyError as exc:
        logger.error("Sign-up failed for %s: %s", email, exc)
        await db.rollback()
        return IdentityResult(success=False, error="Could not create account")

    profile = BusinessProfile(
        owner_id=account.id,
        email=account.email,
        tax_id=tax_id,
        pan_number=pan_from_gstin(tax_id) or "",
        invoice_prefix=settings.DEFAULT_INVOICE_PREFIX,
    )
    saved = await ProfileRepository(db).save(profile)
    if not saved.success:
        return IdentityResult(success=False, error=saved.error)

    logger.info("New account registered: %s", account.id)
    return _session(account)


async def sign_in(db: AsyncSession, email: str, password: str) -> IdentityResult:
    try:
        account = await UserRepository(db).get_by_email(email)
    except SQLAlchemyError as exc:
        logger.error("Sign-in lookup failed: %s", exc)
        return IdentityResult(success=False, error="Could not sign in")

    if not account or not verify_password(password, account.password_hash):
        return IdentityResult(success=False, error="Invalid email or password")
    return _session(account)


async def sign_out(account_id: str) -> IdentityResult:
    # Tokens are stateless; the client drops its copy
    logger.info("Account signed out: %s", account_id)
    return IdentityResult(success=True, account_id=account_id)


async def current_account(db: AsyncSession, token: str) -> UserAccount | None:
    account_id = decode_access_token(token)
    if not account_id:
        return None
    return await UserRepository(db).get_by_id(account_id)
