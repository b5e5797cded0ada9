# billbook/api/v1/schemas/auth.py
"""Request and response schemas for sign-up / sign-in."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, EmailStr, Field, field_validator

from billbook.domain.services.identity import MAX_PASSWORD_BYTES


class SignupRequest(BaseModel):
    email: EmailStr
    password: str = Field(min_length=8, max_length=MAX_PASSWORD_BYTES)
    tax_id: str | None = Field(default=None, description="Optional GSTIN of the business")

    @field_validator("password")
    @classmethod
    def _check_password_bytes(cls, value: str) -> str:
        if len(value.encode()) > MAX_PASSWORD_BYTES:
            raise ValueError(f"Password must be at most {MAX_PASSWORD_BYTES} bytes")
        return value


class LoginRequest(BaseModel):
    email: EmailStr
    password: str


class TokenResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
    expires_in: int = Field(description="Access token lifetime in seconds")


class AccountInfo(BaseModel):
    id: str
    email: str
    created_at: datetime | None = None

    class Config:
        from_attributes = True
