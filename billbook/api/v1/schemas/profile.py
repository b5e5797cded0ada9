# billbook/api/v1/schemas/profile.py
"""Business profile request/response schemas."""

from __future__ import annotations

from pydantic import BaseModel, Field, field_validator

from billbook.domain.models.documents import BankDetails
from billbook.domain.services.gstin_pan_validation import (
    is_valid_gstin,
    is_valid_pan,
    normalize_tax_id,
)
from billbook.domain.services.numbering import is_valid_prefix


class ProfileUpdate(BaseModel):
    legal_name: str = Field(default="", max_length=255)
    phone: str = Field(default="", max_length=20)
    address: str = ""
    registration_state: str = Field(default="", max_length=64)
    tax_id: str | None = None
    pan_number: str = ""
    bank_details: BankDetails = Field(default_factory=BankDetails)
    invoice_prefix: str = "XUSE"

    @field_validator("tax_id")
    @classmethod
    def _check_gstin(cls, value: str | None) -> str | None:
        value = normalize_tax_id(value)
        if not value:
            return None
        if not is_valid_gstin(value):
            raise ValueError("Invalid GSTIN format")
        return value

    @field_validator("pan_number")
    @classmethod
    def _check_pan(cls, value: str) -> str:
        value = normalize_tax_id(value)
        if value and not is_valid_pan(value):
            raise ValueError("Invalid PAN format")
        return value

    @field_validator("invoice_prefix")
    @classmethod
    def _check_prefix(cls, value: str) -> str:
        value = (value or "").strip().upper()
        # Blank falls back to the business name when numbering
        if value and not is_valid_prefix(value):
            raise ValueError("Prefix must be 1-6 letters or digits")
        return value
