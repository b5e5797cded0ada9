# billbook/domain/services/gstin_pan_validation.py

import re

PAN_REGEX = re.compile(r"^[A-Z]{5}[0-9]{4}[A-Z]$")
GSTIN_REGEX = re.compile(r"^[0-9]{2}[A-Z]{5}[0-9]{4}[A-Z][1-9A-Z]Z[0-9A-Z]$")


def normalize_tax_id(value: str | None) -> str:
    return (value or "").strip().upper()


def is_valid_pan(pan: str | None) -> bool:
    if not pan:
        return False
    return bool(PAN_REGEX.match(normalize_tax_id(pan)))


def is_valid_gstin(gstin: str | None) -> bool:
    if not gstin:
        return False
    gstin = normalize_tax_id(gstin)
    if not GSTIN_REGEX.match(gstin):
        return False

    # PAN is embedded in chars 3-12
    return is_valid_pan(gstin[2:12])


def pan_from_gstin(gstin: str | None) -> str | None:
    """PAN embedded in a valid GSTIN, used to prefill the profile at sign-up."""
    if not is_valid_gstin(gstin):
        return None
    return normalize_tax_id(gstin)[2:12]
