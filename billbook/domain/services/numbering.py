# billbook/domain/services/numbering.py
"""
Sequential, prefix-scoped document numbers.

The next number is derived from how many documents the owner already has,
so the first document of every account is ``<PREFIX>-5970``. Deleting a
document lowers that count, so callers pass the larger of the count and the
highest sequence already issued under the prefix (see :func:`issued_count`).
Reading the count and inserting the new document are two separate steps: two
sessions creating at the same moment can be handed the same number.
"""

from __future__ import annotations

import re
from typing import Iterable

from billbook.domain.models.documents import BusinessProfile

DOCUMENT_NUMBER_BASE = 5969
DEFAULT_PREFIX = "XUSE"

PREFIX_REGEX = re.compile(r"^[A-Z0-9]{1,6}$")


def is_valid_prefix(prefix: str | None) -> bool:
    if not prefix:
        return False
    return bool(PREFIX_REGEX.match(prefix))


def next_document_number(prefix: str, existing_count: int) -> str:
    if not is_valid_prefix(prefix):
        raise ValueError(f"Invalid document prefix: {prefix!r}")
    if existing_count < 0:
        raise ValueError(f"existing_count must be >= 0, got {existing_count}")
    return f"{prefix}-{DOCUMENT_NUMBER_BASE + existing_count + 1}"


def prefix_from_name(name: str | None) -> str | None:
    """First four letters of a business name, spaces dropped, upper-cased."""
    compact = re.sub(r"\s+", "", name or "")
    if len(compact) < 4:
        return None
    candidate = compact[:4].upper()
    return candidate if is_valid_prefix(candidate) else None


def resolve_prefix(profile: BusinessProfile | None, default: str = DEFAULT_PREFIX) -> str:
    """Prefix to stamp on the next document for ``profile``."""
    if profile is not None:
        own = (profile.invoice_prefix or "").strip().upper()
        if own and is_valid_prefix(own):
            return own
        from_name = prefix_from_name(profile.legal_name)
        if from_name:
            return from_name
    return default


def sequence_of(number: str, prefix: str) -> int | None:
    """Position of ``<prefix>-N`` in the prefix's sequence (5970 -> 1), else None."""
    head, sep, tail = (number or "").rpartition("-")
    if not sep or head != prefix or not tail.isdigit():
        return None
    return int(tail) - DOCUMENT_NUMBER_BASE


def issued_count(existing_count: int, numbers: Iterable[str], prefix: str) -> int:
    """
    Count to hand to :func:`next_document_number` so that no number still
    in use under ``prefix`` is issued again.
    """
    sequences = [s for s in (sequence_of(n, prefix) for n in numbers) if s is not None]
    return max([existing_count] + sequences)
