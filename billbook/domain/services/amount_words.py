# billbook/domain/services/amount_words.py
"""
Spell a rupee amount in words using the Indian numbering system.

    >>> convert_to_words(123456)
    'One Lakh Twenty Three Thousand Four Hundred Fifty Six Rupees Only'

Paise are not spelled: Decimal amounts are rounded half-up to whole rupees.
"""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal

_ONES = ["", "One", "Two", "Three", "Four", "Five", "Six", "Seven", "Eight", "Nine"]
_TEENS = [
    "Ten",
    "Eleven",
    "Twelve",
    "Thirteen",
    "Fourteen",
    "Fifteen",
    "Sixteen",
    "Seventeen",
    "Eighteen",
    "Nineteen",
]
_TENS = ["", "", "Twenty", "Thirty", "Forty", "Fifty", "Sixty", "Seventy", "Eighty", "Ninety"]

CRORE = 10_000_000
LAKH = 100_000
THOUSAND = 1_000

SUFFIX = "Rupees Only"


def _hundreds(num: int) -> str:
    """Words for 0..999, each word followed by a space."""
    result = ""
    if num >= 100:
        result += _ONES[num // 100] + " Hundred "
        num %= 100
    if num >= 20:
        result += _TENS[num // 10] + " "
        num %= 10
    elif num >= 10:
        return result + _TEENS[num - 10] + " "
    if num > 0:
        result += _ONES[num] + " "
    return result


def _indian_words(amount: int) -> str:
    crores = amount // CRORE
    lakhs = (amount % CRORE) // LAKH
    thousands = (amount % LAKH) // THOUSAND
    remainder = amount % THOUSAND

    result = ""
    if crores > 0:
        # 1000+ crore has no larger unit; spell the crore count itself
        crore_words = _hundreds(crores) if crores < THOUSAND else _indian_words(crores) + " "
        result += crore_words + "Crore "
    if lakhs > 0:
        result += _hundreds(lakhs) + "Lakh "
    if thousands > 0:
        result += _hundreds(thousands) + "Thousand "
    if remainder > 0:
        result += _hundreds(remainder)
    return result.rstrip()


def to_whole_rupees(amount: Decimal | int) -> int:
    if isinstance(amount, bool):
        raise ValueError("Amount must be a number, not a bool")
    if isinstance(amount, int):
        return amount
    return int(Decimal(amount).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def convert_to_words(amount: Decimal | int) -> str:
    rupees = to_whole_rupees(amount)
    if rupees < 0:
        raise ValueError(f"Amount must be non-negative, got {amount}")
    if rupees == 0:
        return f"Zero {SUFFIX}"
    return f"{_indian_words(rupees)} {SUFFIX}"
