# billbook/domain/services/formatting.py
"""Display helpers for rupee amounts and dates (en-IN conventions)."""

from __future__ import annotations

from datetime import date, datetime
from decimal import ROUND_HALF_UP, Decimal

RUPEE = "₹"


def group_indian(digits: str) -> str:
    """Insert en-IN separators: last three digits, then groups of two."""
    if len(digits) <= 3:
        return digits
    head, tail = digits[:-3], digits[-3:]
    groups = []
    while len(head) > 2:
        groups.insert(0, head[-2:])
        head = head[:-2]
    if head:
        groups.insert(0, head)
    return ",".join(groups) + "," + tail


def format_currency(amount: Decimal | int | float, decimals: int = 0) -> str:
    """
    Format as Indian rupees, e.g. ``format_currency(153400) == "₹1,53,400"``.
    """
    value = Decimal(str(amount))
    quantum = Decimal(1).scaleb(-decimals)
    value = value.quantize(quantum, rounding=ROUND_HALF_UP)

    sign = "-" if value < 0 else ""
    whole, _, fraction = f"{abs(value):f}".partition(".")
    text = RUPEE + group_indian(whole)
    if decimals:
        text += "." + fraction
    return sign + text


def format_date(value: date | datetime) -> str:
    """``19 Oct 2026``"""
    return f"{value.day} {value.strftime('%b')} {value.year}"
