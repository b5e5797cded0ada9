# billbook/domain/services/gst_calculator.py
"""
GST breakdown for a document subtotal.

Treatment is decided from the counterparty's state alone: a counterparty
registered in the reference state is billed IGST, every other state
(including a blank one) is billed CGST + SGST. The seller's state is
accepted so callers pass both parties, but it does not take part in the
decision.
"""

from __future__ import annotations

from decimal import Decimal

from billbook.domain.models.documents import GSTBreakdown

GST_RATE = Decimal("18")
INTER_STATE_REFERENCE_STATE = "Rajasthan"

_HUNDRED = Decimal("100")
_TWO = Decimal("2")


def normalize_state(state: str | None) -> str:
    """Strip and case-fold a state name for comparison."""
    return (state or "").strip().casefold()


def is_inter_state(counterparty_state: str | None) -> bool:
    return normalize_state(counterparty_state) == normalize_state(INTER_STATE_REFERENCE_STATE)


def calculate_gst(amount: Decimal | int, rate: Decimal = GST_RATE) -> Decimal:
    """Tax on ``amount`` at ``rate`` percent."""
    return Decimal(amount) * rate / _HUNDRED


def compute_gst_breakdown(
    subtotal: Decimal | int,
    seller_state: str | None,
    counterparty_state: str | None,
) -> GSTBreakdown:
    """
    Split the GST on ``subtotal`` into IGST or CGST/SGST.

    No rounding is applied; halves of odd-paise totals keep their full
    Decimal precision.
    """
    total = calculate_gst(subtotal)

    if is_inter_state(counterparty_state):
        return GSTBreakdown(
            is_inter_state=True,
            igst=total,
            cgst=Decimal("0"),
            sgst=Decimal("0"),
            total=total,
        )

    half = total / _TWO
    return GSTBreakdown(
        is_inter_state=False,
        igst=Decimal("0"),
        cgst=half,
        sgst=half,
        total=total,
    )
