# tests/test_gst_calculator.py
"""Tests for the IGST / CGST+SGST split."""

from decimal import Decimal

import pytest

from billbook.domain.services.gst_calculator import (
    GST_RATE,
    calculate_gst,
    compute_gst_breakdown,
    is_inter_state,
)


class TestComputeGstBreakdown:
    def test_rajasthan_counterparty_is_inter_state(self):
        gst = compute_gst_breakdown(Decimal("1300"), "Gujarat", "Rajasthan")
        assert gst.is_inter_state is True
        assert gst.igst == Decimal("234")
        assert gst.cgst == 0
        assert gst.sgst == 0
        assert gst.total == Decimal("234")

    def test_other_state_is_intra_state(self):
        gst = compute_gst_breakdown(Decimal("1300"), "Gujarat", "GUJARAT")
        assert gst.is_inter_state is False
        assert gst.igst == 0
        assert gst.cgst == Decimal("117")
        assert gst.sgst == Decimal("117")

    def test_state_match_ignores_case_and_whitespace(self):
        assert compute_gst_breakdown(100, "Delhi", "  rajasthan ").is_inter_state is True

    def test_seller_state_does_not_decide_treatment(self):
        """Only the counterparty state is compared with the reference state."""
        same = compute_gst_breakdown(100, "Rajasthan", "Rajasthan")
        other = compute_gst_breakdown(100, "Rajasthan", "Kerala")
        assert same.is_inter_state is True
        assert other.is_inter_state is False

    def test_blank_counterparty_state_is_intra_state(self):
        assert compute_gst_breakdown(100, "Gujarat", "").is_inter_state is False
        assert compute_gst_breakdown(100, "Gujarat", None).is_inter_state is False

    def test_halves_keep_paise_precision(self):
        gst = compute_gst_breakdown(Decimal("0.01"), "Gujarat", "Gujarat")
        assert gst.total == Decimal("0.0018")
        assert gst.cgst == Decimal("0.0009")
        assert gst.cgst + gst.sgst == gst.total

    def test_zero_subtotal(self):
        gst = compute_gst_breakdown(Decimal("0"), "Gujarat", "Rajasthan")
        assert gst.total == 0
        assert gst.igst == 0


def test_calculate_gst_uses_default_rate():
    assert GST_RATE == Decimal("18")
    assert calculate_gst(Decimal("1000")) == Decimal("180")
    assert calculate_gst(1000, Decimal("5")) == Decimal("50")


def test_is_inter_state():
    assert is_inter_state("RAJASTHAN")
    assert not is_inter_state("Maharashtra")


def test_breakdown_is_deterministic():
    first = compute_gst_breakdown(Decimal("1299.99"), "Gujarat", "Rajasthan")
    second = compute_gst_breakdown(Decimal("1299.99"), "Gujarat", "Rajasthan")
    assert first == second


@pytest.mark.parametrize("subtotal", ["0", "1", "0.01", "250", "1300", "99999.99", "10000000"])
@pytest.mark.parametrize("state", ["Rajasthan", "Gujarat"])
def test_tax_is_eighteen_percent_of_subtotal(subtotal, state):
    gst = compute_gst_breakdown(Decimal(subtotal), "Gujarat", state)
    assert gst.total == Decimal(subtotal) * Decimal("0.18")
    assert gst.igst + gst.cgst + gst.sgst == gst.total
