# tests/test_document_builder.py
"""Tests for draft validation and document assembly."""

from datetime import date
from decimal import Decimal

import pytest

from billbook.domain.models.documents import DocumentKind, DocumentStatus, LineItem
from billbook.domain.services.amount_words import convert_to_words
from billbook.domain.services.document_builder import (
    DocumentDraft,
    build_document,
    compute_totals,
    draft_from_document,
    rebuild_document,
    rederive,
    validate_draft,
)
from billbook.domain.services.line_items import LastItemError


def _draft(items, state="Rajasthan", kind=DocumentKind.INVOICE, **overrides) -> DocumentDraft:
    values = dict(
        kind=kind,
        counterparty_name="Jaipur Handicrafts",
        counterparty_address="MI Road, Jaipur",
        counterparty_state=state,
        counterparty_gstin="08aabcj1234k1z5",
        issue_date=date(2026, 10, 19),
        items=tuple(items),
    )
    values.update(overrides)
    return DocumentDraft(**values)


# ---------------------------------------------------------------------------
# End-to-end scenarios
# ---------------------------------------------------------------------------

class TestScenarios:
    def test_gujarat_seller_rajasthan_customer(self, sample_items, gujarat_profile, fixed_now):
        result = build_document(_draft(sample_items, "Rajasthan"), gujarat_profile, 0, now=fixed_now)
        assert result.ok
        doc = result.document
        assert doc.subtotal == Decimal("1300")
        assert doc.gst_breakdown.is_inter_state is True
        assert doc.gst_breakdown.igst == Decimal("234")
        assert doc.total == Decimal("1534")
        assert doc.document_number == "ACME-5970"
        assert doc.status is DocumentStatus.UNPAID
        assert doc.created_at == fixed_now

    def test_gujarat_seller_gujarat_customer(self, sample_items, gujarat_profile):
        result = build_document(_draft(sample_items, "GUJARAT"), gujarat_profile, 4)
        doc = result.document
        assert doc.gst_breakdown.is_inter_state is False
        assert doc.gst_breakdown.cgst == Decimal("117")
        assert doc.gst_breakdown.sgst == Decimal("117")
        assert doc.total == Decimal("1534")
        assert doc.document_number == "ACME-5974"

    @pytest.mark.parametrize(
        "state, igst, cgst",
        [("Rajasthan", Decimal("234"), Decimal("0")), ("Gujarat", Decimal("0"), Decimal("117"))],
    )
    def test_two_chairs_and_a_table(self, gujarat_profile, state, igst, cgst):
        items = (
            LineItem(id="chair", description="Chair", quantity=2, unit_rate=Decimal("500")),
            LineItem(id="table", description="Table", quantity=1, unit_rate=Decimal("300")),
        )
        doc = build_document(_draft(items, state), gujarat_profile, 0).document
        assert [item.line_total for item in doc.items] == [Decimal("1000"), Decimal("300")]
        assert doc.subtotal == Decimal("1300")
        assert doc.gst_breakdown.igst == igst
        assert doc.gst_breakdown.cgst == doc.gst_breakdown.sgst == cgst
        assert doc.total == Decimal("1534")
        assert convert_to_words(doc.total) == "One Thousand Five Hundred Thirty Four Rupees Only"


def test_total_is_subtotal_plus_tax(sample_items, gujarat_profile):
    doc = build_document(_draft(sample_items, "Kerala"), gujarat_profile, 0).document
    assert doc.total == doc.subtotal + doc.gst_breakdown.total


def test_counterparty_fields_are_normalised(sample_items, gujarat_profile):
    doc = build_document(
        _draft(sample_items, counterparty_name="  Jaipur Handicrafts ", counterparty_pan="aabcj1234k"),
        gujarat_profile,
        0,
    ).document
    assert doc.counterparty.name == "Jaipur Handicrafts"
    assert doc.counterparty.gstin == "08AABCJ1234K1Z5"
    assert doc.counterparty.pan == "AABCJ1234K"
    assert doc.seller_state == "Gujarat"


# ---------------------------------------------------------------------------
# Validation
# ---------------------------------------------------------------------------

class TestValidation:
    def test_clean_draft(self, sample_items):
        assert validate_draft(_draft(sample_items)) == []

    def test_missing_customer_fields(self, sample_items):
        draft = _draft(sample_items, counterparty_name=" ", counterparty_address="", counterparty_state="")
        fields = {e.field: e.message for e in validate_draft(draft)}
        assert fields == {
            "counterparty_name": "Customer name is required",
            "counterparty_address": "Customer address is required",
            "counterparty_state": "Customer state is required",
        }

    def test_vendor_address_is_optional(self, sample_items):
        draft = _draft(sample_items, kind=DocumentKind.PURCHASE_BILL, counterparty_address="")
        assert validate_draft(draft) == []

    def test_vendor_messages(self, sample_items):
        draft = _draft(sample_items, kind=DocumentKind.PURCHASE_BILL, counterparty_name="")
        assert [e.message for e in validate_draft(draft)] == ["Vendor name is required"]

    def test_no_items(self):
        errors = validate_draft(_draft([]))
        assert [e.field for e in errors] == ["items"]

    def test_bad_items_are_reported_per_row(self):
        items = [
            LineItem(id="a", description="Valid", quantity=1, unit_rate=Decimal("10")),
            LineItem(id="b", description="", quantity=1, unit_rate=Decimal("0")),
        ]
        fields = [e.field for e in validate_draft(_draft(items))]
        assert fields == ["items[1].description", "items[1].unit_rate"]

    def test_invalid_draft_is_never_built(self, gujarat_profile):
        result = build_document(_draft([], counterparty_name=""), gujarat_profile, 0)
        assert not result.ok
        assert result.document is None
        assert len(result.errors) == 2


# ---------------------------------------------------------------------------
# Editing
# ---------------------------------------------------------------------------

class TestDraftEditing:
    def test_new_draft_has_one_blank_item(self):
        draft = DocumentDraft()
        assert len(draft.items) == 1
        assert draft.subtotal == 0

    def test_add_update_remove(self, gujarat_profile):
        draft = DocumentDraft(counterparty_state="Rajasthan")
        first = draft.items[0]
        second = draft.add_item()
        draft.update_item(first.id, description="Chairs", quantity=4, unit_rate=Decimal("250"))
        draft.update_item(second.id, description="Table", unit_rate=Decimal("1500"))
        assert draft.subtotal == Decimal("2500")

        draft.remove_item(second.id)
        assert draft.subtotal == Decimal("1000")
        with pytest.raises(LastItemError):
            draft.remove_item(first.id)

        totals = draft.preview(gujarat_profile.registration_state)
        assert totals.gst_breakdown.igst == Decimal("180")
        assert totals.total == Decimal("1180")


def test_rebuild_keeps_identity_number_and_status(sample_items, gujarat_profile):
    original = build_document(_draft(sample_items), gujarat_profile, 2).document
    paid = original.model_copy(update={"status": DocumentStatus.PAID})

    draft = draft_from_document(paid)
    draft.update_item("item-1", unit_rate=Decimal("2000"))
    draft.counterparty_state = "Gujarat"
    rebuilt = rebuild_document(paid, draft, gujarat_profile).document

    assert rebuilt.id == original.id
    assert rebuilt.document_number == original.document_number
    assert rebuilt.created_at == original.created_at
    assert rebuilt.status is DocumentStatus.PAID
    assert rebuilt.subtotal == Decimal("2300")
    assert rebuilt.gst_breakdown.cgst == Decimal("207")


def test_rederive_ignores_stale_totals(sample_items, gujarat_profile):
    doc = build_document(_draft(sample_items), gujarat_profile, 0).document
    stale = doc.model_copy(update={"subtotal": Decimal("1"), "total": Decimal("1")})
    fresh = rederive(stale)
    assert fresh.subtotal == Decimal("1300")
    assert fresh.total == Decimal("1534")


def test_compute_totals(sample_items):
    totals = compute_totals(sample_items, "Gujarat", "Rajasthan")
    assert totals.subtotal == Decimal("1300")
    assert totals.total == Decimal("1534")
