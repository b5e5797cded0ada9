# billbook/domain/services/document_builder.py
"""
Assemble invoices and purchase bills from a typed draft.

The draft is validated first; only a clean draft is turned into a
:class:`Document`. Subtotal, GST breakdown and total are always derived
from the items here, never taken from the caller.
"""

from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass, field
from datetime import date, datetime, timezone
from decimal import Decimal

from billbook.domain.models.documents import (
    BusinessProfile,
    Counterparty,
    Document,
    DocumentKind,
    DocumentStatus,
    GSTBreakdown,
    LineItem,
)
from billbook.domain.services.gst_calculator import compute_gst_breakdown
from billbook.domain.services.line_items import (
    add_item,
    compute_subtotal,
    new_line_item,
    remove_item,
    update_item,
)
from billbook.domain.services.numbering import next_document_number, resolve_prefix

logger = logging.getLogger("document_builder")


# ---------------------------------------------------------------------------
# Data structures
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class FieldError:
    field: str
    message: str

    def as_dict(self) -> dict:
        return {"field": self.field, "message": self.message}


@dataclass
class DocumentDraft:
    """Editable form state for one document."""

    kind: DocumentKind = DocumentKind.INVOICE
    counterparty_name: str = ""
    counterparty_address: str = ""
    counterparty_state: str = ""
    counterparty_gstin: str = ""
    counterparty_pan: str = ""
    issue_date: date = field(default_factory=date.today)
    items: tuple[LineItem, ...] = field(default_factory=lambda: (new_line_item(),))

    def add_item(self) -> LineItem:
        item = new_line_item()
        self.items = add_item(self.items, item)
        return item

    def remove_item(self, item_id: str) -> None:
        self.items = remove_item(self.items, item_id)

    def update_item(self, item_id: str, **changes) -> None:
        self.items = update_item(self.items, item_id, **changes)

    @property
    def subtotal(self) -> Decimal:
        return compute_subtotal(self.items)

    def preview(self, seller_state: str) -> "Totals":
        return compute_totals(self.items, seller_state, self.counterparty_state)


@dataclass(frozen=True)
class Totals:
    subtotal: Decimal
    gst_breakdown: GSTBreakdown
    total: Decimal


@dataclass
class BuildResult:
    document: Document | None = None
    errors: list[FieldError] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return self.document is not None and not self.errors


# ---------------------------------------------------------------------------
# Totals
# ---------------------------------------------------------------------------

def compute_totals(items, seller_state: str, counterparty_state: str) -> Totals:
    subtotal = compute_subtotal(items)
    breakdown = compute_gst_breakdown(subtotal, seller_state, counterparty_state)
    return Totals(
        subtotal=subtotal,
        gst_breakdown=breakdown,
        total=subtotal + breakdown.total,
    )


# ---------------------------------------------------------------------------
# Validation
# ---------------------------------------------------------------------------

def validate_draft(draft: DocumentDraft) -> list[FieldError]:
    """Return every problem with ``draft``; an empty list means it can be built."""
    role = draft.kind.counterparty_role
    errors: list[FieldError] = []

    if not draft.counterparty_name.strip():
        errors.append(FieldError("counterparty_name", f"{role.capitalize()} name is required"))
    # Vendor address is optional on purchase bills
    if draft.kind is DocumentKind.INVOICE and not draft.counterparty_address.strip():
        errors.append(FieldError("counterparty_address", "Customer address is required"))
    if not draft.counterparty_state.strip():
        errors.append(FieldError("counterparty_state", f"{role.capitalize()} state is required"))

    if not draft.items:
        errors.append(FieldError("items", "At least one item is required"))
    for index, item in enumerate(draft.items):
        if not item.description.strip():
            errors.append(FieldError(f"items[{index}].description", "Item description is required"))
        if item.unit_rate <= 0:
            errors.append(FieldError(f"items[{index}].unit_rate", "Item rate must be greater than zero"))

    return errors


# ---------------------------------------------------------------------------
# Building
# ---------------------------------------------------------------------------

def _counterparty(draft: DocumentDraft) -> Counterparty:
    return Counterparty(
        name=draft.counterparty_name.strip(),
        address=draft.counterparty_address.strip(),
        state=draft.counterparty_state.strip(),
        gstin=draft.counterparty_gstin.strip().upper(),
        pan=draft.counterparty_pan.strip().upper(),
    )


def build_document(
    draft: DocumentDraft,
    profile: BusinessProfile,
    existing_count: int,
    *,
    document_id: str | None = None,
    now: datetime | None = None,
) -> BuildResult:
    """
    Build a new unpaid document and stamp its number.

    ``existing_count`` is the number of documents of this kind the owner
    already has.
    """
    errors = validate_draft(draft)
    if errors:
        logger.info("Draft %s rejected with %d error(s)", draft.kind.value, len(errors))
        return BuildResult(errors=errors)

    totals = compute_totals(draft.items, profile.registration_state, draft.counterparty_state)
    document = Document(
        id=document_id or uuid.uuid4().hex,
        owner_id=profile.owner_id,
        kind=draft.kind,
        document_number=next_document_number(resolve_prefix(profile), existing_count),
        counterparty=_counterparty(draft),
        seller_state=profile.registration_state,
        issue_date=draft.issue_date,
        items=tuple(draft.items),
        subtotal=totals.subtotal,
        gst_breakdown=totals.gst_breakdown,
        total=totals.total,
        status=DocumentStatus.UNPAID,
        created_at=now or datetime.now(timezone.utc),
    )
    return BuildResult(document=document)


def rebuild_document(existing: Document, draft: DocumentDraft, profile: BusinessProfile) -> BuildResult:
    """
    Apply an edit. Number, creation time and status are kept; content and
    totals come from the draft.
    """
    errors = validate_draft(draft)
    if errors:
        return BuildResult(errors=errors)

    totals = compute_totals(draft.items, profile.registration_state, draft.counterparty_state)
    document = existing.model_copy(
        update={
            "counterparty": _counterparty(draft),
            "seller_state": profile.registration_state,
            "issue_date": draft.issue_date,
            "items": tuple(draft.items),
            "subtotal": totals.subtotal,
            "gst_breakdown": totals.gst_breakdown,
            "total": totals.total,
        }
    )
    return BuildResult(document=document)


def rederive(document: Document) -> Document:
    """Recompute subtotal, breakdown and total from the document's own items."""
    totals = compute_totals(document.items, document.seller_state, document.counterparty.state)
    return document.model_copy(
        update={
            "subtotal": totals.subtotal,
            "gst_breakdown": totals.gst_breakdown,
            "total": totals.total,
        }
    )


def draft_from_document(document: Document) -> DocumentDraft:
    """Load an existing document back into an editable draft."""
    cp = document.counterparty
    return DocumentDraft(
        kind=document.kind,
        counterparty_name=cp.name,
        counterparty_address=cp.address,
        counterparty_state=cp.state,
        counterparty_gstin=cp.gstin,
        counterparty_pan=cp.pan,
        issue_date=document.issue_date,
        items=tuple(document.items),
    )
