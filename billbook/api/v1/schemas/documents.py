# billbook/api/v1/schemas/documents.py
"""Request and response schemas for invoice and purchase bill endpoints."""

from __future__ import annotations

import uuid
from datetime import date, datetime
from decimal import Decimal

from pydantic import BaseModel, Field

from billbook.domain.models.documents import (
    Counterparty,
    Document,
    DocumentKind,
    DocumentStatus,
    GSTBreakdown,
    LineItem,
)
from billbook.domain.services.amount_words import convert_to_words
from billbook.domain.services.document_builder import DocumentDraft, Totals
from billbook.domain.services.formatting import format_currency, format_date


class LineItemIn(BaseModel):
    id: str | None = None
    description: str = Field(default="", max_length=255)
    tax_code: str = Field(default="", max_length=16, description="HSN/SAC code")
    quantity: int = Field(default=1, ge=0)
    unit_rate: Decimal = Field(default=Decimal("0"), ge=0)

    def to_item(self) -> LineItem:
        return LineItem(
            id=self.id or uuid.uuid4().hex,
            description=self.description,
            tax_code=self.tax_code,
            quantity=self.quantity,
            unit_rate=self.unit_rate,
        )


class DocumentIn(BaseModel):
    """Create or edit an invoice / purchase bill. Totals are always computed server-side."""

    counterparty_name: str = Field(default="", max_length=255)
    counterparty_address: str = Field(default="")
    counterparty_state: str = Field(default="", max_length=64)
    counterparty_gstin: str = Field(default="", max_length=15)
    counterparty_pan: str = Field(default="", max_length=10)
    issue_date: date | None = None
    items: list[LineItemIn] = Field(default_factory=list)

    def to_draft(self, kind: DocumentKind) -> DocumentDraft:
        return DocumentDraft(
            kind=kind,
            counterparty_name=self.counterparty_name,
            counterparty_address=self.counterparty_address,
            counterparty_state=self.counterparty_state,
            counterparty_gstin=self.counterparty_gstin,
            counterparty_pan=self.counterparty_pan,
            issue_date=self.issue_date or date.today(),
            items=tuple(item.to_item() for item in self.items),
        )


class TotalsPreview(BaseModel):
    subtotal: Decimal
    gst_breakdown: GSTBreakdown
    total: Decimal
    amount_in_words: str
    total_display: str

    @classmethod
    def from_totals(cls, totals: Totals) -> "TotalsPreview":
        return cls(
            subtotal=totals.subtotal,
            gst_breakdown=totals.gst_breakdown,
            total=totals.total,
            amount_in_words=convert_to_words(totals.total),
            total_display=format_currency(totals.total),
        )


class DocumentDetail(BaseModel):
    """Full document returned in responses, with display strings for renderers."""

    id: str
    kind: DocumentKind
    document_number: str
    counterparty: Counterparty
    seller_state: str
    issue_date: date
    items: list[LineItem]
    subtotal: Decimal
    gst_breakdown: GSTBreakdown
    total: Decimal
    status: DocumentStatus
    created_at: datetime

    amount_in_words: str
    total_display: str
    issue_date_display: str

    @classmethod
    def from_document(cls, doc: Document) -> "DocumentDetail":
        return cls(
            id=doc.id,
            kind=doc.kind,
            document_number=doc.document_number,
            counterparty=doc.counterparty,
            seller_state=doc.seller_state,
            issue_date=doc.issue_date,
            items=list(doc.items),
            subtotal=doc.subtotal,
            gst_breakdown=doc.gst_breakdown,
            total=doc.total,
            status=doc.status,
            created_at=doc.created_at,
            amount_in_words=convert_to_words(doc.total),
            total_display=format_currency(doc.total),
            issue_date_display=format_date(doc.issue_date),
        )


def document_sheet_rows(documents: list[Document]) -> list[dict]:
    """Flat rows for the document list spreadsheet."""
    return [
        {
            doc.kind.number_label: doc.document_number,
            "Date": format_date(doc.issue_date),
            doc.kind.counterparty_role.capitalize(): doc.counterparty.name,
            "State": doc.counterparty.state,
            "GSTIN": doc.counterparty.gstin,
            "Subtotal": float(doc.subtotal),
            "IGST": float(doc.gst_breakdown.igst),
            "CGST": float(doc.gst_breakdown.cgst),
            "SGST": float(doc.gst_breakdown.sgst),
            "Total": float(doc.total),
            "Status": doc.status.value,
        }
        for doc in documents
    ]
