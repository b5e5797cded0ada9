"""Shared test fixtures for the billbook test suite."""

import asyncio
import uuid
from datetime import date, datetime, timezone
from decimal import Decimal

import pytest

from billbook.domain.models.documents import (
    BankDetails,
    BusinessProfile,
    DocumentKind,
    DocumentStatus,
    LineItem,
)
from billbook.domain.services.document_builder import DocumentDraft, build_document


@pytest.fixture(scope="session")
def event_loop():
    """Use a single event loop for the entire test session."""
    loop = asyncio.new_event_loop()
    yield loop
    loop.close()


@pytest.fixture
def sample_items() -> tuple:
    """Two priced rows adding up to a 1300 subtotal."""
    return (
        LineItem(id="item-1", description="Website design", tax_code="998314", quantity=1, unit_rate=Decimal("1000")),
        LineItem(id="item-2", description="Hosting (monthly)", tax_code="998315", quantity=3, unit_rate=Decimal("100")),
    )


@pytest.fixture
def gujarat_profile() -> BusinessProfile:
    return BusinessProfile(
        owner_id="owner-1",
        legal_name="Acme Traders",
        email="accounts@acme.example",
        phone="9876543210",
        address="12 Ring Road, Ahmedabad",
        registration_state="Gujarat",
        tax_id="24AABCU9603R1ZM",
        pan_number="AABCU9603R",
        bank_details=BankDetails(bank_name="State Bank", account_number="001122334455", ifsc_code="SBIN0001234"),
        invoice_prefix="ACME",
    )


@pytest.fixture
def issue_day() -> date:
    return date(2026, 10, 19)


@pytest.fixture
def fixed_now() -> datetime:
    return datetime(2026, 10, 19, 10, 30, tzinfo=timezone.utc)


# ---------------------------------------------------------------------------
# Document builders
# ---------------------------------------------------------------------------

def make_draft(
    amount="1000",
    state="Rajasthan",
    kind=DocumentKind.INVOICE,
    issue_date=date(2026, 10, 19),
    name="Jaipur Handicrafts",
) -> DocumentDraft:
    return DocumentDraft(
        kind=kind,
        counterparty_name=name,
        counterparty_address="MI Road, Jaipur",
        counterparty_state=state,
        issue_date=issue_date,
        items=(LineItem(id=uuid.uuid4().hex, description="Goods", quantity=1, unit_rate=Decimal(amount)),),
    )


def make_document(
    amount="1000",
    state="Rajasthan",
    kind=DocumentKind.INVOICE,
    issue_date=date(2026, 10, 19),
    status=DocumentStatus.UNPAID,
    owner_id="owner-1",
    count=0,
    created_at=None,
):
    profile = BusinessProfile(owner_id=owner_id, registration_state="Gujarat", invoice_prefix="ACME")
    doc = build_document(
        make_draft(amount, state, kind, issue_date),
        profile,
        count,
        now=created_at or datetime(2026, 10, 19, 10, 0, tzinfo=timezone.utc),
    ).document
    return doc.model_copy(update={"status": status})


@pytest.fixture
def document_factory():
    return make_document


@pytest.fixture
def draft_factory():
    return make_draft
