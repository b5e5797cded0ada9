# tests/test_document_service.py
"""Tests for document orchestration against a mocked repository."""

from decimal import Decimal
from unittest.mock import AsyncMock, MagicMock

from billbook.domain.models.documents import DocumentKind, DocumentStatus
from billbook.domain.services import document_service
from billbook.domain.services.document_service import Failure
from billbook.infrastructure.db.repositories.base import StoreResult


def _repo(documents=(), count=0, numbers=()):
    repo = MagicMock()
    repo.count_for_owner = AsyncMock(return_value=StoreResult.ok(count))
    repo.numbers_for_owner = AsyncMock(return_value=StoreResult.ok(list(numbers)))
    repo.create = AsyncMock(side_effect=lambda doc: StoreResult.ok(doc))
    repo.update = AsyncMock(side_effect=lambda doc: StoreResult.ok(doc))
    repo.delete = AsyncMock(return_value=StoreResult.ok())
    repo.list_for_owner = AsyncMock(return_value=StoreResult.ok(list(documents)))
    repo.get = AsyncMock(return_value=StoreResult.not_found())
    return repo


class TestCreate:
    def test_numbers_from_existing_count(self, event_loop, gujarat_profile, draft_factory):
        repo = _repo(count=3)
        result = event_loop.run_until_complete(
            document_service.create_document(repo, gujarat_profile, draft_factory("1300"))
        )
        assert result.success
        assert result.document.document_number == "ACME-5973"
        assert result.document.total == Decimal("1534")
        repo.count_for_owner.assert_awaited_once_with("owner-1", DocumentKind.INVOICE)
        repo.create.assert_awaited_once()
        repo.list_for_owner.assert_awaited_once_with("owner-1", DocumentKind.INVOICE)

    def test_validation_failure_stores_nothing(self, event_loop, gujarat_profile, draft_factory):
        repo = _repo()
        result = event_loop.run_until_complete(
            document_service.create_document(repo, gujarat_profile, draft_factory(name=""))
        )
        assert not result.success
        assert result.failure is Failure.VALIDATION
        assert result.errors[0].field == "counterparty_name"
        repo.create.assert_not_awaited()

    def test_persistence_failure_is_reported(self, event_loop, gujarat_profile, draft_factory):
        repo = _repo()
        repo.create = AsyncMock(return_value=StoreResult.fail("Failed to create document: OperationalError"))
        result = event_loop.run_until_complete(
            document_service.create_document(repo, gujarat_profile, draft_factory())
        )
        assert not result.success
        assert result.failure is Failure.PERSISTENCE
        assert "OperationalError" in result.error
        repo.list_for_owner.assert_not_awaited()

    def test_count_failure_stops_creation(self, event_loop, gujarat_profile, draft_factory):
        repo = _repo()
        repo.count_for_owner = AsyncMock(return_value=StoreResult.fail("Failed to count document: X"))
        result = event_loop.run_until_complete(
            document_service.create_document(repo, gujarat_profile, draft_factory())
        )
        assert result.failure is Failure.PERSISTENCE
        repo.create.assert_not_awaited()

    def test_number_still_in_use_after_delete_is_skipped(self, event_loop, gujarat_profile, draft_factory):
        # ACME-5970 was deleted; ACME-5971 is the one document left
        repo = _repo(count=1, numbers=["ACME-5971"])
        result = event_loop.run_until_complete(
            document_service.create_document(repo, gujarat_profile, draft_factory())
        )
        assert result.success
        assert result.document.document_number == "ACME-5972"
        repo.numbers_for_owner.assert_awaited_once_with("owner-1", DocumentKind.INVOICE)

    def test_numbers_under_other_prefixes_are_ignored(self, event_loop, gujarat_profile, draft_factory):
        repo = _repo(count=1, numbers=["OLD-6100"])
        result = event_loop.run_until_complete(
            document_service.create_document(repo, gujarat_profile, draft_factory())
        )
        assert result.document.document_number == "ACME-5971"

    def test_number_lookup_failure_stops_creation(self, event_loop, gujarat_profile, draft_factory):
        repo = _repo()
        repo.numbers_for_owner = AsyncMock(return_value=StoreResult.fail("Failed to number document: X"))
        result = event_loop.run_until_complete(
            document_service.create_document(repo, gujarat_profile, draft_factory())
        )
        assert result.failure is Failure.PERSISTENCE
        repo.create.assert_not_awaited()


def test_load_documents_rederives_totals(event_loop, document_factory):
    stale = document_factory("1000").model_copy(update={"total": Decimal("5")})
    repo = _repo(documents=[stale])
    result = event_loop.run_until_complete(document_service.load_documents(repo, "owner-1"))
    assert result.documents[0].total == Decimal("1180")


def test_update_keeps_number(event_loop, gujarat_profile, document_factory, draft_factory):
    existing = document_factory("1000", count=7)
    repo = _repo()
    repo.get = AsyncMock(return_value=StoreResult.ok(existing))
    result = event_loop.run_until_complete(
        document_service.update_document(repo, gujarat_profile, existing.id, draft_factory("2000", state="Gujarat"))
    )
    assert result.success
    assert result.document.document_number == existing.document_number
    assert result.document.gst_breakdown.cgst == Decimal("180")


def test_update_missing_document(event_loop, gujarat_profile, draft_factory):
    result = event_loop.run_until_complete(
        document_service.update_document(_repo(), gujarat_profile, "nope", draft_factory())
    )
    assert result.failure is Failure.NOT_FOUND


class TestStatus:
    def test_toggle(self, event_loop, document_factory):
        doc = document_factory()
        repo = _repo()
        repo.get = AsyncMock(return_value=StoreResult.ok(doc))
        result = event_loop.run_until_complete(document_service.toggle_status(repo, "owner-1", doc.id))
        assert result.document.status is DocumentStatus.PAID
        stored = repo.update.await_args.args[0]
        assert stored.status is DocumentStatus.PAID

    def test_overdue_toggle_is_a_conflict(self, event_loop, document_factory):
        doc = document_factory(status=DocumentStatus.OVERDUE)
        repo = _repo()
        repo.get = AsyncMock(return_value=StoreResult.ok(doc))
        result = event_loop.run_until_complete(document_service.toggle_status(repo, "owner-1", doc.id))
        assert result.failure is Failure.CONFLICT
        repo.update.assert_not_awaited()

    def test_mark_overdue(self, event_loop, document_factory):
        doc = document_factory()
        repo = _repo()
        repo.get = AsyncMock(return_value=StoreResult.ok(doc))
        result = event_loop.run_until_complete(document_service.mark_overdue(repo, "owner-1", doc.id))
        assert result.document.status is DocumentStatus.OVERDUE

    def test_wrong_kind_is_not_found(self, event_loop, document_factory):
        doc = document_factory(kind=DocumentKind.PURCHASE_BILL)
        repo = _repo()
        repo.get = AsyncMock(return_value=StoreResult.ok(doc))
        result = event_loop.run_until_complete(
            document_service.toggle_status(repo, "owner-1", doc.id, DocumentKind.INVOICE)
        )
        assert result.failure is Failure.NOT_FOUND


def test_delete(event_loop):
    repo = _repo()
    result = event_loop.run_until_complete(document_service.delete_document(repo, "owner-1", "doc-1"))
    assert result.success
    repo.delete.assert_awaited_once_with("owner-1", "doc-1")


def test_delete_of_other_kind_is_refused(event_loop, document_factory):
    doc = document_factory(kind=DocumentKind.INVOICE)
    repo = _repo()
    repo.get = AsyncMock(return_value=StoreResult.ok(doc))
    result = event_loop.run_until_complete(
        document_service.delete_document(repo, "owner-1", doc.id, DocumentKind.PURCHASE_BILL)
    )
    assert result.failure is Failure.NOT_FOUND
    repo.delete.assert_not_awaited()
