# billbook/domain/services/document_service.py
"""
Application-level operations on an owner's invoices and purchase bills.

State is passed in explicitly: the caller supplies the repository and the
owner's profile snapshot. After every write the owner's collection is
reloaded and each document's totals are re-derived from its stored items,
so nothing computed by an earlier request is trusted.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum

from billbook.domain.models.documents import BusinessProfile, Document, DocumentKind
from billbook.domain.services import document_status
from billbook.domain.services.document_builder import (
    DocumentDraft,
    FieldError,
    build_document,
    rebuild_document,
    rederive,
)
from billbook.domain.services.numbering import issued_count, resolve_prefix
from billbook.infrastructure.db.repositories.base import StoreResult
from billbook.infrastructure.db.repositories.document_repository import DocumentRepository

logger = logging.getLogger("document_service")


class Failure(str, Enum):
    VALIDATION = "validation"
    PERSISTENCE = "persistence"
    NOT_FOUND = "not_found"
    CONFLICT = "conflict"


@dataclass
class ServiceResult:
    success: bool
    document: Document | None = None
    documents: list[Document] = field(default_factory=list)
    errors: list[FieldError] = field(default_factory=list)
    error: str | None = None
    failure: Failure | None = None

    @classmethod
    def from_store(cls, result: StoreResult) -> "ServiceResult":
        failure = Failure.NOT_FOUND if result.missing else Failure.PERSISTENCE
        return cls(success=False, error=result.error, failure=failure)


async def load_documents(repo: DocumentRepository, owner_id: str, kind: DocumentKind | None = None) -> ServiceResult:
    """The owner's documents, newest first, with totals re-derived."""
    listed = await repo.list_for_owner(owner_id, kind)
    if not listed.success:
        return ServiceResult.from_store(listed)
    return ServiceResult(success=True, documents=[rederive(d) for d in listed.data or []])


async def _fetch(
    repo: DocumentRepository,
    owner_id: str,
    document_id: str,
    kind: DocumentKind | None,
) -> StoreResult[Document]:
    found = await repo.get(owner_id, document_id)
    if found.success and kind is not None and found.data.kind is not kind:
        return StoreResult.not_found()
    return found


async def get_document(
    repo: DocumentRepository,
    owner_id: str,
    document_id: str,
    kind: DocumentKind | None = None,
) -> ServiceResult:
    found = await _fetch(repo, owner_id, document_id, kind)
    if not found.success:
        return ServiceResult.from_store(found)
    return ServiceResult(success=True, document=rederive(found.data))


async def _reloaded(repo: DocumentRepository, document: Document) -> ServiceResult:
    reloaded = await load_documents(repo, document.owner_id, document.kind)
    if not reloaded.success:
        # The write went through; report the document we sent
        return ServiceResult(success=True, document=document)
    fresh = next((d for d in reloaded.documents if d.id == document.id), document)
    return ServiceResult(success=True, document=fresh, documents=reloaded.documents)


async def create_document(
    repo: DocumentRepository,
    profile: BusinessProfile,
    draft: DocumentDraft,
) -> ServiceResult:
    """
    Validate, number and store a new document.

    The number comes from the count and the numbers already in use, both
    read before the insert; concurrent creations for the same owner may
    receive the same number.
    """
    counted = await repo.count_for_owner(profile.owner_id, draft.kind)
    if not counted.success:
        return ServiceResult.from_store(counted)
    in_use = await repo.numbers_for_owner(profile.owner_id, draft.kind)
    if not in_use.success:
        return ServiceResult.from_store(in_use)

    issued = issued_count(counted.data or 0, in_use.data or [], resolve_prefix(profile))
    built = build_document(draft, profile, issued)
    if not built.ok:
        return ServiceResult(success=False, errors=built.errors, failure=Failure.VALIDATION)

    stored = await repo.create(built.document)
    if not stored.success:
        return ServiceResult.from_store(stored)

    logger.info(
        "Created %s %s for %s",
        built.document.kind.value,
        built.document.document_number,
        profile.owner_id,
    )
    return await _reloaded(repo, built.document)


async def update_document(
    repo: DocumentRepository,
    profile: BusinessProfile,
    document_id: str,
    draft: DocumentDraft,
) -> ServiceResult:
    found = await _fetch(repo, profile.owner_id, document_id, draft.kind)
    if not found.success:
        return ServiceResult.from_store(found)

    existing = found.data
    built = rebuild_document(existing, draft, profile)
    if not built.ok:
        return ServiceResult(success=False, errors=built.errors, failure=Failure.VALIDATION)

    stored = await repo.update(built.document)
    if not stored.success:
        return ServiceResult.from_store(stored)

    logger.info("Updated %s %s", existing.kind.value, existing.document_number)
    return await _reloaded(repo, built.document)


async def _change_status(
    repo: DocumentRepository,
    owner_id: str,
    document_id: str,
    move,
    kind: DocumentKind | None,
) -> ServiceResult:
    found = await _fetch(repo, owner_id, document_id, kind)
    if not found.success:
        return ServiceResult.from_store(found)

    document = found.data
    try:
        status = move(document.status)
    except document_status.InvalidStatusTransition as exc:
        return ServiceResult(success=False, document=document, error=str(exc), failure=Failure.CONFLICT)

    changed = document.model_copy(update={"status": status})
    stored = await repo.update(changed)
    if not stored.success:
        return ServiceResult.from_store(stored)

    logger.info("%s %s is now %s", document.kind.value, document.document_number, status.value)
    return ServiceResult(success=True, document=rederive(changed))


async def toggle_status(
    repo: DocumentRepository,
    owner_id: str,
    document_id: str,
    kind: DocumentKind | None = None,
) -> ServiceResult:
    """Flip paid <-> unpaid."""
    return await _change_status(repo, owner_id, document_id, document_status.toggle_paid, kind)


async def mark_overdue(
    repo: DocumentRepository,
    owner_id: str,
    document_id: str,
    kind: DocumentKind | None = None,
) -> ServiceResult:
    """Entry point for the scheduled overdue sweep (unpaid documents only)."""
    return await _change_status(repo, owner_id, document_id, document_status.mark_overdue, kind)


async def delete_document(
    repo: DocumentRepository,
    owner_id: str,
    document_id: str,
    kind: DocumentKind | None = None,
) -> ServiceResult:
    if kind is not None:
        found = await _fetch(repo, owner_id, document_id, kind)
        if not found.success:
            return ServiceResult.from_store(found)

    deleted = await repo.delete(owner_id, document_id)
    if not deleted.success:
        return ServiceResult.from_store(deleted)
    logger.info("Deleted document %s for %s", document_id, owner_id)
    return ServiceResult(success=True)
