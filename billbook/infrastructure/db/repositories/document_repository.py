import logging
from datetime import datetime, timezone

from sqlalchemy import delete, func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from billbook.domain.models.documents import (
    Counterparty,
    Document,
    DocumentKind,
    DocumentStatus,
    GSTBreakdown,
    LineItem,
)
from billbook.infrastructure.db.models import DocumentRecord
from billbook.infrastructure.db.repositories.base import StoreResult

logger = logging.getLogger("repositories.documents")


class DocumentRepository:
    """Invoices and purchase bills, always scoped to one owner."""

    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    # ---------- mapping ----------

    @staticmethod
    def _apply(record: DocumentRecord, document: Document) -> DocumentRecord:
        cp = document.counterparty
        record.owner_id = document.owner_id
        record.kind = document.kind.value
        record.document_number = document.document_number
        record.counterparty_name = cp.name
        record.counterparty_address = cp.address
        record.counterparty_state = cp.state
        record.counterparty_gstin = cp.gstin
        record.counterparty_pan = cp.pan
        record.seller_state = document.seller_state
        record.issue_date = document.issue_date
        record.items = [item.model_dump(mode="json", exclude={"line_total"}) for item in document.items]
        record.gst_breakdown = document.gst_breakdown.model_dump(mode="json")
        record.subtotal = document.subtotal
        record.total = document.total
        record.status = document.status.value
        record.created_at = document.created_at
        return record

    @staticmethod
    def to_document(record: DocumentRecord) -> Document:
        created_at = record.created_at
        # SQLite hands back naive datetimes
        if created_at is not None and created_at.tzinfo is None:
            created_at = created_at.replace(tzinfo=timezone.utc)

        return Document(
            id=record.id,
            owner_id=record.owner_id,
            kind=DocumentKind(record.kind),
            document_number=record.document_number,
            counterparty=Counterparty(
                name=record.counterparty_name,
                address=record.counterparty_address or "",
                state=record.counterparty_state,
                gstin=record.counterparty_gstin or "",
                pan=record.counterparty_pan or "",
            ),
            seller_state=record.seller_state or "",
            issue_date=record.issue_date,
            items=tuple(LineItem.model_validate(item) for item in record.items or []),
            subtotal=record.subtotal,
            gst_breakdown=GSTBreakdown.model_validate(record.gst_breakdown),
            total=record.total,
            status=DocumentStatus(record.status),
            created_at=created_at or datetime.now(timezone.utc),
        )

    async def _get_record(self, owner_id: str, document_id: str) -> DocumentRecord | None:
        stmt = select(DocumentRecord).where(
            DocumentRecord.id == document_id,
            DocumentRecord.owner_id == owner_id,
        )
        result = await self.db.execute(stmt)
        return result.scalar_one_or_none()

    async def _fail(self, action: str, exc: SQLAlchemyError) -> StoreResult:
        logger.error("Document %s failed: %s", action, exc)
        await self.db.rollback()
        return StoreResult.fail(f"Failed to {action} document: {exc.__class__.__name__}")

    # ---------- main methods ----------

    async def create(self, document: Document) -> StoreResult[Document]:
        record = self._apply(DocumentRecord(id=document.id), document)
        self.db.add(record)
        try:
            await self.db.commit()
        except SQLAlchemyError as exc:
            return await self._fail("create", exc)
        return StoreResult.ok(document)

    async def update(self, document: Document) -> StoreResult[Document]:
        try:
            record = await self._get_record(document.owner_id, document.id)
            if record is None:
                return StoreResult.not_found()
            self._apply(record, document)
            await self.db.commit()
        except SQLAlchemyError as exc:
            return await self._fail("update", exc)
        return StoreResult.ok(document)

    async def delete(self, owner_id: str, document_id: str) -> StoreResult[None]:
        stmt = delete(DocumentRecord).where(
            DocumentRecord.id == document_id,
            DocumentRecord.owner_id == owner_id,
        )
        try:
            result = await self.db.execute(stmt)
            await self.db.commit()
        except SQLAlchemyError as exc:
            return await self._fail("delete", exc)
        if not result.rowcount:
            return StoreResult.not_found()
        return StoreResult.ok()

    async def get(self, owner_id: str, document_id: str) -> StoreResult[Document]:
        try:
            record = await self._get_record(owner_id, document_id)
        except SQLAlchemyError as exc:
            return await self._fail("load", exc)
        if record is None:
            return StoreResult.not_found()
        return StoreResult.ok(self.to_document(record))

    async def list_for_owner(
        self,
        owner_id: str,
        kind: DocumentKind | None = None,
    ) -> StoreResult[list[Document]]:
        """All of the owner's documents, newest first."""
        stmt = select(DocumentRecord).where(DocumentRecord.owner_id == owner_id)
        if kind is not None:
            stmt = stmt.where(DocumentRecord.kind == kind.value)
        stmt = stmt.order_by(DocumentRecord.created_at.desc())
        try:
            result = await self.db.execute(stmt)
            records = result.scalars().all()
        except SQLAlchemyError as exc:
            return await self._fail("list", exc)
        return StoreResult.ok([self.to_document(r) for r in records])

    async def count_for_owner(self, owner_id: str, kind: DocumentKind) -> StoreResult[int]:
        stmt = select(func.count()).select_from(DocumentRecord).where(
            DocumentRecord.owner_id == owner_id,
            DocumentRecord.kind == kind.value,
        )
        try:
            count = (await self.db.execute(stmt)).scalar() or 0
        except SQLAlchemyError as exc:
            return await self._fail("count", exc)
        return StoreResult.ok(int(count))

    async def numbers_for_owner(self, owner_id: str, kind: DocumentKind) -> StoreResult[list[str]]:
        """Document numbers currently in use for this owner and kind."""
        stmt = select(DocumentRecord.document_number).where(
            DocumentRecord.owner_id == owner_id,
            DocumentRecord.kind == kind.value,
        )
        try:
            numbers = (await self.db.execute(stmt)).scalars().all()
        except SQLAlchemyError as exc:
            return await self._fail("number", exc)
        return StoreResult.ok(list(numbers))
