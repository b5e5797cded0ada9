# billbook/api/v1/routes/documents.py
"""
CRUD, status toggle, preview, PDF and spreadsheet endpoints shared by
invoices and purchase bills. Each kind mounts its own router built by
:func:`make_document_router`.
"""

from __future__ import annotations

import io
import logging

from fastapi import APIRouter, Depends, Query, status
from fastapi.responses import StreamingResponse

from billbook.api.v1.deps import get_current_profile, get_document_repository
from billbook.api.v1.envelope import error_response, ok, paginated
from billbook.api.v1.schemas.documents import (
    DocumentDetail,
    DocumentIn,
    TotalsPreview,
    document_sheet_rows,
)
from billbook.domain.models.documents import BusinessProfile, DocumentKind
from billbook.domain.services import document_service
from billbook.domain.services.document_builder import compute_totals
from billbook.domain.services.document_service import Failure, ServiceResult
from billbook.domain.services.excel_export import export_rows_to_xlsx
from billbook.domain.services.invoice_pdf import document_filename, generate_document_pdf
from billbook.infrastructure.db.repositories import DocumentRepository

logger = logging.getLogger("api.v1.documents")

XLSX_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"

_FAILURE_STATUS = {
    Failure.VALIDATION: status.HTTP_422_UNPROCESSABLE_ENTITY,
    Failure.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    Failure.CONFLICT: status.HTTP_409_CONFLICT,
    Failure.PERSISTENCE: status.HTTP_503_SERVICE_UNAVAILABLE,
}


def failure_response(result: ServiceResult):
    code = _FAILURE_STATUS.get(result.failure, status.HTTP_500_INTERNAL_SERVER_ERROR)
    if result.failure is Failure.VALIDATION:
        return error_response(code, "Please fill in all required fields", [e.as_dict() for e in result.errors])
    return error_response(code, result.error or "Request failed")


def _detail(doc) -> dict:
    return DocumentDetail.from_document(doc).model_dump(mode="json")


def make_document_router(kind: DocumentKind, prefix: str, tag: str) -> APIRouter:
    router = APIRouter(prefix=prefix, tags=[tag])
    label = kind.number_label.split()[0]

    @router.get("", response_model=dict)
    async def list_documents(
        limit: int = Query(default=20, ge=1, le=100),
        offset: int = Query(default=0, ge=0),
        profile: BusinessProfile = Depends(get_current_profile),
        repo: DocumentRepository = Depends(get_document_repository),
    ):
        """The owner's documents of this kind, newest first."""
        result = await document_service.load_documents(repo, profile.owner_id, kind)
        if not result.success:
            return failure_response(result)
        page = result.documents[offset : offset + limit]
        return paginated(
            items=[_detail(d) for d in page],
            total=len(result.documents),
            limit=limit,
            offset=offset,
        )

    @router.post("", response_model=dict, status_code=status.HTTP_201_CREATED)
    async def create_document(
        body: DocumentIn,
        profile: BusinessProfile = Depends(get_current_profile),
        repo: DocumentRepository = Depends(get_document_repository),
    ):
        result = await document_service.create_document(repo, profile, body.to_draft(kind))
        if not result.success:
            return failure_response(result)
        return ok(
            data=_detail(result.document),
            message=f"{label} {result.document.document_number} has been created successfully",
        )

    @router.post("/preview", response_model=dict)
    async def preview_totals(
        body: DocumentIn,
        profile: BusinessProfile = Depends(get_current_profile),
    ):
        """Live subtotal / GST / words while the form is being edited. Nothing is stored."""
        draft = body.to_draft(kind)
        totals = compute_totals(draft.items, profile.registration_state, draft.counterparty_state)
        return ok(data=TotalsPreview.from_totals(totals).model_dump(mode="json"))

    @router.get("/export.xlsx")
    async def export_documents(
        profile: BusinessProfile = Depends(get_current_profile),
        repo: DocumentRepository = Depends(get_document_repository),
    ):
        result = await document_service.load_documents(repo, profile.owner_id, kind)
        if not result.success:
            return failure_response(result)
        content = export_rows_to_xlsx(document_sheet_rows(result.documents), sheet_name=tag)
        return StreamingResponse(
            io.BytesIO(content),
            media_type=XLSX_MEDIA_TYPE,
            headers={"Content-Disposition": f'attachment; filename="{kind.value}s.xlsx"'},
        )

    @router.get("/{document_id}", response_model=dict)
    async def get_document(
        document_id: str,
        profile: BusinessProfile = Depends(get_current_profile),
        repo: DocumentRepository = Depends(get_document_repository),
    ):
        result = await document_service.get_document(repo, profile.owner_id, document_id, kind)
        if not result.success:
            return failure_response(result)
        return ok(data=_detail(result.document))

    @router.put("/{document_id}", response_model=dict)
    async def update_document(
        document_id: str,
        body: DocumentIn,
        profile: BusinessProfile = Depends(get_current_profile),
        repo: DocumentRepository = Depends(get_document_repository),
    ):
        result = await document_service.update_document(repo, profile, document_id, body.to_draft(kind))
        if not result.success:
            return failure_response(result)
        return ok(data=_detail(result.document), message=f"{label} has been updated successfully")

    @router.post("/{document_id}/toggle-status", response_model=dict)
    async def toggle_status(
        document_id: str,
        profile: BusinessProfile = Depends(get_current_profile),
        repo: DocumentRepository = Depends(get_document_repository),
    ):
        result = await document_service.toggle_status(repo, profile.owner_id, document_id, kind)
        if not result.success:
            return failure_response(result)
        return ok(data=_detail(result.document))

    @router.delete("/{document_id}", response_model=dict)
    async def delete_document(
        document_id: str,
        profile: BusinessProfile = Depends(get_current_profile),
        repo: DocumentRepository = Depends(get_document_repository),
    ):
        result = await document_service.delete_document(repo, profile.owner_id, document_id, kind)
        if not result.success:
            return failure_response(result)
        return ok(message=f"{label} deleted")

    @router.get("/{document_id}/pdf")
    async def download_pdf(
        document_id: str,
        profile: BusinessProfile = Depends(get_current_profile),
        repo: DocumentRepository = Depends(get_document_repository),
    ):
        result = await document_service.get_document(repo, profile.owner_id, document_id, kind)
        if not result.success:
            return failure_response(result)

        pdf_bytes = generate_document_pdf(result.document, profile)
        return StreamingResponse(
            io.BytesIO(pdf_bytes),
            media_type="application/pdf",
            headers={
                "Content-Disposition": f'attachment; filename="{document_filename(result.document)}"'
            },
        )

    return router
