# billbook/api/v1/routes/analytics.py
"""
Sales analytics over the signed-in owner's invoices: dashboard summary,
day-by-day month report and month-by-month financial-year report, each also
downloadable as a spreadsheet.
"""

from __future__ import annotations

import io
import logging
from dataclasses import asdict
from datetime import date

from fastapi import APIRouter, Depends, Query, status
from fastapi.responses import StreamingResponse

from billbook.api.v1.deps import get_current_profile, get_document_repository
from billbook.api.v1.envelope import error_response, ok
from billbook.api.v1.routes.documents import XLSX_MEDIA_TYPE, failure_response
from billbook.domain.models.documents import BusinessProfile, DocumentKind
from billbook.domain.services import analytics, document_service
from billbook.domain.services.excel_export import export_rows_to_xlsx
from billbook.infrastructure.db.repositories import DocumentRepository

logger = logging.getLogger("api.v1.analytics")

router = APIRouter(prefix="/analytics", tags=["Analytics"])


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

async def _invoices(repo: DocumentRepository, owner_id: str):
    return await document_service.load_documents(repo, owner_id, DocumentKind.INVOICE)


def _xlsx(content: bytes, filename: str) -> StreamingResponse:
    return StreamingResponse(
        io.BytesIO(content),
        media_type=XLSX_MEDIA_TYPE,
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


def _month_rows(documents, month: str | None):
    key = month or analytics.month_key(date.today())
    return key, analytics.monthly_report(documents, key)


def _fy_rows(documents, year: int | None):
    fy = year if year is not None else analytics.current_financial_year()
    return fy, analytics.financial_year_report(documents, fy)


# ---------------------------------------------------------------------------
# Dashboard
# ---------------------------------------------------------------------------

@router.get("/summary", response_model=dict)
async def summary(
    profile: BusinessProfile = Depends(get_current_profile),
    repo: DocumentRepository = Depends(get_document_repository),
):
    """Revenue, paid / pending / overdue amounts and invoice count."""
    result = await _invoices(repo, profile.owner_id)
    if not result.success:
        return failure_response(result)
    return ok(data=asdict(analytics.dashboard_summary(result.documents)))


# ---------------------------------------------------------------------------
# Monthly report
# ---------------------------------------------------------------------------

@router.get("/monthly", response_model=dict)
async def monthly(
    month: str | None = Query(default=None, description="YYYY-MM, defaults to the current month"),
    profile: BusinessProfile = Depends(get_current_profile),
    repo: DocumentRepository = Depends(get_document_repository),
):
    result = await _invoices(repo, profile.owner_id)
    if not result.success:
        return failure_response(result)
    try:
        key, rows = _month_rows(result.documents, month)
    except ValueError as exc:
        return error_response(status.HTTP_422_UNPROCESSABLE_ENTITY, str(exc))

    return ok(
        data={
            "month": key,
            "rows": analytics.as_dicts(rows),
            "totals": asdict(analytics.report_totals(rows)),
            "available_months": analytics.available_months(result.documents),
        }
    )


@router.get("/monthly.xlsx")
async def monthly_xlsx(
    month: str | None = Query(default=None),
    profile: BusinessProfile = Depends(get_current_profile),
    repo: DocumentRepository = Depends(get_document_repository),
):
    result = await _invoices(repo, profile.owner_id)
    if not result.success:
        return failure_response(result)
    try:
        key, rows = _month_rows(result.documents, month)
    except ValueError as exc:
        return error_response(status.HTTP_422_UNPROCESSABLE_ENTITY, str(exc))

    content = export_rows_to_xlsx(analytics.daily_sheet_rows(rows), sheet_name="Monthly Sales")
    return _xlsx(content, f"sales_report_{key}.xlsx")


# ---------------------------------------------------------------------------
# Financial year report
# ---------------------------------------------------------------------------

@router.get("/financial-year", response_model=dict)
async def financial_year(
    year: int | None = Query(default=None, ge=1900, le=9999, description="Start year of the April..March year"),
    profile: BusinessProfile = Depends(get_current_profile),
    repo: DocumentRepository = Depends(get_document_repository),
):
    result = await _invoices(repo, profile.owner_id)
    if not result.success:
        return failure_response(result)
    fy, rows = _fy_rows(result.documents, year)

    return ok(
        data={
            "financial_year": f"{fy}-{fy + 1}",
            "rows": analytics.as_dicts(rows),
            "totals": asdict(analytics.report_totals(rows)),
            "available_years": analytics.available_financial_years(result.documents),
        }
    )


@router.get("/financial-year.xlsx")
async def financial_year_xlsx(
    year: int | None = Query(default=None, ge=1900, le=9999),
    profile: BusinessProfile = Depends(get_current_profile),
    repo: DocumentRepository = Depends(get_document_repository),
):
    result = await _invoices(repo, profile.owner_id)
    if not result.success:
        return failure_response(result)
    fy, rows = _fy_rows(result.documents, year)

    content = export_rows_to_xlsx(analytics.monthly_sheet_rows(rows), sheet_name=f"FY {fy}-{fy + 1}")
    return _xlsx(content, f"sales_report_FY{fy}-{fy + 1}.xlsx")
