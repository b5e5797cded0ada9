# billbook/domain/services/analytics.py
"""
Dashboard summary and sales reports over an owner's documents.
Pure Python, no DB dependency: callers pass an already loaded collection.
"""

from __future__ import annotations

import calendar
import logging
from dataclasses import asdict, dataclass
from datetime import date
from decimal import Decimal
from typing import Iterable

from billbook.domain.models.documents import Document, DocumentStatus
from billbook.domain.services.formatting import format_date

logger = logging.getLogger("analytics")

FY_MONTHS = ["Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec", "Jan", "Feb", "Mar"]


# ---------------------------------------------------------------------------
# Data structures
# ---------------------------------------------------------------------------

@dataclass
class DashboardSummary:
    total_revenue: Decimal = Decimal("0")
    paid_amount: Decimal = Decimal("0")
    pending_amount: Decimal = Decimal("0")
    overdue_amount: Decimal = Decimal("0")
    total_documents: int = 0


@dataclass
class DailySales:
    date: date
    day: int
    sales: Decimal
    documents: int
    formatted_date: str


@dataclass
class MonthlySales:
    month: str  # "Apr", "May", ...
    year: int
    month_key: str  # "2025-04"
    sales: Decimal
    documents: int


@dataclass
class ReportTotals:
    total_sales: Decimal
    total_documents: int
    average_sales: Decimal


# ---------------------------------------------------------------------------
# Periods
# ---------------------------------------------------------------------------

def financial_year_of(day: date) -> int:
    """Start year of the Indian financial year (April..March) containing ``day``."""
    return day.year if day.month >= 4 else day.year - 1


def current_financial_year(today: date | None = None) -> int:
    return financial_year_of(today or date.today())


def month_key(day: date) -> str:
    return f"{day.year}-{day.month:02d}"


def parse_month_key(key: str) -> tuple[int, int]:
    try:
        year_s, month_s = key.split("-")
        year, month = int(year_s), int(month_s)
    except ValueError as exc:
        raise ValueError(f"Expected YYYY-MM, got {key!r}") from exc
    if not 1 <= month <= 12:
        raise ValueError(f"Month out of range in {key!r}")
    return year, month


def available_months(documents: Iterable[Document]) -> list[str]:
    """Distinct ``YYYY-MM`` keys, newest first."""
    return sorted({month_key(d.issue_date) for d in documents}, reverse=True)


def available_financial_years(documents: Iterable[Document]) -> list[int]:
    return sorted({financial_year_of(d.issue_date) for d in documents}, reverse=True)


# ---------------------------------------------------------------------------
# Aggregation
# ---------------------------------------------------------------------------

def dashboard_summary(documents: Iterable[Document]) -> DashboardSummary:
    summary = DashboardSummary()
    for doc in documents:
        summary.total_documents += 1
        summary.total_revenue += doc.total
        if doc.status is DocumentStatus.PAID:
            summary.paid_amount += doc.total
        elif doc.status is DocumentStatus.UNPAID:
            summary.pending_amount += doc.total
        elif doc.status is DocumentStatus.OVERDUE:
            summary.overdue_amount += doc.total
    return summary


def monthly_report(documents: Iterable[Document], key: str) -> list[DailySales]:
    """One row per calendar day of month ``key`` (``YYYY-MM``), empty days included."""
    year, month = parse_month_key(key)
    days_in_month = calendar.monthrange(year, month)[1]

    sales = {day: Decimal("0") for day in range(1, days_in_month + 1)}
    counts = {day: 0 for day in range(1, days_in_month + 1)}
    for doc in documents:
        issued = doc.issue_date
        if issued.year == year and issued.month == month:
            sales[issued.day] += doc.total
            counts[issued.day] += 1

    rows = []
    for day in range(1, days_in_month + 1):
        current = date(year, month, day)
        rows.append(
            DailySales(
                date=current,
                day=day,
                sales=sales[day],
                documents=counts[day],
                formatted_date=format_date(current),
            )
        )
    return rows


def financial_year_report(documents: Iterable[Document], fy_start_year: int) -> list[MonthlySales]:
    """Twelve rows, April of ``fy_start_year`` through March of the next year."""
    buckets: dict[str, MonthlySales] = {}
    for index, label in enumerate(FY_MONTHS):
        month = index + 4 if index < 9 else index - 8
        year = fy_start_year if index < 9 else fy_start_year + 1
        key = f"{year}-{month:02d}"
        buckets[key] = MonthlySales(month=label, year=year, month_key=key, sales=Decimal("0"), documents=0)

    for doc in documents:
        bucket = buckets.get(month_key(doc.issue_date))
        if bucket is not None:
            bucket.sales += doc.total
            bucket.documents += 1

    return list(buckets.values())


def report_totals(rows: Iterable[DailySales | MonthlySales]) -> ReportTotals:
    """Totals plus the average over periods that had any sales."""
    rows = list(rows)
    total_sales = sum((r.sales for r in rows), Decimal("0"))
    total_documents = sum(r.documents for r in rows)
    active = [r for r in rows if r.sales > 0]
    average = total_sales / len(active) if active else Decimal("0")
    return ReportTotals(total_sales=total_sales, total_documents=total_documents, average_sales=average)


# ---------------------------------------------------------------------------
# Spreadsheet rows
# ---------------------------------------------------------------------------

def daily_sheet_rows(rows: Iterable[DailySales]) -> list[dict]:
    return [
        {
            "Date": r.formatted_date,
            "Day": r.day,
            "Sales Amount": float(r.sales),
            "Number of Invoices": r.documents,
        }
        for r in rows
    ]


def monthly_sheet_rows(rows: Iterable[MonthlySales]) -> list[dict]:
    return [
        {
            "Month": f"{r.month} {r.year}",
            "Sales Amount": float(r.sales),
            "Number of Invoices": r.documents,
        }
        for r in rows
    ]


def as_dicts(rows: Iterable) -> list[dict]:
    return [asdict(r) for r in rows]
