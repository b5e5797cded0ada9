# billbook/domain/services/invoice_pdf.py
"""
Render a finished invoice or purchase bill as a PDF.
Uses ReportLab for PDF generation; every figure comes precomputed on the
Document, this module only lays it out.
"""

from __future__ import annotations

import io
import logging
from decimal import Decimal

from reportlab.lib import colors
from reportlab.lib.pagesizes import A4
from reportlab.lib.styles import getSampleStyleSheet, ParagraphStyle
from reportlab.lib.units import mm
from reportlab.platypus import (
    SimpleDocTemplate,
    Table,
    TableStyle,
    Paragraph,
    Spacer,
)

from billbook.domain.models.documents import BusinessProfile, Document
from billbook.domain.services.amount_words import convert_to_words
from billbook.domain.services.formatting import format_date
from billbook.domain.services.gst_calculator import GST_RATE

logger = logging.getLogger("invoice_pdf")

_GRID = colors.Color(0.8, 0.8, 0.8)
_LABEL_BG = colors.Color(0.95, 0.95, 0.95)
_HEADER_BG = colors.Color(0.2, 0.3, 0.5)
_TOTAL_BG = colors.Color(0.9, 0.95, 1.0)


def _fmt_amount(val: Decimal | None) -> str:
    if val is None:
        return "0.00"
    return f"{val:,.2f}"


def document_filename(document: Document) -> str:
    return f"{document.kind.value}_{document.document_number}.pdf"


def generate_document_pdf(document: Document, profile: BusinessProfile) -> bytes:
    """
    Generate a GST invoice / purchase bill PDF.

    Args:
        document: the finished record (totals and breakdown already derived).
        profile: the owner's business profile printed as the seller block.

    Returns:
        PDF file as bytes.
    """
    buf = io.BytesIO()
    doc = SimpleDocTemplate(
        buf,
        pagesize=A4,
        leftMargin=15 * mm,
        rightMargin=15 * mm,
        topMargin=15 * mm,
        bottomMargin=15 * mm,
        title=f"{document.kind.number_label} {document.document_number}",
    )

    styles = getSampleStyleSheet()
    title_style = ParagraphStyle(
        "DocumentTitle",
        parent=styles["Heading1"],
        fontSize=16,
        alignment=1,  # center
        spaceAfter=10,
    )
    words_style = ParagraphStyle(
        "AmountWords",
        parent=styles["Normal"],
        fontSize=9,
        leading=12,
        fontName="Helvetica-Oblique",
    )

    elements = []
    elements.append(Paragraph(document.kind.title, title_style))

    # Parties and numbering
    cp = document.counterparty
    role = document.kind.counterparty_role.capitalize()
    header_data = [
        [document.kind.number_label, document.document_number, "Date", format_date(document.issue_date)],
        ["Seller", profile.legal_name or "N/A", "Seller GSTIN", profile.tax_id or "N/A"],
        ["Seller State", profile.registration_state or "N/A", "Seller PAN", profile.pan_number or "N/A"],
        [role, cp.name, f"{role} GSTIN", cp.gstin or "N/A"],
        [f"{role} State", cp.state, f"{role} PAN", cp.pan or "N/A"],
        [f"{role} Address", cp.address or "N/A", "", ""],
    ]
    header_table = Table(header_data, colWidths=[90, 140, 90, 140])
    header_table.setStyle(
        TableStyle(
            [
                ("BACKGROUND", (0, 0), (0, -1), _LABEL_BG),
                ("BACKGROUND", (2, 0), (2, -1), _LABEL_BG),
                ("TEXTCOLOR", (0, 0), (0, -1), colors.grey),
                ("TEXTCOLOR", (2, 0), (2, -1), colors.grey),
                ("FONTSIZE", (0, 0), (-1, -1), 9),
                ("GRID", (0, 0), (-1, -1), 0.5, _GRID),
                ("VALIGN", (0, 0), (-1, -1), "MIDDLE"),
                ("TOPPADDING", (0, 0), (-1, -1), 6),
                ("BOTTOMPADDING", (0, 0), (-1, -1), 6),
                ("LEFTPADDING", (0, 0), (-1, -1), 8),
            ]
        )
    )
    elements.append(header_table)
    elements.append(Spacer(1, 15))

    # Items
    item_rows = [["#", "Description", "HSN/SAC", "Qty", "Rate", "Amount"]]
    for index, item in enumerate(document.items, start=1):
        item_rows.append(
            [
                str(index),
                item.description[:45],
                item.tax_code,
                str(item.quantity),
                _fmt_amount(item.unit_rate),
                _fmt_amount(item.line_total),
            ]
        )
    items_table = Table(item_rows, colWidths=[25, 185, 65, 40, 70, 75], repeatRows=1)
    items_table.setStyle(
        TableStyle(
            [
                ("BACKGROUND", (0, 0), (-1, 0), _HEADER_BG),
                ("TEXTCOLOR", (0, 0), (-1, 0), colors.white),
                ("FONTNAME", (0, 0), (-1, 0), "Helvetica-Bold"),
                ("FONTSIZE", (0, 0), (-1, -1), 9),
                ("GRID", (0, 0), (-1, -1), 0.5, _GRID),
                ("ALIGN", (3, 0), (-1, -1), "RIGHT"),
                ("TOPPADDING", (0, 0), (-1, -1), 5),
                ("BOTTOMPADDING", (0, 0), (-1, -1), 5),
            ]
        )
    )
    elements.append(items_table)
    elements.append(Spacer(1, 15))

    # Amount breakdown
    gst = document.gst_breakdown
    amount_rows = [
        ["Description", "Amount (Rs)"],
        ["Subtotal", _fmt_amount(document.subtotal)],
    ]
    if gst.is_inter_state:
        amount_rows.append([f"IGST @ {GST_RATE}%", _fmt_amount(gst.igst)])
    else:
        half_rate = GST_RATE / 2
        amount_rows.append([f"CGST @ {half_rate}%", _fmt_amount(gst.cgst)])
        amount_rows.append([f"SGST @ {half_rate}%", _fmt_amount(gst.sgst)])
    amount_rows.append(["Total Tax", _fmt_amount(gst.total)])
    amount_rows.append(["TOTAL AMOUNT", _fmt_amount(document.total)])

    amount_table = Table(amount_rows, colWidths=[300, 160])
    amount_table.setStyle(
        TableStyle(
            [
                # Header row
                ("BACKGROUND", (0, 0), (-1, 0), _HEADER_BG),
                ("TEXTCOLOR", (0, 0), (-1, 0), colors.white),
                ("FONTNAME", (0, 0), (-1, 0), "Helvetica-Bold"),
                # Total row (last row)
                ("BACKGROUND", (0, -1), (-1, -1), _TOTAL_BG),
                ("FONTNAME", (0, -1), (-1, -1), "Helvetica-Bold"),
                ("FONTSIZE", (0, 0), (-1, -1), 10),
                ("GRID", (0, 0), (-1, -1), 0.5, _GRID),
                ("ALIGN", (1, 0), (1, -1), "RIGHT"),
                ("TOPPADDING", (0, 0), (-1, -1), 8),
                ("BOTTOMPADDING", (0, 0), (-1, -1), 8),
                ("LEFTPADDING", (0, 0), (-1, -1), 10),
                ("RIGHTPADDING", (0, 0), (-1, -1), 10),
            ]
        )
    )
    elements.append(amount_table)
    elements.append(Spacer(1, 10))
    elements.append(Paragraph(f"Amount in words: {convert_to_words(document.total)}", words_style))
    elements.append(Spacer(1, 15))

    # Bank details only matter on sales invoices
    bank = profile.bank_details
    if document.kind.counterparty_role == "customer" and bank.account_number:
        elements.append(
            Paragraph(
                f"Bank: {bank.bank_name} | A/C: {bank.account_number} | IFSC: {bank.ifsc_code}",
                styles["Normal"],
            )
        )
        elements.append(Spacer(1, 10))

    elements.append(
        Paragraph(
            "This is a computer-generated document.",
            ParagraphStyle(
                "Footer",
                parent=styles["Normal"],
                fontSize=8,
                textColor=colors.grey,
                alignment=1,
            ),
        )
    )

    doc.build(elements)
    logger.info("Rendered %s %s (%d items)", document.kind.value, document.document_number, len(document.items))
    return buf.getvalue()
