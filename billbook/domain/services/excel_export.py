# billbook/domain/services/excel_export.py
"""
Write row-sets (lists of flat dicts) to .xlsx workbooks with openpyxl.

The header row comes from the first row's keys; columns are sized to the
widest cell plus two characters.
"""

from __future__ import annotations

import io
from typing import Iterable, Sequence

from openpyxl import Workbook
from openpyxl.utils import get_column_letter
from openpyxl.worksheet.worksheet import Worksheet

# Excel rejects longer sheet titles
MAX_SHEET_NAME = 31


def _fill_sheet(ws: Worksheet, rows: Sequence[dict]) -> None:
    headers = list(rows[0].keys()) if rows else []
    if not headers:
        return
    ws.append(headers)
    for row in rows:
        ws.append([row.get(h) for h in headers])

    for col, header in enumerate(headers, start=1):
        width = max([len(str(header))] + [len(str(row.get(header) or "")) for row in rows]) + 2
        ws.column_dimensions[get_column_letter(col)].width = width


def export_sheets_to_xlsx(sheets: Iterable[tuple[str, Sequence[dict]]]) -> bytes:
    wb = Workbook()
    wb.remove(wb.active)
    for name, rows in sheets:
        ws = wb.create_sheet(title=name[:MAX_SHEET_NAME])
        _fill_sheet(ws, rows)
    if not wb.worksheets:
        wb.create_sheet(title="Sheet1")

    buf = io.BytesIO()
    wb.save(buf)
    return buf.getvalue()


def export_rows_to_xlsx(rows: Sequence[dict], sheet_name: str = "Sheet1") -> bytes:
    return export_sheets_to_xlsx([(sheet_name, rows)])
