from __future__ import annotations
from typing import Iterable, List, Dict, Any
from io import BytesIO
from datetime import datetime

from openpyxl import Workbook
from openpyxl.utils import get_column_letter
from openpyxl.styles import Font, Alignment


TEACHER_COLUMNS = [
    ("teacher_id", "Teacher ID"),
    ("first_name", "First name"),
    ("last_name", "Last name"),
    ("employee_number", "Employee number"),
    ("hire_date", "Hire date"),
    ("salary", "Salary"),
]


def teacher_rows(teachers: Iterable[Any]) -> List[Dict[str, Any]]:
    """ORM teachers -> plain dict rows keyed by column header."""
    rows = []
    for t in teachers:
        row = {}
        for attr, header in TEACHER_COLUMNS:
            v = getattr(t, attr)
            if attr == "salary" and v is not None:
                v = float(v)
            row[header] = v
        rows.append(row)
    return rows


def teachers_to_xlsx_bytes(teachers: Iterable[Any], sheet_name: str = "Teachers") -> bytes:
    wb = Workbook()
    ws = wb.active
    ws.title = sheet_name[:31]

    headers = [h for _attr, h in TEACHER_COLUMNS]
    ws.append(headers)

    header_font = Font(bold=True)
    for col_idx in range(1, len(headers) + 1):
        cell = ws.cell(row=1, column=col_idx)
        cell.font = header_font
        cell.alignment = Alignment(horizontal="center", vertical="center")

    for r in teacher_rows(teachers):
        ws.append([r.get(h) for h in headers])

    # hire date column
    for row_idx in range(2, ws.max_row + 1):
        ws.cell(row=row_idx, column=5).number_format = "yyyy-mm-dd"

    # autosize columns
    for col_idx, h in enumerate(headers, start=1):
        max_len = len(h)
        for row_idx in range(2, ws.max_row + 1):
            v = ws.cell(row=row_idx, column=col_idx).value
            if v is None:
                continue
            max_len = max(max_len, len(str(v)))
        ws.column_dimensions[get_column_letter(col_idx)].width = min(max_len + 2, 60)

    buf = BytesIO()
    wb.save(buf)
    return buf.getvalue()


def make_filename(prefix: str = "teachers") -> str:
    ts = datetime.now().strftime("%Y%m%d_%H%M%S")
    return f"{prefix}_{ts}.xlsx"
