import io
from datetime import datetime
from typing import Iterable, List, Optional

from openpyxl import Workbook
from openpyxl.styles import Font

from valentia.core.models import Application

SHEET_NAME = "Applications"
EXPORT_FILENAME = "applications.xlsx"
XLSX_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"

# (header, width)
COLUMNS = (
    ("ID", 15),
    ("Name", 20),
    ("Email", 25),
    ("Phone", 15),
    ("Course", 20),
    ("Status", 15),
    ("Date", 20),
    ("Message", 30),
)


def _naive(value: Optional[datetime]) -> Optional[datetime]:
    # openpyxl rejects tz-aware datetimes
    if value is None or value.tzinfo is None:
        return value
    return value.replace(tzinfo=None)


def application_row(app: Application) -> List:
    return [
        app.application_id,
        app.full_name,
        app.email,
        app.phone,
        app.course,
        app.status,
        _naive(app.created_at),
        app.message or "",
    ]


def build_applications_workbook(applications: Iterable[Application]) -> bytes:
    """One sheet, bold header row, fixed column widths."""
    wb = Workbook()
    ws = wb.active
    ws.title = SHEET_NAME

    ws.append([header for header, _ in COLUMNS])
    for cell in ws[1]:
        cell.font = Font(bold=True)
    for cell, (_, width) in zip(ws[1], COLUMNS):
        ws.column_dimensions[cell.column_letter].width = width

    for app in applications:
        ws.append(application_row(app))
        ws.cell(row=ws.max_row, column=7).number_format = "yyyy-mm-dd hh:mm:ss"

    bio = io.BytesIO()
    wb.save(bio)
    return bio.getvalue()
