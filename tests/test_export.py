import io
from datetime import datetime, timezone

from openpyxl import load_workbook

from valentia.api.admin.export import build_applications_workbook
from valentia.core.models import Application


def _application(**overrides) -> Application:
    fields = dict(
        application_id="APP-20250102-007",
        full_name="Nur Aisyah",
        email="nur@example.com",
        phone="+60 12 345 6789",
        course="basic",
        status="waitlisted",
        message=None,
        created_at=datetime(2025, 1, 2, 8, 15, tzinfo=timezone.utc),
    )
    fields.update(overrides)
    return Application(**fields)


def test_workbook_layout() -> None:
    content = build_applications_workbook([_application(), _application(message="Hi")])
    wb = load_workbook(io.BytesIO(content))

    assert wb.sheetnames == ["Applications"]
    ws = wb["Applications"]
    assert [c.value for c in ws[1]] == ["ID", "Name", "Email", "Phone", "Course", "Status", "Date", "Message"]
    assert all(c.font.bold for c in ws[1])
    widths = [ws.column_dimensions[letter].width for letter in "ABCDEFGH"]
    assert widths == [15, 20, 25, 15, 20, 15, 20, 30]


def test_workbook_rows() -> None:
    ws = load_workbook(io.BytesIO(build_applications_workbook([_application()]))).active
    row = [c.value for c in ws[2]]
    assert row[:6] == ["APP-20250102-007", "Nur Aisyah", "nur@example.com", "+60 12 345 6789", "basic", "waitlisted"]
    # written without tzinfo
    assert row[6] == datetime(2025, 1, 2, 8, 15)
    assert row[7] is None or row[7] == ""


def test_empty_workbook_has_header_only() -> None:
    ws = load_workbook(io.BytesIO(build_applications_workbook([]))).active
    assert ws.max_row == 1
