import io
from datetime import datetime, timedelta, timezone

import pytest
from httpx import AsyncClient
from openpyxl import load_workbook
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from valentia.api.admin import service as admin_service
from valentia.core.models import Application, Attachment, StatusHistory


# ----- List -----

@pytest.mark.asyncio
async def test_list_paginates_newest_first(client: AsyncClient, admin_headers, make_application) -> None:
    base = datetime(2025, 1, 10, tzinfo=timezone.utc)
    for i in range(12):
        await make_application(full_name=f"Applicant {i:02d}", created_at=base + timedelta(hours=i))

    response = await client.get("/api/admin/applications?page=2&limit=5", headers=admin_headers)
    assert response.status_code == 200
    data = response.json()

    assert data["success"] is True
    assert data["pagination"] == {"total": 12, "page": 2, "limit": 5, "totalPages": 3}
    assert [a["full_name"] for a in data["applications"]] == [
        "Applicant 06",
        "Applicant 05",
        "Applicant 04",
        "Applicant 03",
        "Applicant 02",
    ]


@pytest.mark.asyncio
async def test_list_filters_and_search(client: AsyncClient, admin_headers, make_application) -> None:
    await make_application(full_name="Sara Wong", course="advanced", status="pending")
    await make_application(full_name="Tom Hanks", course="english", status="accepted")
    await make_application(full_name="Sarah Lee", course="english", status="pending")

    response = await client.get(
        "/api/admin/applications",
        params={"status": "pending", "course": "english"},
        headers=admin_headers,
    )
    assert [a["full_name"] for a in response.json()["applications"]] == ["Sarah Lee"]

    response = await client.get(
        "/api/admin/applications",
        params={"status": "all", "course": "all", "search": "SAR"},
        headers=admin_headers,
    )
    names = sorted(a["full_name"] for a in response.json()["applications"])
    assert names == ["Sara Wong", "Sarah Lee"]


@pytest.mark.asyncio
async def test_search_matches_wildcard_characters_literally(
    client: AsyncClient, admin_headers, make_application
) -> None:
    await make_application(full_name="Ana 100% Ready", email="ana@example.com")
    await make_application(full_name="Ben Ito", email="ben_ito@example.com")
    await make_application(full_name="Cho Min", email="chomin@example.com")

    async def search(term):
        response = await client.get(
            "/api/admin/applications", params={"search": term}, headers=admin_headers
        )
        return sorted(a["full_name"] for a in response.json()["applications"])

    assert await search("%") == ["Ana 100% Ready"]
    assert await search("_") == ["Ben Ito"]
    assert await search("n_i") == ["Ben Ito"]


@pytest.mark.asyncio
async def test_list_reports_attachment_count(client: AsyncClient, admin_headers, make_application) -> None:
    await make_application(
        attachments=[
            {"file_name": "cv.pdf", "file_path": "x/cv.pdf", "file_type": "application/pdf", "file_size": 10},
            {"file_name": "me.png", "file_path": "x/me.png", "file_type": "image/png", "file_size": 20},
        ]
    )
    response = await client.get("/api/admin/applications", headers=admin_headers)
    assert response.json()["applications"][0]["attachment_count"] == 2


@pytest.mark.asyncio
@pytest.mark.parametrize("query", ["page=0", "limit=0", "limit=101"])
async def test_list_rejects_bad_pagination(client: AsyncClient, admin_headers, query) -> None:
    response = await client.get(f"/api/admin/applications?{query}", headers=admin_headers)
    assert response.status_code == 400
    assert response.json()["success"] is False


# ----- Detail / status -----

@pytest.mark.asyncio
async def test_get_application_with_attachments(client: AsyncClient, admin_headers, make_application) -> None:
    app_row = await make_application(
        attachments=[{"file_name": "cv.pdf", "file_path": "a/cv.pdf", "file_type": "application/pdf", "file_size": 4}]
    )
    response = await client.get(f"/api/admin/applications/{app_row.id}", headers=admin_headers)
    assert response.status_code == 200
    application = response.json()["application"]
    assert application["application_id"] == app_row.application_id
    assert application["attachments"][0]["file_name"] == "cv.pdf"
    assert application["status_history"] == []


@pytest.mark.asyncio
async def test_get_missing_application_is_404(client: AsyncClient, admin_headers) -> None:
    response = await client.get("/api/admin/applications/999", headers=admin_headers)
    assert response.status_code == 404
    assert response.json() == {"success": False, "message": "Application not found"}


@pytest.mark.asyncio
async def test_update_status_records_history(
    client: AsyncClient, db_session: AsyncSession, reviewer_headers, make_application
) -> None:
    app_row = await make_application()

    response = await client.put(
        f"/api/admin/applications/{app_row.id}",
        json={"status": "under_review", "reviewerNotes": "Schedule interview"},
        headers=reviewer_headers,
    )
    assert response.status_code == 200
    data = response.json()
    assert data["success"] is True
    assert data["application"]["status"] == "under_review"

    response = await client.put(
        f"/api/admin/applications/{app_row.id}",
        json={"status": "accepted"},
        headers=reviewer_headers,
    )
    assert response.status_code == 200

    detail = (await client.get(f"/api/admin/applications/{app_row.id}", headers=reviewer_headers)).json()
    history = detail["application"]["status_history"]
    assert [(h["old_status"], h["new_status"]) for h in history] == [
        ("under_review", "accepted"),
        ("pending", "under_review"),
    ]
    assert history[1]["changed_by"] == "reviewer"
    assert history[1]["notes"] == "Schedule interview"


@pytest.mark.asyncio
async def test_update_status_rejects_unknown_status(client: AsyncClient, admin_headers, make_application) -> None:
    app_row = await make_application()
    response = await client.put(
        f"/api/admin/applications/{app_row.id}",
        json={"status": "hired"},
        headers=admin_headers,
    )
    assert response.status_code == 400
    assert response.json()["message"].startswith("Invalid status")


@pytest.mark.asyncio
async def test_update_status_missing_application(client: AsyncClient, admin_headers) -> None:
    response = await client.put(
        "/api/admin/applications/404",
        json={"status": "accepted"},
        headers=admin_headers,
    )
    assert response.status_code == 404


# ----- Delete -----

@pytest.mark.asyncio
async def test_delete_removes_row_files_and_children(
    client: AsyncClient, db_session: AsyncSession, admin_headers, storage, make_application
) -> None:
    await storage.upload("APP-1/cv.pdf", b"%PDF", "application/pdf")
    app_row = await make_application(
        attachments=[{"file_name": "cv.pdf", "file_path": "APP-1/cv.pdf", "file_type": "application/pdf", "file_size": 4}]
    )
    await client.put(
        f"/api/admin/applications/{app_row.id}",
        json={"status": "rejected"},
        headers=admin_headers,
    )

    response = await client.delete(f"/api/admin/applications/{app_row.id}", headers=admin_headers)
    assert response.status_code == 200
    assert response.json()["deleted_count"] == 1

    assert not (storage.root / "APP-1" / "cv.pdf").exists()
    for model in (Application, Attachment, StatusHistory):
        count = (await db_session.execute(select(func.count()).select_from(model))).scalar_one()
        assert count == 0


@pytest.mark.asyncio
async def test_delete_requires_admin_role(client: AsyncClient, reviewer_headers, make_application) -> None:
    app_row = await make_application()
    response = await client.delete(f"/api/admin/applications/{app_row.id}", headers=reviewer_headers)
    assert response.status_code == 403


@pytest.mark.asyncio
async def test_delete_missing_application_is_404(client: AsyncClient, admin_headers) -> None:
    response = await client.delete("/api/admin/applications/123", headers=admin_headers)
    assert response.status_code == 404


@pytest.mark.asyncio
async def test_bulk_delete(client: AsyncClient, db_session: AsyncSession, admin_headers, make_application) -> None:
    first = await make_application()
    second = await make_application()
    keep = await make_application()

    response = await client.post(
        "/api/admin/applications/bulk-delete",
        json={"ids": [first.id, second.id, 9999]},
        headers=admin_headers,
    )
    assert response.status_code == 200
    assert response.json() == {"success": True, "message": "Applications deleted", "deleted_count": 2}

    remaining = (await db_session.execute(select(Application.id))).scalars().all()
    assert remaining == [keep.id]


@pytest.mark.asyncio
async def test_bulk_delete_requires_ids(client: AsyncClient, admin_headers) -> None:
    response = await client.post(
        "/api/admin/applications/bulk-delete", json={"ids": []}, headers=admin_headers
    )
    assert response.status_code == 400


# ----- Attachments -----

@pytest.mark.asyncio
async def test_download_attachment(client: AsyncClient, admin_headers, storage, make_application) -> None:
    await storage.upload("APP-9/photo.png", b"\x89PNG data", "image/png")
    app_row = await make_application(
        attachments=[{"file_name": "photo.png", "file_path": "APP-9/photo.png", "file_type": "image/png", "file_size": 9}]
    )
    attachment_id = app_row.attachments[0].id

    response = await client.get(
        f"/api/admin/applications/{app_row.id}/attachments/{attachment_id}",
        headers=admin_headers,
    )
    assert response.status_code == 200
    assert response.content == b"\x89PNG data"
    assert response.headers["content-type"] == "image/png"
    assert response.headers["content-disposition"].startswith("attachment;")


@pytest.mark.asyncio
async def test_download_attachment_of_other_application_is_404(
    client: AsyncClient, admin_headers, make_application
) -> None:
    owner = await make_application(
        attachments=[{"file_name": "cv.pdf", "file_path": "o/cv.pdf", "file_type": "application/pdf", "file_size": 1}]
    )
    other = await make_application()
    response = await client.get(
        f"/api/admin/applications/{other.id}/attachments/{owner.attachments[0].id}",
        headers=admin_headers,
    )
    assert response.status_code == 404


@pytest.mark.asyncio
async def test_download_missing_file_is_404(client: AsyncClient, admin_headers, make_application) -> None:
    app_row = await make_application(
        attachments=[{"file_name": "gone.pdf", "file_path": "g/gone.pdf", "file_type": "application/pdf", "file_size": 1}]
    )
    response = await client.get(
        f"/api/admin/applications/{app_row.id}/attachments/{app_row.attachments[0].id}",
        headers=admin_headers,
    )
    assert response.status_code == 404
    assert response.json()["message"] == "Attachment file not found"


# ----- Stats -----

@pytest.mark.asyncio
async def test_stats_endpoint(client: AsyncClient, admin_headers, make_application) -> None:
    await make_application(status="pending")
    await make_application(status="accepted")
    await make_application(status="pending", created_at=datetime(2020, 1, 1, tzinfo=timezone.utc))

    response = await client.get("/api/admin/stats", headers=admin_headers)
    assert response.status_code == 200
    stats = response.json()["stats"]
    assert stats["total"] == 3
    assert stats["today"] == 2
    assert stats["thisWeek"] == 2
    assert stats["thisMonth"] == 2
    assert stats["pending"] == 2
    assert stats["byStatus"]["accepted"] == 1
    assert stats["byStatus"]["waitlisted"] == 0


@pytest.mark.asyncio
async def test_stats_calendar_windows(db_session: AsyncSession, make_application) -> None:
    # Wednesday 2025-01-15 12:00 UTC
    now = datetime(2025, 1, 15, 12, 0, tzinfo=timezone.utc)
    await make_application(created_at=datetime(2025, 1, 15, 0, 30, tzinfo=timezone.utc))  # today
    await make_application(created_at=datetime(2025, 1, 13, 8, 0, tzinfo=timezone.utc))  # Monday
    await make_application(created_at=datetime(2025, 1, 12, 23, 0, tzinfo=timezone.utc))  # last Sunday
    await make_application(created_at=datetime(2024, 12, 31, 9, 0, tzinfo=timezone.utc))  # last month

    stats = await admin_service.get_stats(db_session, now=now)
    assert (stats.total, stats.today, stats.this_week, stats.this_month) == (4, 1, 2, 3)


# ----- Export -----

@pytest.mark.asyncio
async def test_export_excel_by_ids(client: AsyncClient, admin_headers, make_application) -> None:
    first = await make_application(full_name="Export Me")
    await make_application(full_name="Leave Me")

    response = await client.get(
        "/api/admin/applications/export/excel",
        params={"ids": str(first.id)},
        headers=admin_headers,
    )
    assert response.status_code == 200
    assert response.headers["content-type"] == (
        "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"
    )
    assert response.headers["content-disposition"] == "attachment; filename=applications.xlsx"

    ws = load_workbook(io.BytesIO(response.content))["Applications"]
    rows = list(ws.iter_rows(values_only=True))
    assert rows[0] == ("ID", "Name", "Email", "Phone", "Course", "Status", "Date", "Message")
    assert len(rows) == 2
    assert rows[1][1] == "Export Me"


@pytest.mark.asyncio
async def test_export_excel_with_filters(client: AsyncClient, admin_headers, make_application) -> None:
    await make_application(full_name="Accepted One", status="accepted")
    await make_application(full_name="Pending One", status="pending")

    response = await client.get(
        "/api/admin/applications/export/excel",
        params={"status": "accepted"},
        headers=admin_headers,
    )
    ws = load_workbook(io.BytesIO(response.content)).active
    names = [row[1] for row in ws.iter_rows(min_row=2, values_only=True)]
    assert names == ["Accepted One"]


@pytest.mark.asyncio
async def test_export_excel_rejects_malformed_ids(client: AsyncClient, admin_headers) -> None:
    response = await client.get(
        "/api/admin/applications/export/excel",
        params={"ids": "1,two,3"},
        headers=admin_headers,
    )
    assert response.status_code == 400
    assert response.json()["message"] == "Invalid ids parameter"
