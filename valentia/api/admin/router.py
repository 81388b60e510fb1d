from typing import Optional
from urllib.parse import quote

from fastapi import APIRouter, Depends, HTTPException, Query, Response
from sqlalchemy.ext.asyncio import AsyncSession

from valentia.auth.dependencies import get_current_admin
from valentia.auth.rbac import require_admin_role
from valentia.auth.schemas import CurrentAdmin
from valentia.core.exceptions import ServiceError
from valentia.db.session import get_db
from valentia.services.storage import StorageBackend, get_storage

from .export import EXPORT_FILENAME, XLSX_MEDIA_TYPE, build_applications_workbook
from .schemas import (
    ApplicationDetailResponse,
    ApplicationListResponse,
    BulkDeleteRequest,
    DeleteResponse,
    StatsResponse,
    StatusUpdateRequest,
    StatusUpdateResponse,
)
from . import service

router = APIRouter(prefix="/api/admin", tags=["admin"])


# ----- Applications -----

@router.get("/applications", response_model=ApplicationListResponse)
async def list_applications(
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    status_filter: Optional[str] = Query(None, alias="status", description="Application status or 'all'"),
    course: Optional[str] = Query(None, description="Course key or 'all'"),
    search: Optional[str] = Query(None, description="Matches name, email or application ID"),
    db: AsyncSession = Depends(get_db),
    current_admin: CurrentAdmin = Depends(get_current_admin),
) -> ApplicationListResponse:
    return await service.list_applications(
        db,
        page=page,
        limit=limit,
        status_filter=status_filter,
        course=course,
        search=search,
    )


@router.get("/applications/export/excel")
async def export_applications_excel(
    ids: Optional[str] = Query(None, description="Comma separated application IDs; overrides the filters"),
    status_filter: Optional[str] = Query(None, alias="status"),
    course: Optional[str] = Query(None),
    search: Optional[str] = Query(None),
    db: AsyncSession = Depends(get_db),
    current_admin: CurrentAdmin = Depends(get_current_admin),
) -> Response:
    """Download the selected (or filtered) applications as an .xlsx workbook."""
    try:
        applications = await service.list_for_export(
            db,
            ids=service.parse_ids(ids),
            status_filter=status_filter,
            course=course,
            search=search,
        )
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)
    return Response(
        content=build_applications_workbook(applications),
        media_type=XLSX_MEDIA_TYPE,
        headers={"Content-Disposition": f"attachment; filename={EXPORT_FILENAME}"},
    )


@router.post("/applications/bulk-delete", response_model=DeleteResponse)
async def bulk_delete_applications(
    payload: BulkDeleteRequest,
    db: AsyncSession = Depends(get_db),
    storage: StorageBackend = Depends(get_storage),
    current_admin: CurrentAdmin = Depends(require_admin_role),
) -> DeleteResponse:
    try:
        return await service.bulk_delete_applications(
            db, storage, payload.ids, deleted_by=current_admin.username
        )
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)


@router.get("/applications/{application_id}", response_model=ApplicationDetailResponse)
async def get_application(
    application_id: int,
    db: AsyncSession = Depends(get_db),
    current_admin: CurrentAdmin = Depends(get_current_admin),
) -> ApplicationDetailResponse:
    """Application with its attachments and status history (newest first)."""
    try:
        application = await service.get_application(db, application_id)
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)
    return ApplicationDetailResponse(application=application)


@router.put("/applications/{application_id}", response_model=StatusUpdateResponse)
async def update_application_status(
    application_id: int,
    payload: StatusUpdateRequest,
    db: AsyncSession = Depends(get_db),
    current_admin: CurrentAdmin = Depends(get_current_admin),
) -> StatusUpdateResponse:
    try:
        return await service.update_application_status(
            db, application_id, payload, changed_by=current_admin.username
        )
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)


@router.delete("/applications/{application_id}", response_model=DeleteResponse)
async def delete_application(
    application_id: int,
    db: AsyncSession = Depends(get_db),
    storage: StorageBackend = Depends(get_storage),
    current_admin: CurrentAdmin = Depends(require_admin_role),
) -> DeleteResponse:
    """Delete an application, its stored files, attachments and history. Admin role only."""
    try:
        return await service.delete_application(
            db, storage, application_id, deleted_by=current_admin.username
        )
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)


@router.get("/applications/{application_id}/attachments/{attachment_id}")
async def download_attachment(
    application_id: int,
    attachment_id: int,
    db: AsyncSession = Depends(get_db),
    storage: StorageBackend = Depends(get_storage),
    current_admin: CurrentAdmin = Depends(get_current_admin),
) -> Response:
    try:
        attachment, content = await service.get_attachment_content(
            db, storage, application_id, attachment_id
        )
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)
    return Response(
        content=content,
        media_type=attachment.file_type or "application/octet-stream",
        headers={
            "Content-Disposition": f"attachment; filename*=UTF-8''{quote(attachment.file_name)}",
        },
    )


# ----- Stats -----

@router.get("/stats", response_model=StatsResponse)
async def get_stats(
    db: AsyncSession = Depends(get_db),
    current_admin: CurrentAdmin = Depends(get_current_admin),
) -> StatsResponse:
    return StatsResponse(stats=await service.get_stats(db))
