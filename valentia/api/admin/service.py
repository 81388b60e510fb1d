"""
Admin review of applications: listing, detail, status changes, deletes,
attachment download, dashboard stats and export selection.
"""

import logging
import math
from datetime import datetime, timedelta, timezone
from typing import Dict, List, Optional, Sequence, Tuple

from sqlalchemy import func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from valentia.core.exceptions import InvalidSubmission, NotFound
from valentia.core.models import APPLICATION_STATUSES, Application, Attachment
from valentia.services.storage import StorageBackend, StorageError

from . import audit_service
from .schemas import (
    ApplicationDetail,
    ApplicationListItem,
    ApplicationListResponse,
    ApplicationResponse,
    ApplicationStats,
    DeleteResponse,
    Pagination,
    StatusUpdateRequest,
    StatusUpdateResponse,
)

logger = logging.getLogger(__name__)

APPLICATION_NOT_FOUND = "Application not found"


def _is_set(value: Optional[str]) -> bool:
    return bool(value) and value.strip().lower() != "all"


def _like_pattern(term: str) -> str:
    """Substring pattern with LIKE wildcards in the term matched literally."""
    escaped = term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return f"%{escaped}%"


def _apply_filters(stmt, status_filter: Optional[str], course: Optional[str], search: Optional[str]):
    if _is_set(status_filter):
        stmt = stmt.where(Application.status == status_filter.strip())
    if _is_set(course):
        stmt = stmt.where(Application.course == course.strip())
    term = (search or "").strip()
    if term:
        pattern = _like_pattern(term)
        stmt = stmt.where(
            or_(
                Application.full_name.ilike(pattern, escape="\\"),
                Application.email.ilike(pattern, escape="\\"),
                Application.application_id.ilike(pattern, escape="\\"),
            )
        )
    return stmt


async def _load_application(db: AsyncSession, application_pk: int) -> Application:
    result = await db.execute(
        select(Application)
        .where(Application.id == application_pk)
        .options(selectinload(Application.attachments), selectinload(Application.status_history))
        .execution_options(populate_existing=True)
    )
    application = result.scalar_one_or_none()
    if not application:
        raise NotFound(APPLICATION_NOT_FOUND)
    return application


# ----- Read -----

async def list_applications(
    db: AsyncSession,
    *,
    page: int = 1,
    limit: int = 10,
    status_filter: Optional[str] = None,
    course: Optional[str] = None,
    search: Optional[str] = None,
) -> ApplicationListResponse:
    """Newest first. `all` or empty status/course means no filter."""
    count_stmt = _apply_filters(select(func.count(Application.id)), status_filter, course, search)
    total = (await db.execute(count_stmt)).scalar_one()

    attachment_counts = (
        select(Attachment.application_id, func.count(Attachment.id).label("n"))
        .group_by(Attachment.application_id)
        .subquery()
    )
    stmt = select(Application, func.coalesce(attachment_counts.c.n, 0)).outerjoin(
        attachment_counts, attachment_counts.c.application_id == Application.id
    )
    stmt = _apply_filters(stmt, status_filter, course, search)
    stmt = stmt.order_by(Application.created_at.desc(), Application.id.desc())
    stmt = stmt.offset((page - 1) * limit).limit(limit)

    rows = (await db.execute(stmt)).all()
    items = [
        ApplicationListItem(
            **ApplicationResponse.model_validate(app).model_dump(),
            attachment_count=count,
        )
        for app, count in rows
    ]
    return ApplicationListResponse(
        applications=items,
        pagination=Pagination(
            total=total,
            page=page,
            limit=limit,
            total_pages=math.ceil(total / limit) if limit else 0,
        ),
    )


async def get_application(db: AsyncSession, application_pk: int) -> ApplicationDetail:
    application = await _load_application(db, application_pk)
    return ApplicationDetail.model_validate(application)


async def get_attachment_content(
    db: AsyncSession,
    storage: StorageBackend,
    application_pk: int,
    attachment_pk: int,
) -> Tuple[Attachment, bytes]:
    result = await db.execute(
        select(Attachment).where(
            Attachment.id == attachment_pk,
            Attachment.application_id == application_pk,
        )
    )
    attachment = result.scalar_one_or_none()
    if not attachment:
        raise NotFound("Attachment not found")
    try:
        content = await storage.download(attachment.file_path)
    except StorageError as e:
        logger.warning("Stored file missing for attachment %s: %s", attachment.id, e)
        raise NotFound("Attachment file not found") from e
    return attachment, content


# ----- Status -----

async def update_application_status(
    db: AsyncSession,
    application_pk: int,
    payload: StatusUpdateRequest,
    *,
    changed_by: str,
) -> StatusUpdateResponse:
    """Set a new status and append the transition to status history."""
    new_status = (payload.status or "").strip()
    if new_status not in APPLICATION_STATUSES:
        raise InvalidSubmission(f"Invalid status. Must be one of: {', '.join(APPLICATION_STATUSES)}")

    application = await _load_application(db, application_pk)
    old_status = application.status
    application.status = new_status
    application.updated_at = datetime.now(timezone.utc)
    await audit_service.record_status_change(
        db,
        application,
        old_status=old_status,
        new_status=new_status,
        changed_by=changed_by,
        notes=payload.reviewer_notes,
    )
    await db.commit()
    await db.refresh(application)

    logger.info(
        "Application %s status %s -> %s by %s",
        application.application_id,
        old_status,
        new_status,
        changed_by,
    )
    return StatusUpdateResponse(
        message="Application status updated successfully",
        application=ApplicationResponse.model_validate(application),
    )


# ----- Delete -----

async def _remove_files(storage: StorageBackend, applications: Sequence[Application]) -> None:
    paths = [a.file_path for app in applications for a in app.attachments if a.file_path]
    if not paths:
        return
    try:
        await storage.remove(paths)
    except StorageError:
        logger.exception("Failed to remove %d stored files", len(paths))


async def delete_application(
    db: AsyncSession,
    storage: StorageBackend,
    application_pk: int,
    *,
    deleted_by: str,
) -> DeleteResponse:
    application = await _load_application(db, application_pk)
    await _remove_files(storage, [application])
    await db.delete(application)
    await db.commit()
    logger.info("Application %s deleted by %s", application.application_id, deleted_by)
    return DeleteResponse(message="Application deleted successfully", deleted_count=1)


async def bulk_delete_applications(
    db: AsyncSession,
    storage: StorageBackend,
    ids: Sequence[int],
    *,
    deleted_by: str,
) -> DeleteResponse:
    if not ids:
        raise InvalidSubmission("No application IDs provided")

    result = await db.execute(
        select(Application)
        .where(Application.id.in_(list(ids)))
        .options(selectinload(Application.attachments), selectinload(Application.status_history))
        .execution_options(populate_existing=True)
    )
    applications = list(result.scalars().all())
    await _remove_files(storage, applications)
    for application in applications:
        await db.delete(application)
    await db.commit()

    logger.info("%d applications deleted by %s", len(applications), deleted_by)
    return DeleteResponse(message="Applications deleted", deleted_count=len(applications))


# ----- Stats -----

async def get_stats(db: AsyncSession, now: Optional[datetime] = None) -> ApplicationStats:
    """Counts by UTC calendar day, Monday-based week and calendar month."""
    now = now or datetime.now(timezone.utc)
    today_start = now.replace(hour=0, minute=0, second=0, microsecond=0)
    week_start = today_start - timedelta(days=today_start.weekday())
    month_start = today_start.replace(day=1)

    async def _count_since(since: Optional[datetime] = None) -> int:
        stmt = select(func.count(Application.id))
        if since is not None:
            stmt = stmt.where(Application.created_at >= since)
        return (await db.execute(stmt)).scalar_one()

    by_status_rows = await db.execute(
        select(Application.status, func.count(Application.id)).group_by(Application.status)
    )
    by_status: Dict[str, int] = {s: 0 for s in APPLICATION_STATUSES}
    for status_value, count in by_status_rows.all():
        by_status[status_value] = count

    return ApplicationStats(
        total=await _count_since(),
        today=await _count_since(today_start),
        this_week=await _count_since(week_start),
        this_month=await _count_since(month_start),
        pending=by_status.get("pending", 0),
        by_status=by_status,
    )


# ----- Export -----

def parse_ids(raw: Optional[str]) -> List[int]:
    """Comma separated integer ids; blanks are ignored."""
    ids: List[int] = []
    for part in (raw or "").split(","):
        part = part.strip()
        if not part:
            continue
        try:
            ids.append(int(part))
        except ValueError:
            raise InvalidSubmission("Invalid ids parameter")
    return ids


async def list_for_export(
    db: AsyncSession,
    *,
    ids: Optional[Sequence[int]] = None,
    status_filter: Optional[str] = None,
    course: Optional[str] = None,
    search: Optional[str] = None,
) -> List[Application]:
    stmt = select(Application)
    if ids:
        stmt = stmt.where(Application.id.in_(list(ids)))
    else:
        stmt = _apply_filters(stmt, status_filter, course, search)
    stmt = stmt.order_by(Application.created_at.desc(), Application.id.desc())
    result = await db.execute(stmt)
    return list(result.scalars().all())
