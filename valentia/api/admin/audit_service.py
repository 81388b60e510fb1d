"""
Status history for applications. Call on every status change.
"""

from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession

from valentia.core.models import Application, StatusHistory


async def record_status_change(
    db: AsyncSession,
    application: Application,
    *,
    old_status: Optional[str],
    new_status: str,
    changed_by: Optional[str] = None,
    notes: Optional[str] = None,
) -> StatusHistory:
    """Append one status history row. Caller must commit."""
    entry = StatusHistory(
        application_id=application.id,
        old_status=old_status,
        new_status=new_status,
        changed_by=changed_by,
        notes=notes,
    )
    db.add(entry)
    return entry
