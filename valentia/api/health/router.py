import logging
from datetime import datetime, timezone

from fastapi import APIRouter, Depends, HTTPException
from fastapi import status as http_status
from sqlalchemy.ext.asyncio import AsyncSession

from valentia.core.config import settings
from valentia.db.init_db import ping
from valentia.db.session import get_db

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["health"])


def _now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


@router.get("")
async def api_root() -> dict:
    return {
        "status": "ok",
        "message": "Valentia Cabin Crew Academy API is running",
        "env": {
            "storage_backend": settings.storage_backend,
            "email_configured": settings.email_configured,
        },
    }


@router.get("/test")
async def api_test() -> dict:
    return {
        "message": "API is working!",
        "timestamp": _now_iso(),
        "environment": settings.environment,
    }


@router.get("/ping")
async def api_ping(db: AsyncSession = Depends(get_db)) -> dict:
    """Cheap query so the hosted database does not go idle."""
    try:
        await ping(db)
    except Exception as e:
        logger.exception("Database ping failed")
        raise HTTPException(
            status_code=http_status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Database ping failed",
        ) from e
    return {
        "success": True,
        "message": "Database pinged successfully",
        "timestamp": _now_iso(),
    }
