import logging

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession

from valentia.auth.models import AdminUser
from valentia.db.session import Base

# Register every model on Base.metadata before create_all
import valentia.core.models  # noqa: F401

logger = logging.getLogger(__name__)


async def create_tables(engine: AsyncEngine) -> None:
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("Database tables ensured")


async def ping(db: AsyncSession) -> None:
    """Lightweight query that keeps a hosted database from idling out."""
    await db.execute(select(AdminUser.id).limit(1))
