from typing import AsyncGenerator

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import declarative_base

from valentia.core.config import settings


def async_database_url(url: str) -> str:
    """Hosted Postgres (Supabase, Heroku) hands out postgres:// URLs; the async engine needs asyncpg."""
    for prefix in ("postgres://", "postgresql://"):
        if url.startswith(prefix):
            return "postgresql+asyncpg://" + url[len(prefix):]
    return url


def engine_options(url: str) -> dict:
    if url.startswith("sqlite"):
        return {"connect_args": {"check_same_thread": False}}
    # the hosted pooler drops idle connections: ping before use and recycle every 5 minutes
    return {"pool_pre_ping": True, "pool_recycle": 300}


DATABASE_URL = async_database_url(settings.database_url)

engine = create_async_engine(DATABASE_URL, echo=False, **engine_options(DATABASE_URL))

AsyncSessionLocal = async_sessionmaker(
    bind=engine,
    class_=AsyncSession,
    expire_on_commit=False,
)

Base = declarative_base()


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    async with AsyncSessionLocal() as session:
        yield session
