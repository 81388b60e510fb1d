import os

os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite://")
os.environ.setdefault("JWT_SECRET_KEY", "test-secret-key")
os.environ.setdefault("ENVIRONMENT", "test")
os.environ.setdefault("STORAGE_BACKEND", "local")
os.environ.setdefault("EMAIL_USER", "academy@example.com")
os.environ.setdefault("EMAIL_PASS", "app-password")
os.environ.setdefault("ADMIN_NOTIFY_EMAIL", "admissions@example.com")

from datetime import datetime, timezone
from typing import AsyncGenerator, Callable, List, Optional

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import selectinload
from sqlalchemy.pool import StaticPool

from valentia.auth.security import create_access_token
from valentia.auth.services import ensure_admin_user
from valentia.core.models import Application, Attachment
from valentia.db.init_db import create_tables
from valentia.db.session import get_db
from valentia.main import app
from valentia.services.mailer import get_mailer
from valentia.services.storage import LocalStorage, get_storage


TEST_DATABASE_URL = "sqlite+aiosqlite://"


class RecordingMailer:
    """Stands in for Mailer; keeps every message instead of talking SMTP."""

    def __init__(self) -> None:
        self.sent: List[dict] = []
        self.fail = False

    async def send(self, to, subject, html, attachments=()):
        if self.fail:
            raise RuntimeError("SMTP unavailable")
        self.sent.append(
            {"to": to, "subject": subject, "html": html, "attachments": list(attachments)}
        )


@pytest.fixture()
async def engine() -> AsyncGenerator[AsyncEngine, None]:
    """One in-memory SQLite database per test; StaticPool keeps it on a single connection."""
    eng = create_async_engine(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    await create_tables(eng)
    yield eng
    await eng.dispose()


@pytest.fixture()
async def db_session(engine: AsyncEngine) -> AsyncGenerator[AsyncSession, None]:
    """Provide a database session for a test and override FastAPI dependency."""
    async_session = async_sessionmaker(bind=engine, class_=AsyncSession, expire_on_commit=False)

    async with async_session() as session:

        async def override_get_db() -> AsyncGenerator[AsyncSession, None]:
            yield session

        app.dependency_overrides[get_db] = override_get_db
        yield session

    app.dependency_overrides.pop(get_db, None)


@pytest.fixture()
def mailer() -> RecordingMailer:
    fake = RecordingMailer()
    app.dependency_overrides[get_mailer] = lambda: fake
    yield fake
    app.dependency_overrides.pop(get_mailer, None)


@pytest.fixture()
def storage(tmp_path) -> LocalStorage:
    backend = LocalStorage(tmp_path / "uploads")
    app.dependency_overrides[get_storage] = lambda: backend
    yield backend
    app.dependency_overrides.pop(get_storage, None)


@pytest.fixture()
async def client(
    db_session: AsyncSession, mailer: RecordingMailer, storage: LocalStorage
) -> AsyncGenerator[AsyncClient, None]:
    """Async HTTP client bound to the FastAPI app."""
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac


@pytest.fixture()
async def admin_user(db_session: AsyncSession):
    return await ensure_admin_user(db_session, "admin", "S3cret-pass")


@pytest.fixture()
async def reviewer_user(db_session: AsyncSession):
    return await ensure_admin_user(db_session, "reviewer", "Review-pass1", role="reviewer")


def _auth_headers(user) -> dict:
    token = create_access_token(
        subject={"sub": str(user.id), "username": user.username, "role": user.role}
    )
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture()
def admin_headers(admin_user) -> dict:
    return _auth_headers(admin_user)


@pytest.fixture()
def reviewer_headers(reviewer_user) -> dict:
    return _auth_headers(reviewer_user)


@pytest.fixture()
def make_application(db_session: AsyncSession) -> Callable:
    """Insert an application (optionally with attachment rows) straight into the DB."""
    counter = {"n": 0}

    async def _make(
        *,
        full_name: str = "Mei Lin",
        email: Optional[str] = None,
        course: str = "advanced",
        status: str = "pending",
        created_at: Optional[datetime] = None,
        attachments: Optional[List[dict]] = None,
    ) -> Application:
        counter["n"] += 1
        n = counter["n"]
        application = Application(
            application_id=f"APP-20250101-{n:03d}",
            full_name=full_name,
            email=email or f"applicant{n}@example.com",
            phone="+60123456789",
            course=course,
            message="I would love to fly.",
            language="en",
            status=status,
            created_at=created_at or datetime.now(timezone.utc),
        )
        db_session.add(application)
        await db_session.flush()
        for item in attachments or []:
            db_session.add(Attachment(application_id=application.id, **item))
        await db_session.commit()
        result = await db_session.execute(
            select(Application)
            .where(Application.id == application.id)
            .options(selectinload(Application.attachments))
            .execution_options(populate_existing=True)
        )
        return result.scalar_one()

    return _make
