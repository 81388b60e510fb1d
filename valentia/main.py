import logging
import traceback
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from valentia.api.admin.router import router as admin_router
from valentia.api.applications.router import router as applications_router
from valentia.api.auth.router import router as auth_router
from valentia.api.contact.router import router as contact_router
from valentia.api.health.router import router as health_router
from valentia.auth.services import ensure_admin_user
from valentia.core.config import settings
from valentia.core.logging import configure_logging
from valentia.db.init_db import create_tables
from valentia.db.session import AsyncSessionLocal, engine

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    if settings.auto_create_tables:
        await create_tables(engine)
        if settings.admin_username and settings.admin_password:
            async with AsyncSessionLocal() as db:
                await ensure_admin_user(db, settings.admin_username, settings.admin_password)
    logger.info("Valentia API started (%s)", settings.environment)
    yield
    await engine.dispose()


def _error(status_code: int, message: str, **extra) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"success": False, "message": message, **extra},
    )


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    message = exc.detail if isinstance(exc.detail, str) else "Request failed"
    if exc.status_code == status.HTTP_404_NOT_FOUND and message == "Not Found":
        message = "API endpoint not found"
    response = _error(exc.status_code, message)
    if exc.headers:
        response.headers.update(exc.headers)
    return response


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    return _error(
        status.HTTP_400_BAD_REQUEST,
        "Invalid request",
        errors=jsonable_encoder(exc.errors()),
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    if settings.is_production:
        return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal Server Error")
    return _error(
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        "Internal Server Error",
        error=str(exc),
        stack="".join(traceback.format_exception(type(exc), exc, exc.__traceback__)),
    )


def create_app() -> FastAPI:
    configure_logging()
    app = FastAPI(title="Valentia Cabin Crew Academy API", lifespan=lifespan)

    # CORS: the marketing site and admin dashboard are served from FRONTEND_URL
    app.add_middleware(
        CORSMiddleware,
        allow_origins=[settings.frontend_url],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)

    # Routers
    app.include_router(health_router)
    app.include_router(contact_router)
    app.include_router(applications_router)
    app.include_router(auth_router)
    app.include_router(admin_router)

    return app


app = create_app()
