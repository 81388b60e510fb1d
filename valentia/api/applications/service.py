"""
Public course applications. Validates the form and files, stores the record and
its attachments, then hands the two emails off to run after the response.
"""

import logging
import random
import time
import uuid
from datetime import datetime, timezone
from pathlib import PurePath
from typing import List, Optional, Sequence, Tuple

from fastapi import UploadFile, status
from pydantic import ValidationError
from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from valentia.api.contact.service import INVALID_EMAIL, is_valid_email
from valentia.core.config import settings
from valentia.core.enums import ApplicationStatus
from valentia.core.exceptions import InvalidSubmission, ServiceError
from valentia.core.models import Application, Attachment
from valentia.services.email_templates import (
    render_application_confirmation,
    render_application_notification,
)
from valentia.services.i18n import resolve_language
from valentia.services.mailer import Mailer, OutgoingAttachment
from valentia.services.storage import StorageBackend, StorageError

from .schemas import ApplicationSubmission, ApplicationSubmitResponse, IncomingFile

logger = logging.getLogger(__name__)

MAX_FILES = 5
MAX_FILE_SIZE = 10 * 1024 * 1024
ALLOWED_CONTENT_TYPES = frozenset(
    {
        "application/pdf",
        "image/jpeg",
        "image/png",
        "image/jpg",
        "application/msword",
        "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
    }
)
MAX_ID_ATTEMPTS = 10

MISSING_FIELDS = "Missing required fields"
TOO_MANY_FILES = f"Too many files. Maximum {MAX_FILES} files allowed."
INVALID_FILE_TYPE = "Invalid file type. Only PDF, JPG, PNG, DOC, DOCX files are allowed."
SUBMIT_FAILED = "Failed to submit application. Please try again later."


def parse_submission(**fields: Optional[str]) -> ApplicationSubmission:
    try:
        return ApplicationSubmission(**fields)
    except ValidationError as e:
        error = e.errors()[0]
        field = ".".join(str(part) for part in error["loc"]) or "form"
        raise InvalidSubmission(f"Invalid {field}: {error['msg']}") from e


def file_too_large(filename: str) -> str:
    return f"File {filename} exceeds the 10MB limit"


def check_upload_limits(uploads: Sequence[UploadFile]) -> None:
    """Count and declared size of the multipart parts, checked before any of them is read."""
    named = [u for u in uploads if u.filename]
    if len(named) > MAX_FILES:
        raise InvalidSubmission(TOO_MANY_FILES)
    for upload in named:
        if upload.size is not None and upload.size > MAX_FILE_SIZE:
            raise InvalidSubmission(file_too_large(upload.filename))


def validate_files(files: Sequence[IncomingFile]) -> None:
    if len(files) > MAX_FILES:
        raise InvalidSubmission(TOO_MANY_FILES)
    for f in files:
        if f.size > MAX_FILE_SIZE:
            raise InvalidSubmission(file_too_large(f.filename))
        if f.content_type not in ALLOWED_CONTENT_TYPES:
            raise InvalidSubmission(INVALID_FILE_TYPE)


def format_application_id(day: datetime, sequence: int) -> str:
    return f"APP-{day.strftime('%Y%m%d')}-{sequence:03d}"


async def generate_application_id(db: AsyncSession, now: Optional[datetime] = None) -> str:
    """APP-YYYYMMDD-NNN with a random NNN; re-rolled while it collides with an existing row."""
    day = now or datetime.now(timezone.utc)
    for _ in range(MAX_ID_ATTEMPTS):
        candidate = format_application_id(day, random.randint(0, 999))
        result = await db.execute(
            select(Application.id).where(Application.application_id == candidate)
        )
        if result.scalar_one_or_none() is None:
            return candidate
    raise ServiceError("Could not allocate an application ID", status.HTTP_500_INTERNAL_SERVER_ERROR)


def storage_key(application_id: str, filename: str) -> str:
    ext = PurePath(filename or "").suffix.lower()
    return f"{application_id}/{int(time.time() * 1000)}-{uuid.uuid4().hex[:9]}{ext}"


async def submit_application(
    db: AsyncSession,
    storage: StorageBackend,
    payload: ApplicationSubmission,
    files: Sequence[IncomingFile],
    accept_language: Optional[str] = None,
) -> Tuple[ApplicationSubmitResponse, Application, List[IncomingFile]]:
    """
    Returns (response, application, stored files). The caller schedules the
    emails with the stored files once the response is on its way.
    """
    name = (payload.name or "").strip()
    email = (payload.email or "").strip()
    phone = (payload.phone or "").strip()
    course = (payload.course or "").strip()
    if not (name and email and phone and course):
        raise InvalidSubmission(MISSING_FIELDS)
    if not is_valid_email(email):
        raise InvalidSubmission(INVALID_EMAIL)
    validate_files(files)

    language = resolve_language(accept_language, payload.language)
    message = (payload.message or "").strip() or None

    uploaded: List[str] = []
    stored_files: List[IncomingFile] = []
    try:
        application_id = await generate_application_id(db)
        application = Application(
            application_id=application_id,
            full_name=name,
            email=email,
            phone=phone,
            course=course,
            message=message,
            language=language,
            status=ApplicationStatus.pending.value,
        )
        db.add(application)
        await db.flush()

        for f in files:
            key = storage_key(application_id, f.filename)
            try:
                await storage.upload(key, f.content, f.content_type)
            except StorageError:
                logger.exception("Upload of %s for %s failed, skipping", f.filename, application_id)
                continue
            uploaded.append(key)
            stored_files.append(f)
            db.add(
                Attachment(
                    application_id=application.id,
                    file_name=f.filename,
                    file_path=key,
                    file_type=f.content_type,
                    file_size=f.size,
                )
            )

        await db.commit()
        await db.refresh(application)
    except SQLAlchemyError as e:
        await db.rollback()
        logger.exception("Failed to store application from %s", email)
        if uploaded:
            try:
                await storage.remove(uploaded)
            except StorageError:
                logger.exception("Could not clean up %d orphaned uploads", len(uploaded))
        raise ServiceError(SUBMIT_FAILED, status.HTTP_500_INTERNAL_SERVER_ERROR) from e

    logger.info(
        "Application %s received from %s (%s, %s, %d files)",
        application.application_id,
        email,
        course,
        language,
        len(stored_files),
    )
    response = ApplicationSubmitResponse(
        message="Application submitted successfully",
        application_id=application.application_id,
    )
    return response, application, stored_files


async def send_application_emails(
    mailer: Mailer,
    *,
    application_id: str,
    name: str,
    email: str,
    phone: str,
    course: str,
    language: str,
    message: Optional[str],
    files: Sequence[IncomingFile],
) -> None:
    """Fire-and-forget: each email is attempted once and failures are only logged."""
    listing = [(f.filename, f.size) for f in files]
    outgoing = [OutgoingAttachment(f.filename, f.content, f.content_type) for f in files]

    notify_subject, notify_html = render_application_notification(
        application_id=application_id,
        name=name,
        email=email,
        phone=phone,
        course=course,
        language=language,
        message=message,
        attachments=listing,
    )
    try:
        await mailer.send(settings.notify_address or email, notify_subject, notify_html, outgoing)
    except Exception:
        logger.exception("Admin notification for %s failed", application_id)

    confirm_subject, confirm_html = render_application_confirmation(
        language, name, course, listing, reference=application_id
    )
    try:
        await mailer.send(email, confirm_subject, confirm_html, outgoing)
    except Exception:
        logger.exception("Confirmation email for %s failed", application_id)
