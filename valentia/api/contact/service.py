"""
Contact form: notify the academy and send the submitter a localized auto-reply.
Nothing is stored.
"""

import asyncio
import logging

from email_validator import EmailNotValidError, validate_email
from fastapi import status

from valentia.core.config import settings
from valentia.core.exceptions import InvalidSubmission, ServiceError
from valentia.services.email_templates import render_contact_auto_reply, render_contact_notification
from valentia.services.i18n import normalize_language
from valentia.services.mailer import Mailer

from .schemas import ContactRequest, ContactResponse

logger = logging.getLogger(__name__)

MISSING_FIELDS = "Missing required fields: name, email, and message are required"
INVALID_EMAIL = "Invalid email format"
SEND_FAILED = "Failed to send emails. Please try again later."


def is_valid_email(value: str) -> bool:
    try:
        validate_email(value or "", check_deliverability=False)
    except EmailNotValidError:
        return False
    return True


async def submit_contact(mailer: Mailer, payload: ContactRequest) -> ContactResponse:
    name = (payload.name or "").strip()
    email = (payload.email or "").strip()
    message = (payload.message or "").strip()
    if not (name and email and message):
        raise InvalidSubmission(MISSING_FIELDS)
    if not is_valid_email(email):
        raise InvalidSubmission(INVALID_EMAIL)

    language = normalize_language(payload.language)

    notify_subject, notify_html = render_contact_notification(
        name=name,
        email=email,
        message=message,
        phone=payload.phone,
        course=payload.course,
        language=language,
    )
    reply_subject, reply_html = render_contact_auto_reply(language, name, message, payload.course)

    try:
        await asyncio.gather(
            mailer.send(settings.notify_address or email, notify_subject, notify_html),
            mailer.send(email, reply_subject, reply_html),
        )
    except Exception as e:
        logger.exception("Contact emails for %s failed", email)
        raise ServiceError(SEND_FAILED, status.HTTP_500_INTERNAL_SERVER_ERROR) from e

    logger.info("Contact form from %s <%s> handled (%s)", name, email, language)
    return ContactResponse(message="Emails sent successfully")
