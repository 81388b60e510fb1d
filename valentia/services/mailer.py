import logging
from dataclasses import dataclass
from email.message import EmailMessage
from typing import Iterable, Optional, Sequence, Union

import aiosmtplib

from valentia.core.config import settings

logger = logging.getLogger(__name__)


class MailerNotConfigured(RuntimeError):
    """SMTP credentials are missing."""


@dataclass(frozen=True)
class OutgoingAttachment:
    filename: str
    content: bytes
    content_type: str = "application/octet-stream"


def build_message(
    sender: str,
    to: Union[str, Sequence[str]],
    subject: str,
    html: str,
    attachments: Iterable[OutgoingAttachment] = (),
) -> EmailMessage:
    recipients = [to] if isinstance(to, str) else list(to)

    msg = EmailMessage()
    msg["From"] = sender
    msg["To"] = ", ".join(recipients)
    msg["Subject"] = subject
    msg.set_content("This message requires an HTML capable email client.")
    msg.add_alternative(html, subtype="html")

    for item in attachments:
        maintype, _, subtype = (item.content_type or "application/octet-stream").partition("/")
        msg.add_attachment(
            item.content,
            maintype=maintype or "application",
            subtype=subtype or "octet-stream",
            filename=item.filename,
        )
    return msg


class Mailer:
    """Thin aiosmtplib wrapper; one SMTP connection per message."""

    def __init__(
        self,
        host: str,
        port: int,
        username: Optional[str],
        password: Optional[str],
        use_tls: bool = True,
        sender_name: str = "Valentia Cabin Crew Academy",
    ):
        self.host = host
        self.port = port
        self.username = username
        self.password = password
        self.use_tls = use_tls
        self.sender_name = sender_name

    @property
    def sender(self) -> str:
        return f'"{self.sender_name}" <{self.username}>'

    async def send(
        self,
        to: Union[str, Sequence[str]],
        subject: str,
        html: str,
        attachments: Iterable[OutgoingAttachment] = (),
    ) -> None:
        if not (self.username and self.password):
            raise MailerNotConfigured("EMAIL_USER and EMAIL_PASS must be set to send email")

        msg = build_message(self.sender, to, subject, html, attachments)
        await aiosmtplib.send(
            msg,
            hostname=self.host,
            port=self.port,
            username=self.username,
            password=self.password,
            start_tls=self.use_tls,
        )
        logger.info("Email sent to %s: %s", msg["To"], subject)


def get_mailer() -> Mailer:
    return Mailer(
        host=settings.smtp_host,
        port=settings.smtp_port,
        username=settings.email_user,
        password=settings.email_pass,
        use_tls=settings.smtp_use_tls,
    )
