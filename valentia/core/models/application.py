"""
Course application submitted through the public form. STATUS is the only field
admins change after creation; every change is recorded in status history.
"""

from datetime import datetime, timezone

from sqlalchemy import Column, DateTime, Integer, String, Text
from sqlalchemy.orm import relationship

from valentia.core.enums import ApplicationStatus
from valentia.db.session import Base


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


APPLICATION_STATUSES = tuple(s.value for s in ApplicationStatus)


class Application(Base):
    __tablename__ = "valentia_applications"

    id = Column(Integer, primary_key=True, autoincrement=True)
    # Public reference shown to applicants and admins, e.g. APP-20250114-042
    application_id = Column(String(32), nullable=False, unique=True, index=True)
    full_name = Column(String(255), nullable=False)
    email = Column(String(255), nullable=False, index=True)
    phone = Column(String(50), nullable=False)
    course = Column(String(100), nullable=False, index=True)
    message = Column(Text, nullable=True)
    language = Column(String(5), nullable=False, default="en")
    status = Column(String(20), nullable=False, default=ApplicationStatus.pending.value, index=True)
    created_at = Column(DateTime(timezone=True), default=_utcnow, nullable=False, index=True)
    updated_at = Column(DateTime(timezone=True), default=_utcnow, onupdate=_utcnow, nullable=False)

    attachments = relationship(
        "Attachment",
        back_populates="application",
        cascade="all, delete-orphan",
        order_by="Attachment.id",
    )
    status_history = relationship(
        "StatusHistory",
        back_populates="application",
        cascade="all, delete-orphan",
        order_by="[StatusHistory.created_at.desc(), StatusHistory.id.desc()]",
    )
