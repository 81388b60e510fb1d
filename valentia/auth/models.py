from datetime import datetime, timezone

from sqlalchemy import Boolean, Column, DateTime, Integer, String, Text

from valentia.core.enums import AdminRole
from valentia.db.session import Base


class AdminUser(Base):
    """Staff account for the admin dashboard. Only used for authentication."""

    __tablename__ = "valentia_admin_users"

    id = Column(Integer, primary_key=True, autoincrement=True)
    username = Column(String(120), nullable=False, unique=True, index=True)
    password_hash = Column(Text, nullable=False)
    # admin: full access; reviewer: read and status updates only (no deletes)
    role = Column(String(20), nullable=False, default=AdminRole.ADMIN.value)
    is_active = Column(Boolean, nullable=False, default=True)
    last_login = Column(DateTime(timezone=True), nullable=True)
    created_at = Column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc), nullable=False)
