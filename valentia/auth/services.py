import logging
from datetime import datetime, timezone
from typing import Optional

from fastapi import status
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from valentia.auth.models import AdminUser
from valentia.auth.schemas import AdminInfo, LoginRequest, LoginResponse
from valentia.auth.security import create_access_token, hash_password, verify_password
from valentia.core.enums import AdminRole
from valentia.core.exceptions import ServiceError

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS = "Invalid credentials"


async def login_admin(db: AsyncSession, payload: LoginRequest) -> LoginResponse:
    """Authenticate an admin by username/password and issue a JWT."""
    username = payload.username.strip()

    result = await db.execute(select(AdminUser).where(AdminUser.username == username))
    admin: Optional[AdminUser] = result.scalar_one_or_none()
    if not admin or not verify_password(payload.password, admin.password_hash):
        logger.info("Failed admin login for %r", username)
        raise ServiceError(INVALID_CREDENTIALS, status.HTTP_401_UNAUTHORIZED)
    if not admin.is_active:
        logger.info("Inactive admin %r attempted to log in", username)
        raise ServiceError(INVALID_CREDENTIALS, status.HTTP_401_UNAUTHORIZED)

    token = create_access_token(
        subject={"sub": str(admin.id), "username": admin.username, "role": admin.role}
    )

    admin.last_login = datetime.now(timezone.utc)
    try:
        await db.commit()
    except Exception as e:
        await db.rollback()
        raise ServiceError("Login error", status.HTTP_500_INTERNAL_SERVER_ERROR) from e

    logger.info("Admin %r logged in", admin.username)
    return LoginResponse(
        token=token,
        user=AdminInfo(
            id=admin.id,
            username=admin.username,
            role=admin.role,
            last_login=admin.last_login,
        ),
    )


async def ensure_admin_user(
    db: AsyncSession,
    username: str,
    password: str,
    role: str = AdminRole.ADMIN.value,
) -> AdminUser:
    """Create the admin account if it does not exist yet. Existing accounts are left untouched."""
    result = await db.execute(select(AdminUser).where(AdminUser.username == username))
    admin = result.scalar_one_or_none()
    if admin:
        return admin

    admin = AdminUser(
        username=username,
        password_hash=hash_password(password),
        role=role,
        is_active=True,
    )
    db.add(admin)
    await db.commit()
    await db.refresh(admin)
    logger.info("Created admin user %r (%s)", username, role)
    return admin
