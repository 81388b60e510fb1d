from typing import Optional

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from valentia.auth.models import AdminUser
from valentia.auth.schemas import CurrentAdmin
from valentia.auth.security import decode_access_token
from valentia.db.session import get_db


bearer_scheme = HTTPBearer(auto_error=False)


async def get_current_admin(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    db: AsyncSession = Depends(get_db),
) -> CurrentAdmin:
    """Resolve the admin from the bearer token. Missing token is 401; a bad or stale token is 403."""
    if credentials is None or credentials.scheme.lower() != "bearer":
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Authentication required",
            headers={"WWW-Authenticate": "Bearer"},
        )

    forbidden = HTTPException(
        status_code=status.HTTP_403_FORBIDDEN,
        detail="Invalid or expired token",
    )
    payload = decode_access_token(credentials.credentials)
    if payload is None:
        raise forbidden

    try:
        admin_id = int(payload.get("sub"))
    except (TypeError, ValueError):
        raise forbidden

    result = await db.execute(select(AdminUser).where(AdminUser.id == admin_id))
    admin = result.scalar_one_or_none()
    if not admin or not admin.is_active:
        raise forbidden

    return CurrentAdmin(id=admin.id, username=admin.username, role=admin.role)
