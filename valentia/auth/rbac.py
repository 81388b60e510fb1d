from fastapi import Depends, HTTPException, status

from valentia.auth.dependencies import get_current_admin
from valentia.auth.schemas import CurrentAdmin
from valentia.core.enums import AdminRole


async def require_admin_role(
    current_admin: CurrentAdmin = Depends(get_current_admin),
) -> CurrentAdmin:
    """Require the admin role. Used for destructive operations (deletes)."""
    if current_admin.role != AdminRole.ADMIN.value:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Only admins can perform this action",
        )
    return current_admin
