from fastapi import APIRouter, Depends, HTTPException
from fastapi import status as http_status
from sqlalchemy.ext.asyncio import AsyncSession

from valentia.auth.dependencies import get_current_admin
from valentia.auth.schemas import CurrentAdmin, LoginRequest, LoginResponse
from valentia.auth.services import ServiceError, login_admin
from valentia.db.session import get_db

router = APIRouter(prefix="/api/admin/auth", tags=["auth"])


@router.post(
    "/login",
    response_model=LoginResponse,
    status_code=http_status.HTTP_200_OK,
)
async def login(
    payload: LoginRequest,
    db: AsyncSession = Depends(get_db),
) -> LoginResponse:
    try:
        return await login_admin(db, payload)
    except ServiceError as e:
        if e.status_code == http_status.HTTP_500_INTERNAL_SERVER_ERROR:
            raise HTTPException(status_code=e.status_code, detail="Internal server error")
        raise HTTPException(status_code=e.status_code, detail=e.message)


@router.get("/me")
async def me(current_admin: CurrentAdmin = Depends(get_current_admin)) -> dict:
    """Echo the admin behind the bearer token; the dashboard uses it to validate a stored token."""
    return {"success": True, "user": current_admin.model_dump()}
