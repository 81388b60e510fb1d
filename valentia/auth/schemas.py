from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field


class LoginRequest(BaseModel):
    username: str = Field(..., min_length=1, max_length=120)
    password: str = Field(..., min_length=1, max_length=256)


class AdminInfo(BaseModel):
    id: int
    username: str
    role: str
    last_login: Optional[datetime] = None


class LoginResponse(BaseModel):
    success: bool = True
    token: str
    token_type: str = "bearer"
    user: AdminInfo


class CurrentAdmin(BaseModel):
    """Authenticated admin resolved from the bearer token."""

    id: int
    username: str
    role: str
