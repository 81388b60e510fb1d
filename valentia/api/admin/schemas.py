from datetime import datetime
from typing import Dict, List, Optional

from pydantic import BaseModel, Field


# ----- Applications -----

class AttachmentResponse(BaseModel):
    id: int
    file_name: str
    file_path: str
    file_type: Optional[str] = None
    file_size: int
    created_at: datetime

    class Config:
        from_attributes = True


class StatusHistoryResponse(BaseModel):
    id: int
    old_status: Optional[str] = None
    new_status: str
    changed_by: Optional[str] = None
    notes: Optional[str] = None
    created_at: datetime

    class Config:
        from_attributes = True


class ApplicationResponse(BaseModel):
    id: int
    application_id: str
    full_name: str
    email: str
    phone: str
    course: str
    message: Optional[str] = None
    language: str
    status: str
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class ApplicationListItem(ApplicationResponse):
    attachment_count: int = 0


class ApplicationDetail(ApplicationResponse):
    attachments: List[AttachmentResponse] = []
    status_history: List[StatusHistoryResponse] = []


class Pagination(BaseModel):
    total: int
    page: int
    limit: int
    total_pages: int = Field(..., serialization_alias="totalPages")

    class Config:
        populate_by_name = True


class ApplicationListResponse(BaseModel):
    success: bool = True
    applications: List[ApplicationListItem]
    pagination: Pagination


class ApplicationDetailResponse(BaseModel):
    success: bool = True
    application: ApplicationDetail


class StatusUpdateRequest(BaseModel):
    """Status is validated in the service so an unknown value is a 400 with a readable message."""

    status: Optional[str] = None
    reviewer_notes: Optional[str] = Field(None, alias="reviewerNotes", max_length=5000)

    class Config:
        populate_by_name = True


class StatusUpdateResponse(BaseModel):
    success: bool = True
    message: str
    application: ApplicationResponse


class BulkDeleteRequest(BaseModel):
    ids: List[int] = Field(default_factory=list)


class DeleteResponse(BaseModel):
    success: bool = True
    message: str
    deleted_count: int


# ----- Stats -----

class ApplicationStats(BaseModel):
    total: int
    today: int
    this_week: int = Field(..., serialization_alias="thisWeek")
    this_month: int = Field(..., serialization_alias="thisMonth")
    pending: int
    by_status: Dict[str, int] = Field(default_factory=dict, serialization_alias="byStatus")

    class Config:
        populate_by_name = True


class StatsResponse(BaseModel):
    success: bool = True
    stats: ApplicationStats
