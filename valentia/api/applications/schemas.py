from typing import Optional

from pydantic import BaseModel, Field


class ApplicationSubmission(BaseModel):
    """Text fields of the multipart application form."""

    name: Optional[str] = Field(None, max_length=255)
    email: Optional[str] = Field(None, max_length=255)
    phone: Optional[str] = Field(None, max_length=50)
    course: Optional[str] = Field(None, max_length=100)
    message: Optional[str] = None
    # any locale string; normalized to a supported language, English otherwise
    language: Optional[str] = None


class IncomingFile(BaseModel):
    """An uploaded file already read into memory."""

    filename: str
    content_type: str
    content: bytes

    @property
    def size(self) -> int:
        return len(self.content)


class ApplicationSubmitResponse(BaseModel):
    success: bool = True
    message: str
    application_id: str = Field(..., serialization_alias="applicationId")

    class Config:
        populate_by_name = True
