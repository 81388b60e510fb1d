from typing import Optional

from pydantic import BaseModel, Field


class ContactRequest(BaseModel):
    """Public contact form. Required fields are checked in the service so the error message matches the form."""

    name: Optional[str] = Field(None, max_length=255)
    email: Optional[str] = Field(None, max_length=255)
    phone: Optional[str] = Field(None, max_length=50)
    message: Optional[str] = Field(None, max_length=10000)
    course: Optional[str] = Field(None, max_length=100)
    # any locale string; normalized to a supported language, English otherwise
    language: Optional[str] = None


class ContactResponse(BaseModel):
    success: bool = True
    message: str
