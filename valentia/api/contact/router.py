from fastapi import APIRouter, Depends, HTTPException

from valentia.core.exceptions import ServiceError
from valentia.services.mailer import Mailer, get_mailer

from .schemas import ContactRequest, ContactResponse
from . import service

router = APIRouter(prefix="/api/contact", tags=["contact"])


@router.post("", response_model=ContactResponse)
async def submit_contact(
    payload: ContactRequest,
    mailer: Mailer = Depends(get_mailer),
) -> ContactResponse:
    """Send the academy notification and the submitter's auto-reply."""
    try:
        return await service.submit_contact(mailer, payload)
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)
