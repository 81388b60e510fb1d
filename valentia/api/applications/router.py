from typing import List, Optional

from fastapi import APIRouter, BackgroundTasks, Depends, File, Form, Header, HTTPException, UploadFile
from sqlalchemy.ext.asyncio import AsyncSession

from valentia.core.exceptions import ServiceError
from valentia.db.session import get_db
from valentia.services.mailer import Mailer, get_mailer
from valentia.services.storage import StorageBackend, get_storage

from .schemas import ApplicationSubmitResponse, IncomingFile
from . import service

router = APIRouter(prefix="/api/application", tags=["applications"])


@router.post("", response_model=ApplicationSubmitResponse)
async def submit_application(
    background_tasks: BackgroundTasks,
    name: Optional[str] = Form(None),
    email: Optional[str] = Form(None),
    phone: Optional[str] = Form(None),
    course: Optional[str] = Form(None),
    message: Optional[str] = Form(None),
    language: Optional[str] = Form(None),
    attachments: Optional[List[UploadFile]] = File(None),
    accept_language: Optional[str] = Header(None),
    db: AsyncSession = Depends(get_db),
    storage: StorageBackend = Depends(get_storage),
    mailer: Mailer = Depends(get_mailer),
) -> ApplicationSubmitResponse:
    """Course application with up to 5 attachments. Emails go out after the response."""
    try:
        payload = service.parse_submission(
            name=name,
            email=email,
            phone=phone,
            course=course,
            message=message,
            language=language,
        )
        service.check_upload_limits(attachments or [])
        files: List[IncomingFile] = []
        for upload in attachments or []:
            if not upload.filename:
                continue
            files.append(
                IncomingFile(
                    filename=upload.filename,
                    content_type=upload.content_type or "application/octet-stream",
                    content=await upload.read(),
                )
            )
        response, application, stored = await service.submit_application(
            db, storage, payload, files, accept_language=accept_language
        )
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)

    background_tasks.add_task(
        service.send_application_emails,
        mailer,
        application_id=application.application_id,
        name=application.full_name,
        email=application.email,
        phone=application.phone,
        course=application.course,
        language=application.language,
        message=application.message,
        files=stored,
    )
    return response
