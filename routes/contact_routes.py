"""
Contact endpoint.

POST /api/contact — verify the CAPTCHA token and accept the submission.

    200 {"success": true,  "message": "Form submitted successfully!"}
    400 {"success": false, "message": ...}  missing token, invalid field,
                                            or CAPTCHA rejected
    500 {"success": false, "message": ...}  provider unavailable or
                                            unexpected failure

Errors are raised as AppError subclasses and rendered by the handlers in
errors.py. The notification is scheduled as a background task, so it runs
after the response is sent and cannot change it.
"""

from __future__ import annotations

from fastapi import APIRouter, BackgroundTasks, Depends, Request

from config import AppSettings
from dependencies import get_contact_service, get_settings
from schemas.dto.requests.contact import ContactRequest
from schemas.dto.responses.common import ErrorResponse, MessageResponse
from services.contact_service import ContactService
from shared.ip_utils import get_client_ip

router = APIRouter(prefix="/api", tags=["contact"])


@router.post(
    "/contact",
    response_model=MessageResponse,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
async def submit_contact_form(
    body: ContactRequest,
    request: Request,
    background_tasks: BackgroundTasks,
    service: ContactService = Depends(get_contact_service),
    settings: AppSettings = Depends(get_settings),
) -> MessageResponse:
    remote_ip = get_client_ip(
        request, trust_proxy_headers=settings.trust_proxy_headers
    )
    response = await service.submit(body, remote_ip=remote_ip or None)
    background_tasks.add_task(service.notify_safely, body)
    return response
