"""
Health check endpoint.

GET /health — reports which collaborators the relay was started with.
Rules:
- The captcha provider is mandatory; startup fails without its secret, so a
  running relay always reports it as configured.
- No webhook configured → "degraded" (200): submissions are accepted but
  only logged.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends

from dependencies import get_contact_service
from schemas.dto.responses.common import HealthResponse
from services.contact_service import ContactService

router = APIRouter(tags=["health"])


@router.get("/health", response_model=HealthResponse)
async def health_check(
    service: ContactService = Depends(get_contact_service),
) -> HealthResponse:
    checks: dict[str, str] = {
        "captcha": service.captcha_name,
        "notifier": service.notifier_name,
    }
    overall = "degraded" if service.notifier_name == "log" else "healthy"
    return HealthResponse(status=overall, checks=checks)
