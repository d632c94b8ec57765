"""
Common response DTOs.

MessageResponse  — {success, message} shape returned by POST /api/contact
ErrorResponse    — error shape produced by AppError.to_dict()
HealthResponse   — GET /health
"""

from __future__ import annotations

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict


class MessageResponse(BaseModel):
    """Normalized result of a contact submission."""

    model_config = ConfigDict(populate_by_name=True)

    success: bool
    message: str


class ErrorResponse(MessageResponse):
    """Standard error JSON body produced by the AppError exception handlers."""

    success: bool = False
    code: str
    field: Optional[str] = None
    details: Optional[Any] = None


class HealthResponse(BaseModel):
    """Response body for GET /health."""

    model_config = ConfigDict(populate_by_name=True)

    status: str
    checks: dict[str, str]
