"""
Request DTO for the contact endpoint.

ContactRequest — POST /api/contact
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class ContactRequest(BaseModel):
    """Request body for POST /api/contact.

    Every field defaults to empty so that a missing value is reported by the
    service with a specific message (a missing ``token`` must be rejected
    before the provider is contacted) rather than as a generic schema error.
    The CAPTCHA response travels as ``token`` on the wire.
    """

    model_config = ConfigDict(populate_by_name=True, str_strip_whitespace=True)

    name: str = ""
    email: str = ""
    message: str = ""
    captcha_token: str = Field(default="", alias="token")
