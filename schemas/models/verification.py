"""
Verdict returned by a captcha provider's siteverify endpoint.

Lives only for the duration of one request; never persisted.
"""

from __future__ import annotations

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, StrictBool


class VerificationResult(BaseModel):
    """Normalized siteverify response.

    ``error_codes`` is populated from the provider's ``error-codes`` array,
    which reCAPTCHA, hCaptcha and Turnstile all use.
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    verified: StrictBool = Field(alias="success")
    error_codes: list[str] = Field(default_factory=list, alias="error-codes")
    hostname: Optional[str] = None

    @classmethod
    def from_provider(cls, payload: Any) -> "VerificationResult":
        """Build from the provider's decoded JSON body.

        Raises:
            pydantic.ValidationError: the body is not an object or has no
                boolean ``success`` field.
        """
        return cls.model_validate(payload)
