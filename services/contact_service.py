"""
Contact submission service — the relay's only operation.

Flow for one submission:
1. token present?          no  → ValidationError (provider never contacted)
2. fields valid?           no  → ValidationError for the first failing field
3. provider verdict        unavailable → VerificationUnavailableError
                           rejected    → CaptchaRejectedError
4. accepted                → MessageResponse(success=True); the caller hands
                             the submission to notify_safely() after responding

The service holds only its collaborators; nothing about a submission
outlives the call.
"""

from __future__ import annotations

from typing import Optional

from errors import (
    GENERIC_SERVER_ERROR,
    AppError,
    CaptchaRejectedError,
    ValidationError,
)
from infrastructure.captcha.protocol import CaptchaProvider
from infrastructure.notify.protocol import Notifier
from schemas.dto.requests.contact import ContactRequest
from schemas.dto.responses.common import MessageResponse
from shared.logging import email_domain, get_logger
from shared.validators import validate_contact_fields

log = get_logger(__name__)

MISSING_TOKEN_MESSAGE = "Please complete the CAPTCHA."
REJECTED_MESSAGE = "Failed CAPTCHA verification."
SUCCESS_MESSAGE = "Form submitted successfully!"


class ContactService:
    def __init__(self, captcha: CaptchaProvider, notifier: Notifier) -> None:
        self._captcha = captcha
        self._notifier = notifier

    @property
    def captcha_name(self) -> str:
        return self._captcha.name

    @property
    def notifier_name(self) -> str:
        return self._notifier.name

    async def submit(
        self, submission: ContactRequest, remote_ip: Optional[str] = None
    ) -> MessageResponse:
        """Verify *submission*'s CAPTCHA token and classify the outcome.

        Raises:
            ValidationError: missing token or invalid field (HTTP 400).
            CaptchaRejectedError: provider denied the token (HTTP 400).
            VerificationUnavailableError: no verdict obtainable (HTTP 500).
            AppError: any other failure, with a generic message (HTTP 500).
        """
        if not submission.captcha_token:
            raise ValidationError(MISSING_TOKEN_MESSAGE, field="token")

        field_errors = validate_contact_fields(
            submission.name, submission.email, submission.message
        )
        if field_errors:
            field, message = next(iter(field_errors.items()))
            raise ValidationError(message, field=field)

        try:
            result = await self._captcha.verify(
                submission.captcha_token, remote_ip=remote_ip
            )
            if not result.verified:
                raise CaptchaRejectedError(REJECTED_MESSAGE)
        except AppError:
            raise
        except Exception as e:
            log.error(
                "contact_submission_error",
                provider=self._captcha.name,
                error=str(e),
                error_type=type(e).__name__,
                exc_info=e,
            )
            raise AppError(GENERIC_SERVER_ERROR) from e

        log.info(
            "contact_submission_accepted",
            provider=self._captcha.name,
            email_domain=email_domain(submission.email),
            message_length=len(submission.message),
        )
        return MessageResponse(success=True, message=SUCCESS_MESSAGE)

    async def notify_safely(self, submission: ContactRequest) -> None:
        """Hand *submission* to the notifier; never raises."""
        try:
            await self._notifier.notify(submission)
        except Exception as e:
            log.error(
                "contact_notification_failed",
                notifier=self._notifier.name,
                error=str(e),
                error_type=type(e).__name__,
            )
