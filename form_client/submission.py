"""
Contact form submission lifecycle.

    idle ──submit──▶ submitting ──▶ success ─┐
      ▲                   │                   │ next submit
      │                   └──────▶ failure ──┘ re-enters submitting

While ``submitting`` the submit control is disabled and further submits are
ignored; that is the only guard against duplicate in-flight requests. The
request runs to completion (or its timeout) before the control is enabled
again.

An invalid form is never sent: every failing field is marked and the flow
stays where it was.
"""

from __future__ import annotations

import enum
from typing import Optional

import httpx
from pydantic import ValidationError as PydanticValidationError

from form_client.fields import ContactForm
from infrastructure.http_client import HttpClient
from schemas.dto.responses.common import MessageResponse
from shared.logging import get_logger

log = get_logger(__name__)

SENDING_MESSAGE = "Sending message..."
GENERIC_FAILURE_MESSAGE = "Failed to send message. Please try again."


class SubmissionState(str, enum.Enum):
    IDLE = "idle"
    SUBMITTING = "submitting"
    SUCCESS = "success"
    FAILURE = "failure"


class SubmissionFlow:
    """Drives one contact form against the relay endpoint.

    Emits ``("form", "state")`` on the form's bus with the new state on
    every transition.
    """

    def __init__(
        self, form: ContactForm, http_client: HttpClient, endpoint_url: str
    ) -> None:
        self.form = form
        self._http = http_client
        self._endpoint_url = endpoint_url
        self.state = SubmissionState.IDLE
        self.status_message: Optional[str] = None

    @property
    def submit_enabled(self) -> bool:
        return self.state is not SubmissionState.SUBMITTING

    @property
    def status_class(self) -> Optional[str]:
        return {
            SubmissionState.SUBMITTING: "info",
            SubmissionState.SUCCESS: "success",
            SubmissionState.FAILURE: "error",
        }.get(self.state)

    def _transition(self, state: SubmissionState, message: Optional[str]) -> None:
        self.state = state
        self.status_message = message
        self.form.bus.emit("form", "state", state)

    async def submit(self, token: str) -> Optional[MessageResponse]:
        """Submit the form with the CAPTCHA *token*.

        Returns:
            The outcome shown to the user, or ``None`` when nothing was sent
            (already submitting, or the form is invalid).
        """
        if self.state is SubmissionState.SUBMITTING:
            log.debug("submit_ignored_in_flight")
            return None
        if not self.form.validate_all():
            log.debug("submit_blocked_invalid", fields=sorted(self.form.errors()))
            return None

        self._transition(SubmissionState.SUBMITTING, SENDING_MESSAGE)
        try:
            response = await self._http.post(
                self._endpoint_url, json=self.form.payload(token)
            )
        except httpx.HTTPError as e:
            log.warning(
                "contact_submit_transport_error",
                error=str(e),
                error_type=type(e).__name__,
            )
            return self._fail(None)

        outcome = self._parse(response)
        if outcome is not None and outcome.success and response.is_success:
            self.form.reset()
            self._transition(SubmissionState.SUCCESS, outcome.message)
            return outcome
        return self._fail(outcome.message if outcome is not None else None)

    def _parse(self, response: httpx.Response) -> Optional[MessageResponse]:
        try:
            return MessageResponse.model_validate(response.json())
        except (ValueError, PydanticValidationError):
            log.warning(
                "contact_submit_unreadable_response",
                status_code=response.status_code,
            )
            return None

    def _fail(self, message: Optional[str]) -> MessageResponse:
        outcome = MessageResponse(
            success=False, message=message or GENERIC_FAILURE_MESSAGE
        )
        self._transition(SubmissionState.FAILURE, outcome.message)
        return outcome
