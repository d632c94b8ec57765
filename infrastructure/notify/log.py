"""Fallback Notifier used when no webhook is configured: records metadata only."""

from schemas.dto.requests.contact import ContactRequest
from shared.logging import email_domain, get_logger

log = get_logger(__name__)


class LogNotifier:
    name = "log"

    async def notify(self, submission: ContactRequest) -> None:
        log.info(
            "contact_submission_received",
            email_domain=email_domain(submission.email),
            message_length=len(submission.message),
        )
