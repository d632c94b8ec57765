"""Discord webhook implementation of Notifier.

Posts one embed per verified contact submission. Delivery is best-effort:
every failure is logged and swallowed so it can never change the response
already sent to the form.
"""

from datetime import datetime, timezone
from typing import Any

from infrastructure.http_client import HttpClient
from schemas.dto.requests.contact import ContactRequest
from shared.logging import email_domain, get_logger

log = get_logger(__name__)

_EMBED_COLOR = 9103397
# Discord rejects embed field values longer than 1024 characters
_FIELD_LIMIT = 1024 - len("``````")


def _code_block(value: str) -> str:
    return f"```{value[:_FIELD_LIMIT]}```"


def build_contact_embed(submission: ContactRequest) -> dict[str, Any]:
    return {
        "embeds": [
            {
                "title": "New Contact Message ✉️",
                "color": _EMBED_COLOR,
                "fields": [
                    {"name": "Name", "value": _code_block(submission.name)},
                    {"name": "Email", "value": _code_block(submission.email)},
                    {"name": "Message", "value": _code_block(submission.message)},
                ],
                "timestamp": datetime.now(timezone.utc).isoformat(),
                "footer": {"text": "portfolio contact form"},
            }
        ]
    }


class DiscordWebhookNotifier:
    name = "discord"

    def __init__(self, webhook_url: str, http_client: HttpClient) -> None:
        self._webhook_url = webhook_url
        self._http = http_client

    async def notify(self, submission: ContactRequest) -> None:
        try:
            response = await self._http.post(
                self._webhook_url, json=build_contact_embed(submission)
            )
        except Exception as e:
            log.error(
                "discord_webhook_request_failed",
                error=str(e),
                error_type=type(e).__name__,
            )
            return

        if response.status_code in (200, 204):
            log.info(
                "contact_notification_sent",
                notifier=self.name,
                email_domain=email_domain(submission.email),
            )
            return
        log.warning(
            "discord_webhook_failed",
            status_code=response.status_code,
            response_text=response.text[:200],
        )
