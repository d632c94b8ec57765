"""Notifier protocol — the sink a verified contact submission is handed to."""

from typing import Protocol

from schemas.dto.requests.contact import ContactRequest


class Notifier(Protocol):
    name: str

    async def notify(self, submission: ContactRequest) -> None:
        """Deliver *submission*. Must not raise; failures are logged."""
        ...
