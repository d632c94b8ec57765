"""CaptchaProvider protocol — services depend on this, not the concrete implementation."""

from typing import Optional, Protocol

from schemas.models.verification import VerificationResult


class CaptchaProvider(Protocol):
    name: str

    async def verify(
        self, token: str, remote_ip: Optional[str] = None
    ) -> VerificationResult:
        """Redeem *token* with the provider.

        Raises:
            VerificationUnavailableError: the provider could not give a verdict.
        """
        ...
