"""siteverify implementation of CaptchaProvider.

reCAPTCHA, hCaptcha and Turnstile share the same contract: a form-encoded
POST of ``secret``, ``response`` and optional ``remoteip``, answered with a
JSON object carrying a boolean ``success`` and an ``error-codes`` array.

Every way of not getting a verdict (transport error, timeout, non-200
status, non-JSON or malformed body) collapses into
VerificationUnavailableError. A verdict of ``success=false`` is returned,
not raised; the service decides what a rejection means.
"""

from typing import Optional

import httpx
from pydantic import ValidationError as PydanticValidationError

from errors import VerificationUnavailableError
from infrastructure.http_client import HttpClient
from schemas.models.verification import VerificationResult
from shared.logging import get_logger

log = get_logger(__name__)

UNAVAILABLE_MESSAGE = "Server error verifying CAPTCHA"


class SiteVerifyCaptchaProvider:
    def __init__(
        self,
        name: str,
        verify_url: str,
        secret: str,
        http_client: HttpClient,
    ) -> None:
        if not secret:
            raise ValueError("captcha secret must not be empty")
        self.name = name
        self._verify_url = verify_url
        self._secret = secret
        self._http = http_client

    async def verify(
        self, token: str, remote_ip: Optional[str] = None
    ) -> VerificationResult:
        data = {"secret": self._secret, "response": token}
        if remote_ip:
            data["remoteip"] = remote_ip

        try:
            response = await self._http.post(self._verify_url, data=data)
        except httpx.TimeoutException as e:
            log.error("captcha_request_timeout", provider=self.name, error=str(e))
            raise VerificationUnavailableError(UNAVAILABLE_MESSAGE) from e
        except httpx.HTTPError as e:
            log.error(
                "captcha_request_failed",
                provider=self.name,
                error=str(e),
                error_type=type(e).__name__,
            )
            raise VerificationUnavailableError(UNAVAILABLE_MESSAGE) from e

        if response.status_code != 200:
            log.error(
                "captcha_api_error",
                provider=self.name,
                status_code=response.status_code,
                response_text=response.text[:200],
            )
            raise VerificationUnavailableError(UNAVAILABLE_MESSAGE)

        try:
            result = VerificationResult.from_provider(response.json())
        except (ValueError, PydanticValidationError) as e:
            log.error(
                "captcha_response_malformed",
                provider=self.name,
                error_type=type(e).__name__,
                response_text=response.text[:200],
            )
            raise VerificationUnavailableError(UNAVAILABLE_MESSAGE) from e

        if not result.verified:
            log.warning(
                "captcha_verification_failed",
                provider=self.name,
                error_codes=result.error_codes,
                hostname=result.hostname,
            )
        return result
