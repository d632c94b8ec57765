from unittest.mock import AsyncMock, MagicMock

import httpx
import pytest
from fastapi.testclient import TestClient

from app import create_app
from config import AppSettings, CaptchaSettings, NotifierSettings
from infrastructure.captcha.siteverify import SiteVerifyCaptchaProvider
from infrastructure.http_client import HttpClient

VERIFY_URL = "https://www.google.com/recaptcha/api/siteverify"


@pytest.fixture
def app_settings():
    return AppSettings(
        captcha=CaptchaSettings(captcha_secret="test-secret"),
        notifier=NotifierSettings(contact_webhook=""),
    )


@pytest.fixture
def notifier():
    fake = MagicMock()
    fake.name = "log"
    fake.notify = AsyncMock()
    return fake


@pytest.fixture
def provider_calls():
    return []


@pytest.fixture
def make_client(app_settings, notifier, provider_calls):
    """Build a TestClient whose captcha provider talks to *handler*.

    The real SiteVerifyCaptchaProvider is used; only the transport under its
    HttpClient is replaced, so no network connection is made.
    """

    def _make(handler, **client_kwargs) -> TestClient:
        def recording_handler(request: httpx.Request) -> httpx.Response:
            provider_calls.append(request)
            return handler(request)

        captcha = SiteVerifyCaptchaProvider(
            name="recaptcha",
            verify_url=VERIFY_URL,
            secret="test-secret",
            http_client=HttpClient(transport=httpx.MockTransport(recording_handler)),
        )
        app = create_app(app_settings, captcha=captcha, notifier=notifier)
        return TestClient(app, **client_kwargs)

    return _make
