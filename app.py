"""
FastAPI application factory.
create_app() is the single entry point for building the app.
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

import sentry_sdk
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from config import AppSettings
from errors import register_error_handlers
from infrastructure.captcha.protocol import CaptchaProvider
from infrastructure.captcha.siteverify import SiteVerifyCaptchaProvider
from infrastructure.http_client import HttpClient
from infrastructure.notify.discord import DiscordWebhookNotifier
from infrastructure.notify.log import LogNotifier
from infrastructure.notify.protocol import Notifier
from middleware.request_logging import setup_logging_middleware
from routes.contact_routes import router as contact_router
from routes.health_routes import router as health_router
from services.contact_service import ContactService
from shared.logging import get_logger, setup_logging

log = get_logger(__name__)


def create_app(
    settings: Optional[AppSettings] = None,
    *,
    captcha: Optional[CaptchaProvider] = None,
    notifier: Optional[Notifier] = None,
) -> FastAPI:
    """Create and return a fully configured FastAPI application.

    ``captcha`` and ``notifier`` replace the collaborators built from
    settings; tests use them to avoid network calls.
    """
    if settings is None:
        settings = AppSettings()

    setup_logging(settings.logging)

    # Initialise Sentry before anything else so it captures startup errors
    if settings.sentry.sentry_dsn:
        sentry_sdk.init(
            dsn=settings.sentry.sentry_dsn,
            send_default_pii=settings.sentry.sentry_send_pii,
            traces_sample_rate=settings.sentry.sentry_traces_sample_rate,
            environment=settings.env,
        )

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        # ── Startup ──────────────────────────────────────────────────────────
        clients: list[HttpClient] = []

        captcha_provider = captcha
        if captcha_provider is None:
            captcha_http = HttpClient(timeout=settings.captcha.captcha_timeout_seconds)
            clients.append(captcha_http)
            captcha_provider = SiteVerifyCaptchaProvider(
                name=settings.captcha.captcha_provider,
                verify_url=settings.captcha.verify_url,
                secret=settings.captcha.captcha_secret,
                http_client=captcha_http,
            )

        contact_notifier = notifier
        if contact_notifier is None:
            if settings.notifier.contact_webhook:
                webhook_http = HttpClient(
                    timeout=settings.notifier.webhook_timeout_seconds
                )
                clients.append(webhook_http)
                contact_notifier = DiscordWebhookNotifier(
                    settings.notifier.contact_webhook, webhook_http
                )
            else:
                contact_notifier = LogNotifier()

        app.state.settings = settings
        app.state.contact_service = ContactService(captcha_provider, contact_notifier)
        log.info(
            "relay_started",
            captcha_provider=captcha_provider.name,
            notifier=contact_notifier.name,
            port=settings.port,
        )

        yield

        # ── Shutdown ─────────────────────────────────────────────────────────
        for client in clients:
            await client.aclose()

    app = FastAPI(
        title=settings.app_name,
        version="1.0.0",
        docs_url=settings.docs_url,
        redoc_url=None,
        lifespan=lifespan,
    )

    # The static site posts from its own origin
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["POST", "GET", "OPTIONS"],
        allow_headers=["*"],
    )
    setup_logging_middleware(app)

    register_error_handlers(app)
    app.include_router(contact_router)
    app.include_router(health_router)

    return app
