"""
Application configuration via pydantic-settings.

All settings are loaded from environment variables (and .env file).

The captcha secret is the only required value. It is read from CAPTCHA_SECRET,
with RECAPTCHA_SECRET_KEY and HCAPTCHA_SECRET accepted as aliases so existing
deployments keep working. A missing or blank secret fails settings
construction: the relay refuses to start rather than verify with an empty
secret.
"""

from __future__ import annotations

from typing import Literal, Optional

from pydantic import AliasChoices, Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

CaptchaProviderName = Literal["recaptcha", "hcaptcha", "turnstile"]

SITEVERIFY_URLS: dict[str, str] = {
    "recaptcha": "https://www.google.com/recaptcha/api/siteverify",
    "hcaptcha": "https://hcaptcha.com/siteverify",
    "turnstile": "https://challenges.cloudflare.com/turnstile/v0/siteverify",
}


class CaptchaSettings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    captcha_secret: str = Field(
        validation_alias=AliasChoices(
            "captcha_secret", "recaptcha_secret_key", "hcaptcha_secret"
        )
    )
    captcha_provider: CaptchaProviderName = "recaptcha"
    # Overrides the provider's default siteverify endpoint when set
    captcha_verify_url: str = ""
    captcha_timeout_seconds: float = 5.0

    @field_validator("captcha_secret")
    @classmethod
    def _secret_not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("captcha secret must not be empty")
        return v

    @property
    def verify_url(self) -> str:
        return self.captcha_verify_url or SITEVERIFY_URLS[self.captcha_provider]


class NotifierSettings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    # Discord webhook; empty means submissions are only logged
    contact_webhook: str = ""
    webhook_timeout_seconds: float = 5.0


class LoggingSettings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    log_level: str = "INFO"
    log_format: str = "console"  # "json" in production


class SentrySettings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    sentry_dsn: str = ""
    sentry_send_pii: bool = False
    sentry_traces_sample_rate: float = 0.1


class AppSettings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    # Core
    env: str = "development"
    app_name: str = "portfolio-contact-relay"
    host: str = "0.0.0.0"
    port: int = 5000

    # CORS — the static site is served from a different origin
    cors_origins: list[str] = ["*"]

    # Resolve the submitter's IP from proxy headers for the siteverify call
    trust_proxy_headers: bool = True

    # OpenAPI docs URL (None disables the docs UI in production)
    docs_url: Optional[str] = "/docs"

    # Sub-configs (composed via model_validator below)
    captcha: Optional[CaptchaSettings] = None
    notifier: Optional[NotifierSettings] = None
    logging: Optional[LoggingSettings] = None
    sentry: Optional[SentrySettings] = None

    @model_validator(mode="after")
    def _populate_sub_configs(self) -> "AppSettings":
        # Populate sub-configs from the same env/dotenv source
        if self.captcha is None:
            self.captcha = CaptchaSettings()
        if self.notifier is None:
            self.notifier = NotifierSettings()
        if self.logging is None:
            self.logging = LoggingSettings()
        if self.sentry is None:
            self.sentry = SentrySettings()

        return self

    @property
    def is_production(self) -> bool:
        return self.env == "production"
