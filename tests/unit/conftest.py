"""
Unit test configuration.

Patches dotenv so pydantic-settings never reads the project's real .env file
during unit tests. Tests control config exclusively through monkeypatch.setenv().
"""

import pytest

_CAPTCHA_SECRET_VARS = ("CAPTCHA_SECRET", "RECAPTCHA_SECRET_KEY", "HCAPTCHA_SECRET")


@pytest.fixture(autouse=True)
def disable_dotenv_loading(monkeypatch):
    """Prevent pydantic-settings from loading .env files in all unit tests."""
    import pydantic_settings.sources.providers.dotenv as ps_dotenv

    monkeypatch.setattr(ps_dotenv, "dotenv_values", lambda *a, **kw: {})


@pytest.fixture
def without_captcha_secret(monkeypatch):
    """Remove every accepted spelling of the captcha secret from the env."""
    for var in _CAPTCHA_SECRET_VARS:
        monkeypatch.delenv(var, raising=False)
    return monkeypatch


@pytest.fixture
def with_captcha_secret(without_captcha_secret):
    """Set the required CAPTCHA_SECRET so AppSettings can be instantiated."""
    without_captcha_secret.setenv("CAPTCHA_SECRET", "test-secret")
    return without_captcha_secret
