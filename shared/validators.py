"""
Contact form field validators — framework-agnostic, pure functions.

Used both by the relay (server-side checks before the provider call) and by
the form client (blur-time field feedback), so the two always agree on what
a valid submission looks like.
"""

from __future__ import annotations

import re
from typing import Optional

REQUIRED_MESSAGE = "This field is required."
INVALID_EMAIL_MESSAGE = "Please enter a valid email address."

# local-part@domain with at least one dot after the @, no whitespace
_EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")


def is_valid_email(email: str) -> bool:
    """Return True if *email* looks like ``local@domain.tld``."""
    return bool(_EMAIL_PATTERN.match(email))


def validate_field(
    value: Optional[str],
    *,
    required: bool = False,
    kind: str = "text",
) -> Optional[str]:
    """Validate a single form field.

    Args:
        value: The raw field value; ``None`` is treated as empty.
        required: Whether an empty (after trimming) value is an error.
        kind: ``"email"`` enables the email pattern check; any other kind
            only gets the required check.

    Returns:
        The user-facing error message, or ``None`` when the value is valid.
    """
    trimmed = (value or "").strip()
    if required and not trimmed:
        return REQUIRED_MESSAGE
    if kind == "email" and trimmed and not is_valid_email(trimmed):
        return INVALID_EMAIL_MESSAGE
    return None


def validate_contact_fields(name: str, email: str, message: str) -> dict[str, str]:
    """Validate the three contact form fields.

    Returns:
        Mapping of field name to error message for every failing field,
        in form order. Empty when the submission is valid.
    """
    errors: dict[str, str] = {}
    for field_name, value, kind in (
        ("name", name, "text"),
        ("email", email, "email"),
        ("message", message, "text"),
    ):
        error = validate_field(value, required=True, kind=kind)
        if error:
            errors[field_name] = error
    return errors
