"""
Contact form fields and their validation lifecycle.

A field is validated when it loses focus. Any edit clears its error marker
and inline message immediately; it is validated again on the next blur.
State changes are announced on the EventBus with the field name as target:

    ("email", "invalid")  payload: the error message
    ("email", "cleared")  payload: None
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from form_client.events import EventBus
from shared.validators import validate_field

ERROR_CLASS = "error"


@dataclass
class FormField:
    name: str
    kind: str = "text"
    required: bool = True
    value: str = ""
    error: Optional[str] = None

    @property
    def has_error(self) -> bool:
        return self.error is not None

    @property
    def css_classes(self) -> set[str]:
        return {ERROR_CLASS} if self.has_error else set()

    def validate(self) -> Optional[str]:
        self.error = validate_field(self.value, required=self.required, kind=self.kind)
        return self.error


class ContactForm:
    """The name / email / message form."""

    def __init__(self, bus: Optional[EventBus] = None) -> None:
        self.bus = bus or EventBus()
        self.fields: dict[str, FormField] = {
            "name": FormField("name"),
            "email": FormField("email", kind="email"),
            "message": FormField("message"),
        }

    def __getitem__(self, name: str) -> FormField:
        return self.fields[name]

    def blur(self, name: str) -> bool:
        """Validate one field as it loses focus. Returns True when valid."""
        field = self.fields[name]
        error = field.validate()
        if error:
            self.bus.emit(name, "invalid", error)
            return False
        return True

    def edit(self, name: str, value: str) -> None:
        """Set a field's value, clearing any error first."""
        field = self.fields[name]
        if field.has_error:
            field.error = None
            self.bus.emit(name, "cleared")
        field.value = value

    def validate_all(self) -> bool:
        """Validate every field, marking each failing one."""
        results = [self.blur(name) for name in self.fields]
        return all(results)

    def errors(self) -> dict[str, str]:
        return {
            name: field.error
            for name, field in self.fields.items()
            if field.error is not None
        }

    def reset(self) -> None:
        for field in self.fields.values():
            field.value = ""
            field.error = None

    def payload(self, token: str) -> dict[str, str]:
        """JSON body for POST /api/contact."""
        body = {name: field.value.strip() for name, field in self.fields.items()}
        body["token"] = token
        return body
