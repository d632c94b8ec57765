"""
Contact form client.

Field validation, the submission state machine, and the page UI state the
portfolio site keeps alongside the form. Browser-independent: DOM events map
onto EventBus subscriptions and persistence onto a KeyValueStore.
"""

from .events import EventBus
from .fields import ContactForm, FormField
from .storage import InMemoryStore, JsonFileStore, KeyValueStore
from .submission import SubmissionFlow, SubmissionState
from .ui_state import UiState

__all__ = [
    "ContactForm",
    "EventBus",
    "FormField",
    "InMemoryStore",
    "JsonFileStore",
    "KeyValueStore",
    "SubmissionFlow",
    "SubmissionState",
    "UiState",
]
