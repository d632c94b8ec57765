"""
Page-level UI state: the colour theme and the highlighted navigation link.

One UiState owns both; the theme is persisted through a KeyValueStore under
``preferredTheme`` and every change is announced on the EventBus:

    ("document", "themeChanged")         payload: {"theme": <name>}
    ("navigation", "activeLinkChanged")  payload: {"section": <id or None>}
"""

from __future__ import annotations

from typing import Optional

from form_client.events import EventBus
from form_client.storage import KeyValueStore

THEMES: tuple[str, ...] = ("dark", "light", "custom-light")
DEFAULT_THEME = "dark"
THEME_STORAGE_KEY = "preferredTheme"

THEME_BODY_CLASSES: dict[str, Optional[str]] = {
    "dark": None,
    "light": "light-mode",
    "custom-light": "custom-light-mode",
}
THEME_LABELS = {"dark": "Dark", "light": "Light", "custom-light": "Custom"}
THEME_ICONS = {"dark": "fa-moon", "light": "fa-sun", "custom-light": "fa-palette"}

DEFAULT_PAGE = "index.html"


class UiState:
    def __init__(self, store: KeyValueStore, bus: Optional[EventBus] = None) -> None:
        self._store = store
        self.bus = bus or EventBus()
        self.theme = DEFAULT_THEME
        self.active_section: Optional[str] = None
        self.current_page = DEFAULT_PAGE

    def load(self) -> str:
        """Restore the saved theme, falling back to the default."""
        saved = self._store.load(THEME_STORAGE_KEY)
        self.set_theme(saved if saved in THEMES else DEFAULT_THEME)
        return self.theme

    def set_theme(self, theme: str) -> None:
        if theme not in THEMES:
            raise ValueError(f"Unknown theme: {theme!r}")
        self.theme = theme
        self._store.save(THEME_STORAGE_KEY, theme)
        self.bus.emit("document", "themeChanged", {"theme": theme})

    def cycle_theme(self) -> str:
        """Advance to the next theme in THEMES order, wrapping around."""
        index = (THEMES.index(self.theme) + 1) % len(THEMES)
        self.set_theme(THEMES[index])
        return self.theme

    @property
    def body_class(self) -> Optional[str]:
        return THEME_BODY_CLASSES[self.theme]

    @property
    def toggle_label(self) -> str:
        return THEME_LABELS[self.theme]

    @property
    def toggle_icon(self) -> str:
        return THEME_ICONS[self.theme]

    # ── Navigation ───────────────────────────────────────────────────────────

    def set_active_section(self, section_id: Optional[str]) -> None:
        """Record the section currently in view; no event when unchanged."""
        if section_id == self.active_section:
            return
        self.active_section = section_id
        self.bus.emit("navigation", "activeLinkChanged", {"section": section_id})

    def is_section_link_active(self, href: str) -> bool:
        return self.active_section is not None and href == f"#{self.active_section}"

    def set_current_page(self, path: str) -> str:
        """Derive the current page file name from a URL path."""
        self.current_page = path.rsplit("/", 1)[-1] or DEFAULT_PAGE
        return self.current_page

    def is_page_link_active(self, href: str) -> bool:
        return href == self.current_page
