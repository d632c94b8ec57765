"""
Observer bus standing in for DOM event listeners.

Handlers are registered per ``(target, event_type)`` pair, the way a browser
listener is attached to one element for one event. A failing handler is
logged and does not stop the remaining handlers, matching DOM dispatch.
"""

from __future__ import annotations

from collections import defaultdict
from typing import Any, Callable

from shared.logging import get_logger

log = get_logger(__name__)

Handler = Callable[[Any], None]


class EventBus:
    def __init__(self) -> None:
        self._handlers: dict[tuple[str, str], list[Handler]] = defaultdict(list)

    def subscribe(
        self, target: str, event_type: str, handler: Handler
    ) -> Callable[[], None]:
        """Register *handler*; returns a callable that unregisters it."""
        key = (target, event_type)
        self._handlers[key].append(handler)

        def unsubscribe() -> None:
            handlers = self._handlers.get(key)
            if handlers and handler in handlers:
                handlers.remove(handler)

        return unsubscribe

    def emit(self, target: str, event_type: str, payload: Any = None) -> int:
        """Call every handler registered for the pair, in registration order.

        Returns:
            The number of handlers invoked.
        """
        handlers = list(self._handlers.get((target, event_type), ()))
        for handler in handlers:
            try:
                handler(payload)
            except Exception as e:
                log.error(
                    "event_handler_failed",
                    target=target,
                    event_type=event_type,
                    error=str(e),
                    error_type=type(e).__name__,
                    exc_info=e,
                )
        return len(handlers)
