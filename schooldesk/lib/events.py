"""Minimal publish/subscribe relay between forms and pages."""

from __future__ import annotations

from typing import Any, Callable


class EventSystem:
    """Minimal event dispatcher that decouples form leaves from the pages they update.

    Handlers are called synchronously in registration order; exceptions bubble up normally.
    """

    def __init__(self):
        self._handlers: dict[str, list[Callable[..., Any]]] = {}

    def on(self, event_name: str, handler: Callable[..., Any]) -> None:
        """Register a handler for an event."""
        if event_name not in self._handlers:
            self._handlers[event_name] = []
        self._handlers[event_name].append(handler)

    def off(self, event_name: str, handler: Callable[..., Any]) -> bool:
        """Unregister a handler. Returns False if it was not registered."""
        handlers = self._handlers.get(event_name, [])
        if handler not in handlers:
            return False
        handlers.remove(handler)
        if not handlers:
            del self._handlers[event_name]
        return True

    def has_handlers(self, event_name: str) -> bool:
        return bool(self._handlers.get(event_name))

    def emit(self, event_name: str, *args, **kwargs) -> None:
        """Call all handlers registered for this event."""
        # Copy so a handler may unsubscribe itself while being called
        for handler in list(self._handlers.get(event_name, [])):
            handler(*args, **kwargs)
