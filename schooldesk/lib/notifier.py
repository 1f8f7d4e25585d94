"""User-facing toast notifications."""

from __future__ import annotations

import logging
import time
from collections import deque
from typing import Any

from schooldesk.constants import DEFAULT_TOAST_DURATION
from schooldesk.lib.events import EventSystem

VARIANTS = ("success", "info", "warning", "error")


class Notifier:
    """Logs a message and emits it as a ``notification`` event for connected browsers.

    Fire-and-forget: callers never depend on the outcome.
    """

    def __init__(
        self,
        events: EventSystem,
        hide_notifications: bool = False,
        default_duration: int = DEFAULT_TOAST_DURATION,
        history_size: int = 50,
    ) -> None:
        self._events = events
        self.hide_notifications = hide_notifications
        self.default_duration = default_duration
        self._history: deque[dict[str, Any]] = deque(maxlen=history_size)

    def show(
        self,
        title: str,
        message: str,
        variant: str = "info",
        duration: int | None = None,
    ) -> None:
        if variant not in VARIANTS:
            variant = "info"

        if variant == "error":
            logging.error(f"{title}: {message}")
        elif variant == "warning":
            logging.warning(f"{title}: {message}")
        else:
            logging.info(f"{title}: {message}")

        toast = {
            "title": title,
            "message": message,
            "variant": variant,
            "duration": self.default_duration if duration is None else duration,
            "timestamp": time.time(),
        }
        self._history.append(toast)
        if not self.hide_notifications:
            self._events.emit("notification", toast)

    def recent(self, limit: int | None = None) -> list[dict[str, Any]]:
        """Most recent toasts, newest last."""
        items = list(self._history)
        return items[-limit:] if limit else items

    def clear(self) -> None:
        self._history.clear()
