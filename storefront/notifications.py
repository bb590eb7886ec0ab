"""Transient user-facing notifications."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from textual.app import App

logger = logging.getLogger(__name__)

_SEVERITY_BY_TYPE: dict[str, str] = {
    "success": "information",
    "info": "information",
    "warning": "warning",
    "error": "error",
}


@dataclass(frozen=True)
class Notification:
    """A message that was shown to the user."""

    message: str
    type: str
    duration: int | None = None


class Notifier:
    """Fire-and-forget notifications, rendered as Textual toasts when attached to an app."""

    def __init__(self, app: App | None = None) -> None:
        self.app = app
        self.history: list[Notification] = []

    def attach(self, app: App) -> None:
        self.app = app

    def show(self, message: str, type: str = "info", duration: int | None = None) -> None:
        """Show a message; `duration` is in milliseconds, None keeps the app default."""
        if type not in _SEVERITY_BY_TYPE:
            raise ValueError(f"Unknown notification type: {type!r}")

        notification = Notification(message=message, type=type, duration=duration)
        self.history.append(notification)
        logger.info(f"notify type={type} message={message!r}")

        if self.app is None:
            return
        if duration is None:
            self.app.notify(message, severity=_SEVERITY_BY_TYPE[type])
        else:
            self.app.notify(message, severity=_SEVERITY_BY_TYPE[type], timeout=duration / 1000)

    @property
    def last(self) -> Notification | None:
        if not self.history:
            return None
        return self.history[-1]
