"""User-facing notifications.

Callers plug in whatever surface shows messages to the operator (a toast
widget, a terminal, a chat channel). ``LoggingNotifier`` is the default.
"""

from __future__ import annotations

import logging
from typing import Protocol

logger = logging.getLogger(__name__)


class Notifier(Protocol):
    """Something that can show a short status message to the operator."""

    def success(self, message: str) -> None: ...

    def error(self, message: str) -> None: ...

    def info(self, message: str) -> None: ...

    def warning(self, message: str) -> None: ...


class LoggingNotifier:
    """Notifier that writes every message to the ``logging`` system."""

    def __init__(self, log: logging.Logger | None = None) -> None:
        self._log = log or logger

    def success(self, message: str) -> None:
        self._log.info("%s", message)

    def error(self, message: str) -> None:
        self._log.error("%s", message)

    def info(self, message: str) -> None:
        self._log.info("%s", message)

    def warning(self, message: str) -> None:
        self._log.warning("%s", message)


class RecordingNotifier:
    """Notifier that keeps ``(level, message)`` pairs, newest last."""

    def __init__(self) -> None:
        self.messages: list[tuple[str, str]] = []

    def success(self, message: str) -> None:
        self.messages.append(("success", message))

    def error(self, message: str) -> None:
        self.messages.append(("error", message))

    def info(self, message: str) -> None:
        self.messages.append(("info", message))

    def warning(self, message: str) -> None:
        self.messages.append(("warning", message))

    def of_level(self, level: str) -> list[str]:
        return [message for lvl, message in self.messages if lvl == level]

    def clear(self) -> None:
        self.messages.clear()
