"""User notifications — success and error messages from form submission."""

from __future__ import annotations

import enum
import logging
from collections.abc import Callable
from typing import Protocol

from rich.console import Console
from rich.markup import escape

logger = logging.getLogger(__name__)


class Severity(enum.Enum):
    SUCCESS = "success"
    ERROR = "error"


class Notifier(Protocol):
    """Fire-and-forget message sink."""

    def notify(self, message: str, severity: Severity) -> None: ...


_STYLES = {
    Severity.SUCCESS: "green",
    Severity.ERROR: "red",
}


class ConsoleNotifier:
    """Prints notifications with rich and optionally invokes a callback."""

    def __init__(
        self,
        console: Console | None = None,
        callback: Callable[[str, Severity], None] | None = None,
    ) -> None:
        self._console = console or Console(stderr=True)
        self._callback = callback

    def notify(self, message: str, severity: Severity) -> None:
        if severity is Severity.ERROR:
            logger.warning("Notify [%s]: %s", severity.value, message)
        else:
            logger.info("Notify [%s]: %s", severity.value, message)
        style = _STYLES[severity]
        self._console.print(f"[{style}]{escape(message)}[/{style}]")
        if self._callback:
            self._callback(message, severity)
