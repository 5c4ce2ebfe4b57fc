"""User-notification hooks for the presentation layer."""
from __future__ import annotations

import logging
from collections import deque
from dataclasses import dataclass
from typing import Literal, Protocol

logger = logging.getLogger(__name__)

Level = Literal["success", "error"]


class Notifier(Protocol):
    """Contract for toast-style notification sinks."""

    def success(self, message: str) -> None: ...

    def error(self, message: str) -> None: ...


@dataclass(slots=True)
class Notification:
    level: Level
    message: str


class LoggingNotifier:
    """Fallback notifier that only writes to the log."""

    def success(self, message: str) -> None:
        logger.info("notify: %s", message)

    def error(self, message: str) -> None:
        logger.warning("notify: %s", message)


class QueuedNotifier(LoggingNotifier):
    """Keeps notifications until the presentation layer drains them."""

    def __init__(self, maxlen: int = 200) -> None:
        self._items: deque[Notification] = deque(maxlen=maxlen)

    def success(self, message: str) -> None:
        super().success(message)
        self._items.append(Notification("success", message))

    def error(self, message: str) -> None:
        super().error(message)
        self._items.append(Notification("error", message))

    def peek(self) -> list[Notification]:
        return list(self._items)

    def drain(self) -> list[Notification]:
        items = list(self._items)
        self._items.clear()
        return items
