"""Transient user-facing notifications."""

import logging
from collections import deque
from dataclasses import dataclass
from enum import Enum
from typing import Deque, List, Optional

from rich.console import Console

logger = logging.getLogger(__name__)


class NotificationLevel(str, Enum):
    SUCCESS = "success"
    INFO = "info"
    ERROR = "error"


_LOG_LEVELS = {
    NotificationLevel.SUCCESS: logging.INFO,
    NotificationLevel.INFO: logging.INFO,
    NotificationLevel.ERROR: logging.WARNING,
}


@dataclass(frozen=True)
class Notification:
    level: NotificationLevel
    message: str


class Notifier:
    """Collects notifications and hands each one to ``_emit``.

    The base class only logs and remembers the most recent messages;
    subclasses decide how to display them.
    """

    def __init__(self, max_recent: int = 20):
        self._recent: Deque[Notification] = deque(maxlen=max_recent)

    @property
    def recent(self) -> List[Notification]:
        return list(self._recent)

    @property
    def last(self) -> Optional[Notification]:
        return self._recent[-1] if self._recent else None

    def clear(self) -> None:
        self._recent.clear()

    def notify(self, level: NotificationLevel, message: str) -> Notification:
        notification = Notification(level, message)
        self._recent.append(notification)
        logger.log(_LOG_LEVELS[level], f"[{level.value}] {message}")
        self._emit(notification)
        return notification

    def success(self, message: str) -> Notification:
        return self.notify(NotificationLevel.SUCCESS, message)

    def info(self, message: str) -> Notification:
        return self.notify(NotificationLevel.INFO, message)

    def error(self, message: str) -> Notification:
        return self.notify(NotificationLevel.ERROR, message)

    def _emit(self, notification: Notification) -> None:
        pass


class ConsoleNotifier(Notifier):
    """Prints notifications to the terminal with rich."""

    STYLES = {
        NotificationLevel.SUCCESS: "green",
        NotificationLevel.INFO: "cyan",
        NotificationLevel.ERROR: "bold red",
    }

    def __init__(self, console: Optional[Console] = None, max_recent: int = 20):
        super().__init__(max_recent=max_recent)
        self.console = console or Console(stderr=True)

    def _emit(self, notification: Notification) -> None:
        style = self.STYLES[notification.level]
        self.console.print(notification.message, style=style, markup=False, highlight=False)
