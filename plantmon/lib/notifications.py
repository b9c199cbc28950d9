"""User-facing alert notifications.

Provides an abstract notification interface with pluggable backends. The
client logs notifications by default; embedders can route them anywhere
with CallbackNotifier.
"""

import inspect
from abc import ABC, abstractmethod
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import override

from plantmon.lib.config import ALERT_TITLE, Settings, get_settings
from plantmon.logging import get_logger

logger = get_logger("lib.notifications")


@dataclass(frozen=True, slots=True)
class Notification:
    """A message to surface to the user."""

    message: str
    title: str = ALERT_TITLE

    def __str__(self) -> str:
        return f"{self.title}: {self.message}"


class AbstractNotifier(ABC):
    """Abstract base class for notification backends."""

    @abstractmethod
    async def send(self, notification: Notification) -> None:
        """Deliver a notification."""


class LogNotifier(AbstractNotifier):
    """Writes notifications to the application log."""

    @override
    async def send(self, notification: Notification) -> None:
        logger.warning("%s", notification)


type NotificationCallback = (
    Callable[[Notification], None] | Callable[[Notification], Awaitable[None]]
)


class CallbackNotifier(AbstractNotifier):
    """Hands notifications to a sync or async callable."""

    def __init__(self, callback: NotificationCallback) -> None:
        self._callback = callback

    @override
    async def send(self, notification: Notification) -> None:
        result = self._callback(notification)
        if inspect.isawaitable(result):
            await result


class NoOpNotifier(AbstractNotifier):
    """No-op notifier that logs but doesn't deliver notifications."""

    @override
    async def send(self, notification: Notification) -> None:
        logger.info(
            "Notifications disabled, skipping: %s", notification.message
        )


def get_notifier(settings: Settings | None = None) -> AbstractNotifier:
    """Factory function to get the configured notifier."""
    settings = settings or get_settings()
    if not settings.enable_notifications:
        return NoOpNotifier()
    return LogNotifier()
