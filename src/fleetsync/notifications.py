"""User-facing notification channel.

The synchronization layer reports the outcome of every ``add``, ``update``
and ``remove`` (and failed refreshes) as a :class:`Notification`. What a
UI does with them (toasts, banners, a status line) is up to the notifier.
"""

from __future__ import annotations

import logging
from enum import StrEnum
from typing import Protocol

from pydantic import BaseModel, ConfigDict

_logger = logging.getLogger(__name__)


class NotificationVariant(StrEnum):
    DEFAULT = "default"
    DESTRUCTIVE = "destructive"


class Notification(BaseModel):
    model_config = ConfigDict(frozen=True)

    title: str
    description: str = ""
    variant: NotificationVariant = NotificationVariant.DEFAULT

    @property
    def is_error(self) -> bool:
        return self.variant == NotificationVariant.DESTRUCTIVE


class Notifier(Protocol):
    def notify(self, notification: Notification) -> None:
        ...


class LoggingNotifier:
    """Default notifier: writes notifications to the ``fleetsync.notifications`` logger."""

    def notify(self, notification: Notification) -> None:
        level = logging.WARNING if notification.is_error else logging.INFO
        _logger.log(level, "%s: %s", notification.title, notification.description)


class CollectingNotifier:
    """Keeps every notification in order, for UIs that poll."""

    def __init__(self) -> None:
        self.notifications: list[Notification] = []

    def notify(self, notification: Notification) -> None:
        self.notifications.append(notification)

    def drain(self) -> list[Notification]:
        pending, self.notifications = self.notifications, []
        return pending

    @property
    def errors(self) -> list[Notification]:
        return [n for n in self.notifications if n.is_error]
