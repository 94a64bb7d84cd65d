"""Publish/subscribe notification service (toasts).

Components publish through an injected ``NotificationService`` and
whatever renders toasts subscribes to it.
"""
from __future__ import annotations

import itertools
from dataclasses import dataclass
from typing import Callable

from jobboard.log import get_logger

log = get_logger(__name__)

NOTIFICATION_TYPES = ("success", "error", "warning", "info")
DEFAULT_DURATION_MS = 4000


@dataclass(frozen=True)
class Notification:
    id: str
    type: str
    title: str
    message: str | None = None
    duration: int = DEFAULT_DURATION_MS


Subscriber = Callable[[Notification], None]


class NotificationService:
    def __init__(self) -> None:
        self._subscribers: list[Subscriber] = []
        self._counter = itertools.count(1)

    def subscribe(self, callback: Subscriber) -> Callable[[], None]:
        """Register ``callback``; returns a function that removes it again."""
        self._subscribers.append(callback)

        def unsubscribe() -> None:
            if callback in self._subscribers:
                self._subscribers.remove(callback)

        return unsubscribe

    def publish(
        self,
        type: str,
        title: str,
        message: str | None = None,
        duration: int = DEFAULT_DURATION_MS,
    ) -> Notification:
        if type not in NOTIFICATION_TYPES:
            raise ValueError(f"Unknown notification type {type!r}")
        note = Notification(
            id=f"toast_{next(self._counter)}",
            type=type,
            title=title,
            message=message,
            duration=duration,
        )
        for callback in list(self._subscribers):
            try:
                callback(note)
            except Exception as exc:
                log.error("Notification subscriber %r failed: %s", callback, exc)
        return note

    def success(self, title: str, message: str | None = None, duration: int = DEFAULT_DURATION_MS) -> Notification:
        return self.publish("success", title, message, duration)

    def error(self, title: str, message: str | None = None, duration: int = DEFAULT_DURATION_MS) -> Notification:
        return self.publish("error", title, message, duration)

    def warning(self, title: str, message: str | None = None, duration: int = DEFAULT_DURATION_MS) -> Notification:
        return self.publish("warning", title, message, duration)

    def info(self, title: str, message: str | None = None, duration: int = DEFAULT_DURATION_MS) -> Notification:
        return self.publish("info", title, message, duration)
