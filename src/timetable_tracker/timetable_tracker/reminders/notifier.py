from __future__ import annotations

import logging
import threading
from datetime import timedelta
from typing import Optional, Protocol

from ..common.clock import Clock
from ..core.constants import NOTIFICATION_DISMISS_SECONDS
from .model import Notification
from .timers import TimerHandle, TimerQueue

logger = logging.getLogger(__name__)


class NotificationSink(Protocol):
    def show(self, notification: Notification) -> None:
        raise NotImplementedError

    def dismiss(self) -> None:
        raise NotImplementedError


class LoggingNotificationSink:
    """Default sink: writes notifications to the application log."""

    def show(self, notification: Notification) -> None:
        logger.info("Notification: %s - %s", notification.title, notification.body)

    def dismiss(self) -> None:
        logger.info("Notification dismissed")


class NotificationCenter:
    """Single active-notification slot.

    A new notification replaces the one on display. Each shown notification
    auto-dismisses after `dismiss_after` unless dismissed earlier.
    """

    def __init__(
        self,
        timers: TimerQueue,
        clock: Clock,
        *,
        sink: Optional[NotificationSink] = None,
        dismiss_after: timedelta = timedelta(seconds=NOTIFICATION_DISMISS_SECONDS),
    ):
        self._timers = timers
        self._clock = clock
        self._sink = sink or LoggingNotificationSink()
        self._dismiss_after = dismiss_after
        self._active: Optional[Notification] = None
        self._dismiss_timer: Optional[TimerHandle] = None
        self._lock = threading.RLock()

    @property
    def active(self) -> Optional[Notification]:
        return self._active

    def show(self, notification: Notification) -> None:
        with self._lock:
            self._cancel_dismiss_timer()
            self._active = notification
            self._sink.show(notification)
            self._dismiss_timer = self._timers.schedule(
                self._clock.now() + self._dismiss_after,
                self.dismiss,
                label="notification-auto-dismiss",
            )

    def dismiss(self) -> None:
        with self._lock:
            self._cancel_dismiss_timer()
            if self._active is None:
                return
            self._active = None
            self._sink.dismiss()

    def shutdown(self) -> None:
        with self._lock:
            self._cancel_dismiss_timer()

    def _cancel_dismiss_timer(self) -> None:
        if self._dismiss_timer is not None:
            self._timers.cancel(self._dismiss_timer)
            self._dismiss_timer = None
