"""Sleepiness reminders on top of a host notification platform."""
from __future__ import annotations

import itertools
import logging
import threading
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Callable, Optional, Protocol

from . import config

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Reminder:
    notification_id: int
    at: datetime
    title: str
    body: str


class NotificationPlatform(Protocol):
    def check_permission(self) -> bool: ...

    def request_permission(self) -> bool: ...

    def schedule(self, notification_id: int, at: datetime, title: str, body: str) -> None: ...

    def cancel(self, notification_id: int) -> None: ...


class ReminderScheduler:
    """Keeps at most one pending sleepiness reminder on a notification platform.

    Every platform call may fail; failures are logged and reported to the
    caller as ``False``. Nothing is retried.
    """

    def __init__(self, platform: NotificationPlatform, *, clock: Callable[[], datetime] = datetime.now):
        self.platform = platform
        self._clock = clock
        self._ids = itertools.count(1)
        self._pending: Optional[Reminder] = None

    @property
    def pending(self) -> Optional[Reminder]:
        if self._pending is not None and self._pending.at <= self._clock():
            self._pending = None
        return self._pending

    def request_permission(self) -> bool:
        try:
            if self.platform.check_permission():
                return True
            return bool(self.platform.request_permission())
        except Exception:
            logger.exception("Error requesting notification permission")
            return False

    def schedule_sleepiness_reminder(self, minutes_from_now: float) -> bool:
        """Schedule the reminder ``minutes_from_now`` minutes out, replacing any pending one."""
        if not self.request_permission():
            logger.warning("Notifications are not allowed on this platform")
            return False

        if self.pending is not None and not self.cancel():
            return False

        reminder = Reminder(
            notification_id=next(self._ids),
            at=self._clock() + timedelta(minutes=minutes_from_now),
            title=config.REMINDER_TITLE,
            body=config.REMINDER_BODY,
        )
        try:
            self.platform.schedule(reminder.notification_id, reminder.at, reminder.title, reminder.body)
        except Exception:
            logger.exception("Error scheduling notification")
            return False

        self._pending = reminder
        logger.info("Sleepiness reminder %d set for %s", reminder.notification_id, reminder.at.isoformat())
        return True

    def reschedule(self, minutes_from_now: float) -> bool:
        return self.schedule_sleepiness_reminder(minutes_from_now)

    def cancel(self) -> bool:
        """Cancel the pending reminder; ``False`` if there was none or the platform failed."""
        reminder = self._pending
        if reminder is None:
            return False
        try:
            self.platform.cancel(reminder.notification_id)
        except Exception:
            logger.exception("Error cancelling notification %d", reminder.notification_id)
            return False
        self._pending = None
        return True


def _log_delivery(title: str, body: str) -> None:
    logger.info("%s: %s", title, body)


class TimerNotificationPlatform:
    """Local platform that fires notifications from background timers.

    Permission is always granted. Delivery goes through ``deliver(title, body)``.
    """

    def __init__(
        self,
        deliver: Callable[[str, str], None] = _log_delivery,
        *,
        clock: Callable[[], datetime] = datetime.now,
    ):
        self._deliver = deliver
        self._clock = clock
        self._timers: dict[int, threading.Timer] = {}
        self._lock = threading.Lock()

    def check_permission(self) -> bool:
        return True

    def request_permission(self) -> bool:
        return True

    def schedule(self, notification_id: int, at: datetime, title: str, body: str) -> None:
        delay = max((at - self._clock()).total_seconds(), 0.0)
        timer = threading.Timer(delay, self._fire, args=(notification_id, title, body))
        timer.daemon = True
        with self._lock:
            self._timers[notification_id] = timer
        timer.start()

    def _fire(self, notification_id: int, title: str, body: str) -> None:
        with self._lock:
            self._timers.pop(notification_id, None)
        self._deliver(title, body)

    def cancel(self, notification_id: int) -> None:
        with self._lock:
            timer = self._timers.pop(notification_id, None)
        if timer is not None:
            timer.cancel()

    def wait(self, notification_id: int, timeout: Optional[float] = None) -> None:
        """Block until the notification fires or is cancelled."""
        with self._lock:
            timer = self._timers.get(notification_id)
        if timer is not None:
            timer.join(timeout)
