"""
Sleep Tracker - Reminder Scheduler Tests
Run with: python3 -m pytest tests/
"""

import threading
from datetime import datetime, timedelta

from sleep_tracker import config
from sleep_tracker.reminders import ReminderScheduler, TimerNotificationPlatform

NOW = datetime(2025, 11, 28, 9, 0)


class FakePlatform:
    def __init__(self, granted=True, grant_on_request=True, fail_schedule=False, fail_check=False):
        self.granted = granted
        self.grant_on_request = grant_on_request
        self.fail_schedule = fail_schedule
        self.fail_check = fail_check
        self.requests = 0
        self.scheduled = {}
        self.cancelled = []

    def check_permission(self):
        if self.fail_check:
            raise RuntimeError("platform missing")
        return self.granted

    def request_permission(self):
        self.requests += 1
        self.granted = self.grant_on_request
        return self.granted

    def schedule(self, notification_id, at, title, body):
        if self.fail_schedule:
            raise RuntimeError("cannot schedule")
        self.scheduled[notification_id] = (at, title, body)

    def cancel(self, notification_id):
        self.cancelled.append(notification_id)
        self.scheduled.pop(notification_id, None)


def make_scheduler(platform):
    return ReminderScheduler(platform, clock=lambda: NOW)


class TestPermission:
    def test_granted_without_prompt(self):
        platform = FakePlatform(granted=True)
        assert make_scheduler(platform).request_permission() is True
        assert platform.requests == 0

    def test_prompts_when_not_granted(self):
        platform = FakePlatform(granted=False, grant_on_request=True)
        assert make_scheduler(platform).request_permission() is True
        assert platform.requests == 1

    def test_platform_error_reports_failure(self):
        assert make_scheduler(FakePlatform(fail_check=True)).request_permission() is False


class TestSchedule:
    def test_schedules_at_now_plus_minutes(self):
        platform = FakePlatform()
        scheduler = make_scheduler(platform)
        assert scheduler.schedule_sleepiness_reminder(240) is True
        ((at, title, body),) = platform.scheduled.values()
        assert at == NOW + timedelta(hours=4)
        assert title == config.REMINDER_TITLE
        assert body == config.REMINDER_BODY
        assert scheduler.pending.at == at

    def test_denied_permission(self):
        platform = FakePlatform(granted=False, grant_on_request=False)
        scheduler = make_scheduler(platform)
        assert scheduler.schedule_sleepiness_reminder(30) is False
        assert platform.scheduled == {}
        assert scheduler.pending is None

    def test_platform_error(self):
        scheduler = make_scheduler(FakePlatform(fail_schedule=True))
        assert scheduler.schedule_sleepiness_reminder(30) is False
        assert scheduler.pending is None

    def test_reschedule_keeps_single_reminder(self):
        platform = FakePlatform()
        scheduler = make_scheduler(platform)
        scheduler.schedule_sleepiness_reminder(30)
        first_id = scheduler.pending.notification_id
        assert scheduler.reschedule(60) is True
        assert platform.cancelled == [first_id]
        assert list(platform.scheduled) == [scheduler.pending.notification_id]
        assert scheduler.pending.at == NOW + timedelta(minutes=60)

    def test_cancel(self):
        platform = FakePlatform()
        scheduler = make_scheduler(platform)
        scheduler.schedule_sleepiness_reminder(30)
        assert scheduler.cancel() is True
        assert scheduler.pending is None
        assert scheduler.cancel() is False

    def test_expired_reminder_is_not_pending(self):
        clock = {"now": NOW}
        scheduler = ReminderScheduler(FakePlatform(), clock=lambda: clock["now"])
        scheduler.schedule_sleepiness_reminder(10)
        clock["now"] = NOW + timedelta(minutes=11)
        assert scheduler.pending is None


class TestTimerPlatform:
    def test_fires_callback(self):
        delivered = threading.Event()
        received = []

        def deliver(title, body):
            received.append((title, body))
            delivered.set()

        platform = TimerNotificationPlatform(deliver=deliver)
        scheduler = ReminderScheduler(platform)
        assert scheduler.schedule_sleepiness_reminder(0) is True
        assert delivered.wait(timeout=5)
        assert received == [(config.REMINDER_TITLE, config.REMINDER_BODY)]

    def test_cancel_prevents_delivery(self):
        received = []
        platform = TimerNotificationPlatform(deliver=lambda title, body: received.append(title))
        platform.schedule(1, datetime.now() + timedelta(minutes=5), "t", "b")
        platform.cancel(1)
        platform.wait(1, timeout=0.1)
        assert received == []
