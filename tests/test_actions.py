"""
Sleep Tracker - User Action Tests
Run with: python3 -m pytest tests/
"""

from datetime import datetime

from sleep_tracker import actions
from sleep_tracker.db import MemoryStorage
from sleep_tracker.reminders import ReminderScheduler
from sleep_tracker.store import RecordStore

BED = datetime(2025, 11, 27, 22, 45)
WAKE = datetime(2025, 11, 28, 6, 30)


class StubScheduler:
    def __init__(self, ok):
        self.ok = ok
        self.minutes = None

    def schedule_sleepiness_reminder(self, minutes):
        self.minutes = minutes
        return self.ok


class TestOvernightActions:
    def test_bed_time_message(self):
        result = actions.save_bed_time(RecordStore(MemoryStorage()), BED)
        assert result.ok
        assert result.message == "Saved sleep time: 11/27/2025, 10:45 PM. You can log wake-up later."

    def test_wake_without_bed_time(self):
        result = actions.save_wake_time(RecordStore(MemoryStorage()), WAKE)
        assert not result.ok
        assert result.message == "You need to save a sleep time first."

    def test_wake_before_bed_time(self):
        store = RecordStore(MemoryStorage())
        actions.save_bed_time(store, BED)
        result = actions.save_wake_time(store, datetime(2025, 11, 27, 20, 0))
        assert not result.ok
        assert result.message == "Wake-up time must be after your sleep time."
        assert store.get_pending_start() == BED

    def test_wake_saves_night(self):
        store = RecordStore(MemoryStorage())
        actions.save_bed_time(store, BED)
        result = actions.save_wake_time(store, WAKE)
        assert result.ok
        assert result.message == "Overnight sleep saved for Thu, Nov 27, 2025"
        assert actions.latest_night_text(store) == (
            "Thu, Nov 27, 2025 · 10:45 PM – 06:30 AM · 7.8 h · Okay night"
        )

    def test_latest_night_text_without_data(self):
        assert actions.latest_night_text(RecordStore(MemoryStorage())) == "No data yet"


class TestSleepinessActions:
    def test_add_sleepiness(self):
        store = RecordStore(MemoryStorage())
        result = actions.add_sleepiness(store, 5, datetime(2025, 11, 28, 14, 5))
        assert result.message == "Logged sleepiness level 5 at 11/28/2025, 2:05 PM."
        assert len(store.get_all_sleepiness()) == 1

    def test_schedule_reminder_converts_hours(self):
        scheduler = StubScheduler(ok=True)
        result = actions.schedule_reminder(scheduler, 4)
        assert scheduler.minutes == 240
        assert result.message == "Reminder set for about 4 hour(s) from now to log your sleepiness."

    def test_schedule_reminder_failure(self):
        result = actions.schedule_reminder(StubScheduler(ok=False), 1.5)
        assert not result.ok
        assert result.message == "Could not schedule a reminder on this device."


class TestStreakText:
    def test_pluralization(self):
        assert actions.streak_text(0) == "0 days"
        assert actions.streak_text(1) == "1 day"
        assert actions.streak_text(3) == "3 days"
