"""
Sleep Tracker - Dashboard Tests
Run with: python3 -m pytest tests/
"""

from datetime import datetime

import pytest
from dash import Dash
from dash.exceptions import PreventUpdate

from sleep_tracker import config
from sleep_tracker.dash_app import theme
from sleep_tracker.dash_app import app as dash_app_module
from sleep_tracker.dash_app.app import create_app
from sleep_tracker.dash_app.history_callbacks import delete_entry
from sleep_tracker.dash_app.layouts import (
    TAB_HISTORY,
    TAB_SLEEPINESS,
    build_root_layout,
    header_subtitle,
    resolve_tab_layout,
)
from sleep_tracker.dash_app.overnight_callbacks import INVALID_TIME_MESSAGE, overnight_action
from sleep_tracker.dash_app.sleepiness_callbacks import reminder_action, sleepiness_action
from sleep_tracker.dash_app.utils import nightly_hours_figure, parse_datetime_input
from sleep_tracker.db import MemoryStorage, StorageUnavailableError
from sleep_tracker.metrics import nightly_durations
from sleep_tracker.reminders import ReminderScheduler
from sleep_tracker.store import RecordStore


class FakePlatform:
    def check_permission(self):
        return True

    def request_permission(self):
        return True

    def schedule(self, notification_id, at, title, body):
        pass

    def cancel(self, notification_id):
        pass


class BrokenStorage:
    def get(self, key):
        raise StorageUnavailableError("gone")

    def set(self, key, value):
        raise StorageUnavailableError("gone")

    def remove(self, key):
        raise StorageUnavailableError("gone")


class TestTheme:
    def test_saved_preference_wins(self):
        storage = MemoryStorage({config.THEME_KEY: "day"})
        assert theme.initial_theme(storage, datetime(2025, 11, 28, 23, 0)) == "day"

    def test_falls_back_to_time_of_day(self):
        storage = MemoryStorage({config.THEME_KEY: "purple"})
        assert theme.initial_theme(storage, datetime(2025, 11, 28, 6, 59)) == "night"
        assert theme.initial_theme(storage, datetime(2025, 11, 28, 7, 0)) == "day"
        assert theme.initial_theme(None, datetime(2025, 11, 28, 18, 59)) == "day"
        assert theme.initial_theme(None, datetime(2025, 11, 28, 19, 0)) == "night"

    def test_unreadable_storage_falls_back(self):
        assert theme.initial_theme(BrokenStorage(), datetime(2025, 11, 28, 12, 0)) == "day"

    def test_toggle_persists(self):
        storage = MemoryStorage()
        assert theme.toggle_theme(storage, "night") == "day"
        assert storage.get(config.THEME_KEY) == "day"
        assert theme.toggle_theme(storage, "day") == "night"

    def test_toggle_without_working_storage(self):
        assert theme.toggle_theme(BrokenStorage(), "day") == "night"


class TestControllers:
    def test_parse_datetime_input(self):
        assert parse_datetime_input("2025-11-27T22:45") == datetime(2025, 11, 27, 22, 45)
        assert parse_datetime_input("") is None
        assert parse_datetime_input("tonight") is None

    def test_overnight_flow(self):
        store = RecordStore(MemoryStorage())
        message, *_ = overnight_action(store, "save-wake", None, "2025-11-28T06:30")
        assert message == "You need to save a sleep time first."

        overnight_action(store, "save-bed", "2025-11-27T22:45", None)
        message, streak, latest, pending = overnight_action(store, "save-wake", None, "2025-11-28T06:30")
        assert message == "Overnight sleep saved for Thu, Nov 27, 2025"
        assert streak == "1 day"
        assert latest.endswith("Okay night")
        assert pending == "No bed time saved"

    def test_overnight_invalid_input(self):
        store = RecordStore(MemoryStorage())
        message, *_ = overnight_action(store, "save-bed", "", None)
        assert message == INVALID_TIME_MESSAGE
        assert store.get_pending_start() is None

    def test_overnight_unknown_trigger(self):
        with pytest.raises(PreventUpdate):
            overnight_action(RecordStore(MemoryStorage()), None, None, None)

    def test_sleepiness_action(self):
        store = RecordStore(MemoryStorage())
        assert sleepiness_action(store, 4, "2025-11-28T14:00").startswith("Logged sleepiness level 4")
        assert sleepiness_action(store, 4, None) == INVALID_TIME_MESSAGE
        assert len(store.get_all_sleepiness()) == 1

    def test_reminder_action(self):
        scheduler = ReminderScheduler(FakePlatform())
        assert reminder_action(scheduler, "cancel-reminder", None) == "No reminder is pending."
        assert reminder_action(scheduler, "schedule-reminder", 0) == "Enter how many hours from now to be reminded."
        assert reminder_action(scheduler, "schedule-reminder", 2).startswith("Reminder set for about 2 hour(s)")
        assert reminder_action(scheduler, "cancel-reminder", None) == "Reminder cancelled."

    def test_delete_entry(self):
        store = RecordStore(MemoryStorage())
        store.log_sleepiness(2, datetime(2025, 11, 28, 14, 0))
        assert delete_entry(store, {"type": "delete-session", "index": 0}) is False
        assert delete_entry(store, {"type": "delete-sleepiness", "index": 3}) is False
        assert delete_entry(store, None) is False
        assert delete_entry(store, {"type": "delete-sleepiness", "index": 0}) is True
        assert store.get_all_sleepiness() == []


class TestLayouts:
    def test_header_subtitles(self):
        assert header_subtitle(TAB_SLEEPINESS) == "Track how sleepy you feel during the day."
        assert header_subtitle(TAB_HISTORY) == "Review or delete your past logs."

    def test_root_layout_carries_theme(self):
        layout = build_root_layout("day")
        assert layout.className == "app-container theme-day"
        assert layout.style["backgroundColor"] == theme.THEMES["day"]["bg"]

    def test_tabs_render(self):
        store = RecordStore(MemoryStorage())
        store.begin_session(datetime(2025, 11, 27, 22, 45))
        store.complete_session(datetime(2025, 11, 28, 6, 30))
        for tab in ("tab-overnight", TAB_SLEEPINESS, TAB_HISTORY):
            assert resolve_tab_layout(tab, store, "night") is not None

    def test_history_figure(self):
        assert nightly_hours_figure(nightly_durations([])).layout.title.text == "No nights logged yet"

    def test_create_app(self):
        store = RecordStore(MemoryStorage())
        app = create_app(store, ReminderScheduler(FakePlatform()), MemoryStorage())
        assert isinstance(app, Dash)
        assert app.title == "Sleep Tracker"

    def test_main_serves_one_request_at_a_time(self, monkeypatch):
        served = {}
        monkeypatch.setattr("sys.argv", ["sleep-tracker-dashboard", "--port", "8123"])
        monkeypatch.setattr(dash_app_module.db, "open_storage", lambda: MemoryStorage())
        monkeypatch.setattr(Dash, "run", lambda self, **kwargs: served.update(kwargs))
        dash_app_module.main()
        assert served["port"] == 8123
        assert served["threaded"] is False
