"""User actions shared by the command line and the dashboard.

Each action validates its input against the store, performs the mutation and
returns the message the user should see.
"""
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from . import metrics
from .models import format_local
from .reminders import ReminderScheduler
from .store import RecordStore


@dataclass(frozen=True)
class ActionResult:
    ok: bool
    message: str


def save_bed_time(store: RecordStore, start: datetime) -> ActionResult:
    store.begin_session(start)
    return ActionResult(True, f"Saved sleep time: {format_local(start)}. You can log wake-up later.")


def save_wake_time(store: RecordStore, end: datetime) -> ActionResult:
    start = store.get_pending_start()
    if start is None:
        return ActionResult(False, "You need to save a sleep time first.")

    session = store.complete_session(end)
    if session is None:
        return ActionResult(False, "Wake-up time must be after your sleep time.")
    return ActionResult(True, f"Overnight sleep saved for {session.date_string()}")


def add_sleepiness(store: RecordStore, value: int, when: Optional[datetime] = None) -> ActionResult:
    sample = store.log_sleepiness(value, when)
    return ActionResult(True, f"Logged sleepiness level {sample.value} at {sample.date_string()}.")


def schedule_reminder(scheduler: ReminderScheduler, hours: float) -> ActionResult:
    if scheduler.schedule_sleepiness_reminder(hours * 60):
        return ActionResult(
            True,
            f"Reminder set for about {hours:g} hour(s) from now to log your sleepiness.",
        )
    return ActionResult(False, "Could not schedule a reminder on this device.")


def streak_text(count: int) -> str:
    return f"{count} day" if count == 1 else f"{count} days"


def latest_night_text(store: RecordStore) -> str:
    """Summary of the most recent night with its rest label."""
    latest = store.latest_session()
    label = metrics.latest_label(store.get_all_sessions())
    if latest is None:
        return label
    return f"{latest.date_string()} · {latest.summary_string()} · {label}"
