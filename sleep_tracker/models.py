"""Record types logged by the sleep tracker."""
from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import datetime
from typing import Union
from zoneinfo import ZoneInfo

from . import config

LOCAL_TZ = ZoneInfo(config.TIMEZONE)

STANFORD_SCALE = {
    1: "Feeling active, vital, alert, or wide awake",
    2: "Functioning at high levels, but not at peak; able to concentrate",
    3: "Awake, but relaxed; responsive but not fully alert",
    4: "Somewhat foggy, let down",
    5: "Foggy; losing interest in remaining awake; slowed down",
    6: "Sleepy, woozy, fighting sleep; prefer to lie down",
    7: "No longer fighting sleep, sleep onset soon; having dream-like thoughts",
}


def local_time(dt: datetime) -> datetime:
    """Return ``dt`` as local wall time; naive values are assumed to be local already."""

    if dt.tzinfo is None:
        return dt
    return dt.astimezone(LOCAL_TZ)


def wall_time(dt: datetime) -> datetime:
    """Naive local wall time, so stored and entered timestamps always compare."""
    return local_time(dt).replace(tzinfo=None)


def round_tenths(hours: float) -> float:
    """Round half up to one decimal, as shown to the user."""
    return math.floor(hours * 10 + 0.5) / 10


def format_local(dt: datetime) -> str:
    """e.g. ``"11/28/2025, 10:32 PM"``"""
    when = local_time(dt)
    hour = when.hour % 12 or 12
    return f"{when.month}/{when.day}/{when.year}, {hour}:{when:%M %p}"


@dataclass(frozen=True)
class OvernightSession:
    """One completed night, from bed time to wake time."""

    start: datetime
    end: datetime

    def duration_hours(self) -> float:
        return (self.end - self.start).total_seconds() / 3600.0

    def date_string(self) -> str:
        """e.g. ``"Fri, Nov 28, 2025"``"""
        start = local_time(self.start)
        return f"{start:%a, %b} {start.day}, {start.year}"

    def summary_string(self) -> str:
        """e.g. ``"10:45 PM – 06:30 AM · 7.8 h"``"""
        start = local_time(self.start)
        end = local_time(self.end)
        return f"{start:%I:%M %p} – {end:%I:%M %p} · {round_tenths(self.duration_hours()):.1f} h"


@dataclass(frozen=True)
class SleepinessSample:
    """A single Stanford Sleepiness Scale rating."""

    value: int
    logged_at: datetime

    def date_string(self) -> str:
        return format_local(self.logged_at)

    def summary_string(self) -> str:
        return f"Stanford sleepiness level {self.value}"

    def description(self) -> str:
        return STANFORD_SCALE.get(self.value, "Unknown level")


# Combined history entries; only used where both kinds share one view.
SleepRecord = Union[OvernightSession, SleepinessSample]
