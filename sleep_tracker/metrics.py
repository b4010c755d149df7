"""Streaks, durations and rest labels derived from logged nights."""
from __future__ import annotations

from datetime import date, datetime, timedelta
from typing import Optional, Sequence

import pandas as pd

from . import data_io
from .models import OvernightSession, local_time, round_tenths

REST_LABELS = (
    (8.0, "Well rested"),
    (6.0, "Okay night"),
    (4.0, "Short sleep"),
)
NO_DATA_LABEL = "No data yet"
LOW_REST_LABEL = "Running on fumes"


def effective_day(session: OvernightSession) -> date:
    """Calendar day a night counts toward: the wake day, or the bed day if no wake time."""
    moment = session.end if session.end is not None else session.start
    return local_time(moment).date()


def compute_streak(sessions: Sequence[OvernightSession]) -> int:
    """Count consecutive calendar days, newest first, that have at least one night logged.

    Several nights ending on the same day count once. The walk starts at the
    most recent logged day, not at today, and stops at the first gap.
    """
    days = sorted({effective_day(s) for s in sessions}, reverse=True)
    if not days:
        return 0

    streak = 1
    prev_day = days[0]
    for day in days[1:]:
        if prev_day - day != timedelta(days=1):
            break
        streak += 1
        prev_day = day
    return streak


def longest_streak(sessions: Sequence[OvernightSession]) -> int:
    """Length of the longest run of consecutive logged days."""
    days = sorted({effective_day(s) for s in sessions})
    longest = 0
    run = 0
    last_day: Optional[date] = None
    for day in days:
        if last_day is not None and day - last_day == timedelta(days=1):
            run += 1
        else:
            run = 1
        longest = max(longest, run)
        last_day = day
    return longest


def duration_hours(start: datetime, end: datetime) -> float:
    return (end - start).total_seconds() / 3600.0


def rounded_hours(hours: float) -> float:
    return round_tenths(hours)


def rest_label(hours: Optional[float]) -> str:
    if hours is None:
        return NO_DATA_LABEL
    for threshold, label in REST_LABELS:
        if hours >= threshold:
            return label
    return LOW_REST_LABEL


def latest_sleep_hours(sessions: Sequence[OvernightSession]) -> Optional[float]:
    """Rounded duration of the most recently logged night (insertion order)."""
    if not sessions:
        return None
    last = sessions[-1]
    return rounded_hours(duration_hours(last.start, last.end))


def latest_label(sessions: Sequence[OvernightSession]) -> str:
    return rest_label(latest_sleep_hours(sessions))


def nightly_durations(sessions: Sequence[OvernightSession]) -> pd.DataFrame:
    """Total hours slept per calendar day, oldest first."""
    sessions = list(sessions)
    if not sessions:
        return pd.DataFrame(columns=["sleep_date", "nights", "hours"])

    df = data_io.sessions_frame(sessions)
    df["sleep_date"] = [effective_day(s) for s in sessions]
    summary = (
        df.groupby("sleep_date", as_index=False)
        .agg(nights=("hours", "size"), hours=("hours", "sum"))
        .sort_values("sleep_date")
        .reset_index(drop=True)
    )
    return summary
