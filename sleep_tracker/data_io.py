"""Serialization and tabular I/O helpers for the sleep tracker."""
from __future__ import annotations

import json
import logging
from datetime import datetime
from pathlib import Path
from typing import Any, Iterable, Optional

import pandas as pd

from . import config
from .models import OvernightSession, SleepinessSample

logger = logging.getLogger(__name__)

SESSION_COLUMNS = ["start", "end", "hours"]
SLEEPINESS_COLUMNS = ["logged_at", "value", "description"]


def to_iso(dt: Optional[datetime]) -> Optional[str]:
    return dt.isoformat() if dt is not None else None


def parse_timestamp(raw: Any) -> Optional[datetime]:
    """Parse an ISO-8601 string, returning ``None`` for anything unusable."""
    if not isinstance(raw, str) or not raw:
        return None
    try:
        return datetime.fromisoformat(raw)
    except ValueError:
        return None


def _load_array(raw_json: Optional[str], key: str) -> list:
    if not raw_json:
        return []
    try:
        raw = json.loads(raw_json)
    except (TypeError, ValueError):
        logger.warning("Ignoring unreadable stored data under %s", key)
        return []
    if not isinstance(raw, list):
        logger.warning("Ignoring stored data under %s: expected a JSON array", key)
        return []
    return raw


def _coerce_value(raw: Any) -> Optional[int]:
    if isinstance(raw, bool):
        return None
    if isinstance(raw, int):
        return raw
    if isinstance(raw, float) and raw.is_integer():
        return int(raw)
    return None


def serialize_sessions(sessions: Iterable[OvernightSession]) -> str:
    return json.dumps(
        [{"sleepStart": to_iso(s.start), "sleepEnd": to_iso(s.end)} for s in sessions]
    )


def serialize_sleepiness(samples: Iterable[SleepinessSample]) -> str:
    return json.dumps(
        [{"loggedAt": to_iso(s.logged_at), "value": s.value} for s in samples]
    )


def deserialize_sessions(raw_json: Optional[str], key: str = config.OVERNIGHT_KEY) -> list[OvernightSession]:
    """Rebuild sessions, dropping entries without two valid, ordered bounds."""
    sessions = []
    for entry in _load_array(raw_json, key):
        if not isinstance(entry, dict):
            continue
        start = parse_timestamp(entry.get("sleepStart"))
        end = parse_timestamp(entry.get("sleepEnd"))
        if start is None or end is None:
            continue
        try:
            if end <= start:
                continue
        except TypeError:
            # naive and aware bounds cannot be ordered
            continue
        sessions.append(OvernightSession(start, end))
    return sessions


def deserialize_sleepiness(
    raw_json: Optional[str],
    key: str = config.SLEEPINESS_KEY,
    *,
    now: Optional[datetime] = None,
) -> list[SleepinessSample]:
    """Rebuild samples; a missing ``loggedAt`` falls back to ``now``."""
    samples = []
    for entry in _load_array(raw_json, key):
        if not isinstance(entry, dict):
            continue
        value = _coerce_value(entry.get("value"))
        if value is None:
            continue
        raw_logged = entry.get("loggedAt")
        if raw_logged is None:
            logged_at = now or datetime.now()
        else:
            logged_at = parse_timestamp(raw_logged)
            if logged_at is None:
                continue
        samples.append(SleepinessSample(value, logged_at))
    return samples


def sessions_frame(sessions: Iterable[OvernightSession]) -> pd.DataFrame:
    rows = [(s.start, s.end, s.duration_hours()) for s in sessions]
    return pd.DataFrame(rows, columns=SESSION_COLUMNS)


def sleepiness_frame(samples: Iterable[SleepinessSample]) -> pd.DataFrame:
    rows = [(s.logged_at, s.value, s.description()) for s in samples]
    return pd.DataFrame(rows, columns=SLEEPINESS_COLUMNS)


def export_csv(
    sessions: Iterable[OvernightSession],
    samples: Iterable[SleepinessSample],
    directory: Path,
) -> tuple[Path, Path]:
    """Write ``overnight.csv`` and ``sleepiness.csv`` into ``directory``."""
    directory = Path(directory)
    directory.mkdir(parents=True, exist_ok=True)
    overnight_path = directory / "overnight.csv"
    sleepiness_path = directory / "sleepiness.csv"

    sessions_frame(sessions).to_csv(overnight_path, index=False, float_format="%.2f")
    sleepiness_frame(samples).to_csv(sleepiness_path, index=False)
    return overnight_path, sleepiness_path
