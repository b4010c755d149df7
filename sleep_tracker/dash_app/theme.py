"""Shared visual design tokens and the night/day theme preference.

All colors originate here so layouts and callbacks stay consistent. The
night palette is the default dark look; the day palette is its light twin.
"""
from __future__ import annotations

import logging
from datetime import datetime
from typing import Optional

from sleep_tracker import config
from sleep_tracker.db import KeyValueStorage, StorageUnavailableError

logger = logging.getLogger(__name__)

APP_TITLE = "Sleep Tracker"

NIGHT = "night"
DAY = "day"

THEMES = {
    NIGHT: {
        "bg": "#020617",
        "panel": "#0b1224",
        "card": "#0f172a",
        "text": "#e5e7eb",
        "muted": "#9ca3af",
        "border": "#1f2937",
        "accent": "#3b82f6",
        "plotly_template": "plotly_dark",
    },
    DAY: {
        "bg": "#f8fafc",
        "panel": "#ffffff",
        "card": "#f1f5f9",
        "text": "#0f172a",
        "muted": "#475569",
        "border": "#cbd5e1",
        "accent": "#2563eb",
        "plotly_template": "plotly_white",
    },
}

COLORS = {
    "hours_bar": "#3b82f6",
    "target_line": "#22c55e",
    "sleepiness": "#f97316",
}

TOGGLE_ICONS = {NIGHT: "☾", DAY: "☀"}


def theme_for_hour(hour: int) -> str:
    if hour < config.NIGHT_ENDS_HOUR or hour >= config.NIGHT_STARTS_HOUR:
        return NIGHT
    return DAY


def initial_theme(storage: Optional[KeyValueStorage], now: Optional[datetime] = None) -> str:
    """Saved preference when there is one, otherwise night or day by the clock."""
    saved = None
    if storage is not None:
        try:
            saved = storage.get(config.THEME_KEY)
        except StorageUnavailableError as exc:
            logger.warning("Could not read theme preference: %s", exc)
    if saved in THEMES:
        return saved
    return theme_for_hour((now or datetime.now()).hour)


def toggle_theme(storage: Optional[KeyValueStorage], current: str) -> str:
    new_theme = DAY if current == NIGHT else NIGHT
    if storage is not None:
        try:
            storage.set(config.THEME_KEY, new_theme)
        except StorageUnavailableError as exc:
            logger.warning("Could not save theme preference: %s", exc)
    return new_theme


def root_style(theme: str) -> dict:
    palette = THEMES.get(theme, THEMES[NIGHT])
    return {
        "backgroundColor": palette["bg"],
        "color": palette["text"],
        "minHeight": "100vh",
        "padding": "24px",
        "fontFamily": "system-ui, sans-serif",
    }
