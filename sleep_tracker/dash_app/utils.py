"""Reusable UI helpers for the dashboard."""
from __future__ import annotations

from datetime import datetime
from typing import Optional

import pandas as pd
import plotly.graph_objects as go
from dash import html

from .theme import COLORS, THEMES, NIGHT

INPUT_FORMAT = "%Y-%m-%dT%H:%M"


def metric_card(target_id: str, title: str, helper: str, value=None) -> html.Div:
    """Reusable metric card with label, value, and helper text."""

    return html.Div(
        [
            html.Div(title, className="metric-label"),
            html.Div(value, id=target_id, className="metric-value", style={"fontSize": "1.5em"}),
            html.Div(helper, className="metric-help"),
        ],
        className="metric-card",
        style={"display": "inline-block", "marginRight": "32px", "verticalAlign": "top"},
    )


def datetime_input_value(dt_value: Optional[datetime] = None) -> str:
    """Value for a ``datetime-local`` input, defaulting to now."""

    return (dt_value or datetime.now()).strftime(INPUT_FORMAT)


def parse_datetime_input(value: Optional[str]) -> Optional[datetime]:
    """Parse a ``datetime-local`` input value; ``None`` when empty or malformed."""

    if not value:
        return None
    try:
        return datetime.fromisoformat(value)
    except ValueError:
        return None


def empty_figure(title: str, theme: str = NIGHT) -> go.Figure:
    """Create a themed empty figure with a centered title."""

    palette = THEMES[theme]
    fig = go.Figure()
    fig.update_layout(
        title=title,
        template=palette["plotly_template"],
        paper_bgcolor=palette["bg"],
        plot_bgcolor=palette["bg"],
        font=dict(color=palette["text"]),
    )
    return fig


def nightly_hours_figure(nightly: pd.DataFrame, theme: str = NIGHT) -> go.Figure:
    """Bar chart of hours slept per day with an 8 h reference line."""

    if nightly.empty:
        return empty_figure("No nights logged yet", theme)

    palette = THEMES[theme]
    fig = go.Figure(
        go.Bar(
            x=nightly["sleep_date"],
            y=nightly["hours"],
            name="Hours slept",
            marker=dict(color=COLORS["hours_bar"]),
        )
    )
    fig.add_hline(
        y=8,
        line_dash="dash",
        line_color=COLORS["target_line"],
        annotation_text="8 h",
        annotation_position="top left",
    )
    fig.update_layout(
        title="Hours slept per night",
        template=palette["plotly_template"],
        paper_bgcolor=palette["bg"],
        plot_bgcolor=palette["bg"],
        font=dict(color=palette["text"]),
        yaxis_title="Hours",
        margin=dict(l=40, r=20, t=50, b=40),
    )
    return fig
