"""Layout for the Sleepiness tab."""
from __future__ import annotations

from dash import dcc, html

from sleep_tracker import config
from sleep_tracker.models import STANFORD_SCALE

from .utils import datetime_input_value

DEFAULT_SLEEPINESS = 3


def build_sleepiness_layout() -> html.Div:
    options = [{"label": f" {value} – {text}", "value": value} for value, text in STANFORD_SCALE.items()]

    return html.Div(
        [
            html.Div(
                [
                    html.Label("How sleepy do you feel?", className="control-label"),
                    dcc.RadioItems(
                        id="sleepiness-value",
                        options=options,
                        value=DEFAULT_SLEEPINESS,
                        labelStyle={"display": "block"},
                    ),
                ],
                className="control-block",
            ),
            html.Div(
                [
                    html.Label("When", className="control-label"),
                    dcc.Input(id="sleepiness-time", type="datetime-local", value=datetime_input_value()),
                    html.Button("Log sleepiness", id="log-sleepiness", n_clicks=0),
                ],
                className="control-block",
                style={"marginTop": "16px"},
            ),
            html.Div(id="sleepiness-message", className="status-message", style={"marginTop": "8px"}),
            html.Div(
                [
                    html.Label("Remind me in (hours)", className="control-label"),
                    dcc.Input(
                        id="reminder-hours",
                        type="number",
                        value=config.DEFAULT_REMINDER_HOURS,
                        min=0.25,
                        step=0.25,
                    ),
                    html.Button("Set reminder", id="schedule-reminder", n_clicks=0),
                    html.Button("Cancel reminder", id="cancel-reminder", n_clicks=0),
                ],
                className="control-block",
                style={"marginTop": "24px"},
            ),
            html.Div(id="reminder-message", className="status-message", style={"marginTop": "8px"}),
        ]
    )
