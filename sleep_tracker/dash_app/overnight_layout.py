"""Layout for the Overnight tab."""
from __future__ import annotations

from dash import dcc, html

from sleep_tracker import actions
from sleep_tracker.store import RecordStore

from .utils import datetime_input_value, metric_card


def pending_text(store: RecordStore) -> str:
    pending = store.get_pending_start()
    if pending is None:
        return "No bed time saved"
    return pending.strftime("%b %d, %Y · %I:%M %p")


def build_overnight_layout(store: RecordStore) -> html.Div:
    return html.Div(
        [
            html.Div(
                [
                    metric_card(
                        "overnight-streak",
                        "Streak",
                        "Consecutive days with a logged night.",
                        actions.streak_text(store.streak),
                    ),
                    metric_card(
                        "overnight-latest",
                        "Latest night",
                        "Most recent night and how rested it left you.",
                        actions.latest_night_text(store),
                    ),
                    metric_card(
                        "overnight-pending",
                        "Bed time",
                        "Saved bed time waiting for a wake-up time.",
                        pending_text(store),
                    ),
                ],
                className="overnight-metrics",
            ),
            html.Div(
                [
                    html.Label("Went to bed", className="control-label"),
                    dcc.Input(id="bed-time", type="datetime-local", value=datetime_input_value()),
                    html.Button("Save sleep time", id="save-bed", n_clicks=0),
                ],
                className="control-block",
                style={"marginTop": "16px"},
            ),
            html.Div(
                [
                    html.Label("Woke up", className="control-label"),
                    dcc.Input(id="wake-time", type="datetime-local", value=datetime_input_value()),
                    html.Button("Save wake-up time", id="save-wake", n_clicks=0),
                ],
                className="control-block",
                style={"marginTop": "16px"},
            ),
            html.Div(id="overnight-message", className="status-message", style={"marginTop": "16px"}),
        ]
    )
