"""Callbacks for the Overnight tab."""
from __future__ import annotations

from dash import Input, Output, State, callback_context
from dash.exceptions import PreventUpdate

from sleep_tracker import actions
from sleep_tracker.store import RecordStore

from .overnight_layout import pending_text
from .utils import parse_datetime_input

INVALID_TIME_MESSAGE = "Pick a valid date and time."


def overnight_action(store: RecordStore, trigger: str | None, bed_value, wake_value) -> tuple:
    """Apply a bed or wake button press and return the refreshed tab values."""
    if trigger == "save-bed":
        start = parse_datetime_input(bed_value)
        message = INVALID_TIME_MESSAGE if start is None else actions.save_bed_time(store, start).message
    elif trigger == "save-wake":
        end = parse_datetime_input(wake_value)
        message = INVALID_TIME_MESSAGE if end is None else actions.save_wake_time(store, end).message
    else:
        raise PreventUpdate

    return (
        message,
        actions.streak_text(store.streak),
        actions.latest_night_text(store),
        pending_text(store),
    )


def register_overnight_callbacks(app, store: RecordStore):
    @app.callback(
        [
            Output("overnight-message", "children"),
            Output("overnight-streak", "children"),
            Output("overnight-latest", "children"),
            Output("overnight-pending", "children"),
        ],
        [
            Input("save-bed", "n_clicks"),
            Input("save-wake", "n_clicks"),
        ],
        [
            State("bed-time", "value"),
            State("wake-time", "value"),
        ],
        prevent_initial_call=True,
    )
    def update_overnight(_bed_clicks, _wake_clicks, bed_value, wake_value):
        return overnight_action(store, callback_context.triggered_id, bed_value, wake_value)
