"""Callbacks for the History tab."""
from __future__ import annotations

from dash import ALL, Input, Output, State, callback_context
from dash.exceptions import PreventUpdate

from sleep_tracker import metrics
from sleep_tracker.store import RecordStore

from .history_layout import history_lists
from .utils import nightly_hours_figure


def delete_entry(store: RecordStore, trigger: dict | None) -> bool:
    """Delete the entry behind a pattern-matched delete button; ``False`` if it is gone."""
    if not trigger:
        return False
    if trigger.get("type") == "delete-session":
        entries = store.get_all_sessions()
    elif trigger.get("type") == "delete-sleepiness":
        entries = store.get_all_sleepiness()
    else:
        return False

    index = trigger.get("index")
    if not isinstance(index, int) or not 0 <= index < len(entries):
        return False
    store.delete_record(entries[index])
    return True


def register_history_callbacks(app, store: RecordStore):
    @app.callback(
        [
            Output("history-lists", "children"),
            Output("history-graph", "figure"),
        ],
        [
            Input({"type": "delete-session", "index": ALL}, "n_clicks"),
            Input({"type": "delete-sleepiness", "index": ALL}, "n_clicks"),
        ],
        State("theme-store", "data"),
        prevent_initial_call=True,
    )
    def update_history(_session_clicks, _sleepiness_clicks, theme):
        # Re-rendered buttons report n_clicks=0; only real presses count
        if not callback_context.triggered or not callback_context.triggered[0]["value"]:
            raise PreventUpdate
        if not delete_entry(store, callback_context.triggered_id):
            raise PreventUpdate

        nightly = metrics.nightly_durations(store.get_all_sessions())
        return history_lists(store), nightly_hours_figure(nightly, theme)
