"""Callbacks for the Sleepiness tab."""
from __future__ import annotations

from dash import Input, Output, State, callback_context
from dash.exceptions import PreventUpdate

from sleep_tracker import actions
from sleep_tracker.reminders import ReminderScheduler
from sleep_tracker.store import RecordStore

from .overnight_callbacks import INVALID_TIME_MESSAGE
from .utils import parse_datetime_input


def sleepiness_action(store: RecordStore, value, time_value) -> str:
    when = parse_datetime_input(time_value)
    if when is None:
        return INVALID_TIME_MESSAGE
    if value is None:
        return "Pick a sleepiness level first."
    return actions.add_sleepiness(store, int(value), when).message


def reminder_action(scheduler: ReminderScheduler, trigger: str | None, hours) -> str:
    if trigger == "schedule-reminder":
        if hours is None or float(hours) <= 0:
            return "Enter how many hours from now to be reminded."
        return actions.schedule_reminder(scheduler, float(hours)).message
    if trigger == "cancel-reminder":
        return "Reminder cancelled." if scheduler.cancel() else "No reminder is pending."
    raise PreventUpdate


def register_sleepiness_callbacks(app, store: RecordStore, scheduler: ReminderScheduler):
    @app.callback(
        Output("sleepiness-message", "children"),
        Input("log-sleepiness", "n_clicks"),
        [
            State("sleepiness-value", "value"),
            State("sleepiness-time", "value"),
        ],
        prevent_initial_call=True,
    )
    def log_sleepiness(_clicks, value, time_value):
        return sleepiness_action(store, value, time_value)

    @app.callback(
        Output("reminder-message", "children"),
        [
            Input("schedule-reminder", "n_clicks"),
            Input("cancel-reminder", "n_clicks"),
        ],
        State("reminder-hours", "value"),
        prevent_initial_call=True,
    )
    def update_reminder(_schedule_clicks, _cancel_clicks, hours):
        return reminder_action(scheduler, callback_context.triggered_id, hours)
