"""Dash UI for logging nights and sleepiness.

The app owns no data of its own: :func:`create_app` receives the record store,
reminder scheduler and key-value storage created at startup and wires them
into the Overnight, Sleepiness and History tabs.
"""
from __future__ import annotations

import argparse
import logging
from typing import Optional

from dash import Dash, Input, Output, State

from sleep_tracker import config, db
from sleep_tracker.cli import configure_logging
from sleep_tracker.db import KeyValueStorage
from sleep_tracker.reminders import ReminderScheduler, TimerNotificationPlatform
from sleep_tracker.store import RecordStore

from .history_callbacks import register_history_callbacks
from .layouts import build_root_layout, header_subtitle, resolve_tab_layout
from .overnight_callbacks import register_overnight_callbacks
from .sleepiness_callbacks import register_sleepiness_callbacks
from .theme import APP_TITLE, TOGGLE_ICONS, initial_theme, root_style, toggle_theme

logger = logging.getLogger(__name__)


def create_app(
    store: RecordStore,
    scheduler: ReminderScheduler,
    storage: Optional[KeyValueStorage] = None,
) -> Dash:
    app = Dash(__name__)
    app.title = APP_TITLE
    # Allow callbacks whose components only appear inside certain tabs
    app.config.suppress_callback_exceptions = True
    # Evaluated per page load so the theme follows the saved preference and clock
    app.layout = lambda: build_root_layout(initial_theme(storage))

    @app.callback(
        [
            Output("tab-content", "children"),
            Output("header-sub", "children"),
        ],
        Input("tabs", "value"),
        State("theme-store", "data"),
    )
    def render_tab(tab_value, theme):
        return resolve_tab_layout(tab_value, store, theme), header_subtitle(tab_value)

    @app.callback(
        [
            Output("theme-store", "data"),
            Output("app-root", "className"),
            Output("app-root", "style"),
            Output("theme-toggle", "children"),
        ],
        Input("theme-toggle", "n_clicks"),
        State("theme-store", "data"),
        prevent_initial_call=True,
    )
    def switch_theme(_clicks, theme):
        new_theme = toggle_theme(storage, theme)
        return new_theme, f"app-container theme-{new_theme}", root_style(new_theme), TOGGLE_ICONS[new_theme]

    register_overnight_callbacks(app, store)
    register_sleepiness_callbacks(app, store, scheduler)
    register_history_callbacks(app, store)
    return app


def main() -> None:
    parser = argparse.ArgumentParser(description="Run the sleep tracker dashboard")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    parser.add_argument("--host", default=config.DASH_HOST)
    parser.add_argument("--port", type=int, default=config.DASH_PORT)
    args = parser.parse_args()
    configure_logging(args.verbose)

    storage = db.open_storage()
    store = RecordStore(storage)
    scheduler = ReminderScheduler(TimerNotificationPlatform())
    app = create_app(store, scheduler, storage)
    logger.info("Serving dashboard on http://%s:%d", args.host, args.port)
    # one request at a time keeps the shared RecordStore single-writer
    app.run(host=args.host, port=args.port, debug=False, threaded=False)


if __name__ == "__main__":
    main()
