"""Layout for the History tab."""
from __future__ import annotations

from dash import dcc, html

from sleep_tracker import metrics
from sleep_tracker.store import RecordStore

from .utils import nightly_hours_figure


def _entry(text: str, button_id: dict) -> html.Li:
    return html.Li(
        [
            html.Span(text),
            html.Button("Delete", id=button_id, n_clicks=0, style={"marginLeft": "12px"}),
        ],
        style={"marginBottom": "6px"},
    )


def history_lists(store: RecordStore) -> list:
    """Overnight and sleepiness entries, each with its own delete button."""
    sessions = store.get_all_sessions()
    samples = store.get_all_sleepiness()

    overnight_items = [
        _entry(f"{s.date_string()} · {s.summary_string()}", {"type": "delete-session", "index": i})
        for i, s in enumerate(sessions)
    ] or [html.Li("No overnight logs yet.")]
    sleepiness_items = [
        _entry(
            f"{s.date_string()} · {s.summary_string()} ({s.description()})",
            {"type": "delete-sleepiness", "index": i},
        )
        for i, s in enumerate(samples)
    ] or [html.Li("No sleepiness logs yet.")]

    return [
        html.H3("Overnight sleep"),
        html.Ul(overnight_items),
        html.H3("Sleepiness"),
        html.Ul(sleepiness_items),
    ]


def build_history_layout(store: RecordStore, theme: str) -> html.Div:
    return html.Div(
        [
            dcc.Graph(
                id="history-graph",
                figure=nightly_hours_figure(metrics.nightly_durations(store.get_all_sessions()), theme),
            ),
            html.Div(history_lists(store), id="history-lists"),
        ]
    )
