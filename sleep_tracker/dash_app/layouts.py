"""Top-level layout assembly for the dashboard."""
from __future__ import annotations

from dash import dcc, html

from sleep_tracker.store import RecordStore

from .history_layout import build_history_layout
from .overnight_layout import build_overnight_layout
from .sleepiness_layout import build_sleepiness_layout
from .theme import APP_TITLE, THEMES, TOGGLE_ICONS, root_style

TAB_OVERNIGHT = "tab-overnight"
TAB_SLEEPINESS = "tab-sleepiness"
TAB_HISTORY = "tab-history"

HEADER_SUBTITLES = {
    TAB_OVERNIGHT: "Log when you went to bed and when you woke up.",
    TAB_SLEEPINESS: "Track how sleepy you feel during the day.",
    TAB_HISTORY: "Review or delete your past logs.",
}


def header_subtitle(tab_value: str) -> str:
    return HEADER_SUBTITLES.get(tab_value, HEADER_SUBTITLES[TAB_HISTORY])


def build_root_layout(theme: str) -> html.Div:
    palette = THEMES[theme]
    return html.Div(
        [
            dcc.Store(id="theme-store", data=theme),
            html.Div(
                [
                    html.H1(APP_TITLE, className="page-title", style={"display": "inline-block"}),
                    html.Button(
                        TOGGLE_ICONS[theme],
                        id="theme-toggle",
                        n_clicks=0,
                        title="Switch between night and day themes",
                        style={"marginLeft": "16px", "fontSize": "1.4em"},
                    ),
                    html.Div(
                        header_subtitle(TAB_OVERNIGHT),
                        id="header-sub",
                        className="page-subtitle",
                        style={"color": palette["muted"]},
                    ),
                ],
                className="page-header",
            ),
            dcc.Tabs(
                id="tabs",
                value=TAB_OVERNIGHT,
                children=[
                    dcc.Tab(label="Overnight", value=TAB_OVERNIGHT),
                    dcc.Tab(label="Sleepiness", value=TAB_SLEEPINESS),
                    dcc.Tab(label="History", value=TAB_HISTORY),
                ],
                colors={
                    "border": palette["border"],
                    "primary": palette["accent"],
                    "background": palette["panel"],
                },
            ),
            html.Div(id="tab-content", style={"marginTop": "16px"}),
        ],
        id="app-root",
        className=f"app-container theme-{theme}",
        style=root_style(theme),
    )


def resolve_tab_layout(tab_value: str, store: RecordStore, theme: str) -> html.Div:
    if tab_value == TAB_SLEEPINESS:
        return build_sleepiness_layout()
    if tab_value == TAB_HISTORY:
        return build_history_layout(store, theme)
    return build_overnight_layout(store)
