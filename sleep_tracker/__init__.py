"""Personal sleep tracker: overnight sessions, sleepiness ratings and streaks."""

__all__ = [
    "actions",
    "config",
    "db",
    "data_io",
    "metrics",
    "models",
    "reminders",
    "store",
]
