"""Central configuration for the sleep tracker."""
import os
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parent.parent


def _expanded_path(path: str | Path) -> Path:
    """Return an absolute, user-expanded :class:`Path` for the given input."""

    return Path(path).expanduser().resolve()


# Storage location (override with env vars for relocations)
DB_PATH = _expanded_path(
    os.getenv("SLEEP_TRACKER_DB_PATH", Path.home() / "sleep_tracker" / "sleep_tracker.db")
)

# Key-value entries mirrored from the record store
OVERNIGHT_KEY = os.getenv("SLEEP_TRACKER_OVERNIGHT_KEY", "sleeptracker_overnight")
SLEEPINESS_KEY = os.getenv("SLEEP_TRACKER_SLEEPINESS_KEY", "sleeptracker_sleepiness")
CURRENT_START_KEY = os.getenv("SLEEP_TRACKER_CURRENT_START_KEY", "sleeptracker_current_start")
THEME_KEY = os.getenv("SLEEP_TRACKER_THEME_KEY", "sleepTheme")

# Timezone used for calendar-day and clock-label calculations on aware timestamps
TIMEZONE = os.getenv("SLEEP_TRACKER_TIMEZONE", "America/Chicago")

# Night theme applies before NIGHT_ENDS_HOUR or from NIGHT_STARTS_HOUR on
NIGHT_STARTS_HOUR = 19
NIGHT_ENDS_HOUR = 7

# Sleepiness reminder
REMINDER_TITLE = "Time to log your sleepiness"
REMINDER_BODY = "Open Sleep Tracker and record how you feel right now."
DEFAULT_REMINDER_HOURS = float(os.getenv("SLEEP_TRACKER_REMINDER_HOURS", "4"))

# Dashboard
DASH_HOST = os.getenv("SLEEP_TRACKER_DASH_HOST", "127.0.0.1")
DASH_PORT = int(os.getenv("SLEEP_TRACKER_DASH_PORT", "8050"))

LOG_LEVEL = os.getenv("SLEEP_TRACKER_LOG_LEVEL", "WARNING")
LOG_FORMAT = "%(asctime)s.%(msecs)03d [%(process)d] %(levelname)s %(name)s: %(message)s"
LOG_DATEFMT = "%Y-%m-%d %H:%M:%S"
