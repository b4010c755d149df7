"""Command line entry point for logging nights and sleepiness."""
from __future__ import annotations

import argparse
import logging
import sys
from datetime import datetime
from pathlib import Path
from typing import Optional, Sequence

from . import actions, config, data_io, db, metrics
from .reminders import ReminderScheduler, TimerNotificationPlatform
from .store import RecordStore

logger = logging.getLogger(__name__)


def configure_logging(verbose: bool = False) -> None:
    logging.basicConfig(
        format=config.LOG_FORMAT,
        datefmt=config.LOG_DATEFMT,
        level=logging.DEBUG if verbose else config.LOG_LEVEL,
    )


def _timestamp(value: str) -> datetime:
    try:
        return datetime.fromisoformat(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"Not an ISO-8601 timestamp: {value!r}") from exc


def _say(message: str) -> None:
    print(f"[sleep-tracker] {message}")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="sleep-tracker", description="Log overnight sleep and sleepiness")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    parser.add_argument("--db", type=Path, default=config.DB_PATH, help="SQLite database path")
    sub = parser.add_subparsers(dest="command", required=True)

    bed = sub.add_parser("bed", help="Save the time you went to bed")
    bed.add_argument("--at", type=_timestamp, help="Bed time (default: now)")

    wake = sub.add_parser("wake", help="Save the time you woke up and complete the night")
    wake.add_argument("--at", type=_timestamp, help="Wake time (default: now)")

    sleepiness = sub.add_parser("sleepiness", help="Log a Stanford sleepiness rating (1-7)")
    sleepiness.add_argument("value", type=int)
    sleepiness.add_argument("--at", type=_timestamp, help="When you felt this way (default: now)")

    sub.add_parser("history", help="List logged nights and sleepiness ratings")
    sub.add_parser("streak", help="Show the current streak and latest night")

    delete = sub.add_parser("delete", help="Delete a logged entry by its history index")
    delete.add_argument("kind", choices=["session", "sleepiness"])
    delete.add_argument("index", type=int)

    remind = sub.add_parser("remind", help="Wait and remind you to log sleepiness")
    remind.add_argument("minutes", type=float)

    export = sub.add_parser("export", help="Write history to CSV files")
    export.add_argument("directory", type=Path)
    return parser


def _print_history(store: RecordStore) -> None:
    sessions = store.get_all_sessions()
    samples = store.get_all_sleepiness()
    pending = store.get_pending_start()

    print("Overnight sleep:")
    if not sessions:
        print("  (none)")
    for i, session in enumerate(sessions):
        print(f"  [{i}] {session.date_string()}  {session.summary_string()}")
    if pending is not None:
        print(f"  pending bed time: {pending.isoformat()}")

    print("Sleepiness:")
    if not samples:
        print("  (none)")
    for i, sample in enumerate(samples):
        print(f"  [{i}] {sample.date_string()}  {sample.summary_string()} ({sample.description()})")


def _delete(store: RecordStore, kind: str, index: int) -> int:
    entries = store.get_all_sessions() if kind == "session" else store.get_all_sleepiness()
    if not 0 <= index < len(entries):
        _say(f"No {kind} entry at index {index}")
        return 1
    entry = entries[index]
    store.delete_record(entry)
    _say(f"Deleted {kind} entry {entry.date_string()}")
    return 0


def _remind(minutes: float) -> int:
    platform = TimerNotificationPlatform(deliver=lambda title, body: _say(f"{title}: {body}"))
    scheduler = ReminderScheduler(platform)
    if not scheduler.schedule_sleepiness_reminder(minutes):
        _say("Could not schedule a reminder on this device.")
        return 1
    reminder = scheduler.pending
    _say(f"Reminder set for {reminder.at:%H:%M}. Waiting...")
    try:
        platform.wait(reminder.notification_id)
    except KeyboardInterrupt:
        scheduler.cancel()
        _say("Reminder cancelled.")
    return 0


def run(args: argparse.Namespace, store: RecordStore) -> int:
    if args.command == "bed":
        result = actions.save_bed_time(store, args.at or datetime.now())
    elif args.command == "wake":
        result = actions.save_wake_time(store, args.at or datetime.now())
    elif args.command == "sleepiness":
        result = actions.add_sleepiness(store, args.value, args.at)
    elif args.command == "history":
        _print_history(store)
        return 0
    elif args.command == "streak":
        sessions = store.get_all_sessions()
        _say(f"Streak: {actions.streak_text(store.streak)} (longest {metrics.longest_streak(sessions)})")
        _say(f"Latest night: {actions.latest_night_text(store)}")
        return 0
    elif args.command == "delete":
        return _delete(store, args.kind, args.index)
    elif args.command == "remind":
        return _remind(args.minutes)
    elif args.command == "export":
        overnight_path, sleepiness_path = data_io.export_csv(
            store.get_all_sessions(), store.get_all_sleepiness(), args.directory
        )
        _say(f"Wrote {overnight_path} and {sleepiness_path}")
        return 0
    else:
        raise ValueError(f"Unknown command {args.command!r}")

    _say(result.message)
    return 0 if result.ok else 1


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(args.verbose)

    store = RecordStore(db.open_storage(args.db))
    return run(args, store)


if __name__ == "__main__":
    sys.exit(main())
