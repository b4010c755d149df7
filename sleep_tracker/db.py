"""Key-value storage backends for the sleep tracker.

The record store only needs three operations from its persistence layer:
``get(key)``, ``set(key, value)`` and ``remove(key)``. :class:`SqliteStorage`
provides them on top of a single SQLite table so data survives restarts, and
:class:`MemoryStorage` provides them in-process for tests and headless runs.
"""
from __future__ import annotations

import logging
import sqlite3
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional, Protocol

from . import config

logger = logging.getLogger(__name__)


class StorageUnavailableError(RuntimeError):
    """Raised when the backing store cannot be opened, read or written."""


class KeyValueStorage(Protocol):
    def get(self, key: str) -> Optional[str]: ...

    def set(self, key: str, value: str) -> None: ...

    def remove(self, key: str) -> None: ...


def get_connection(db_path: Path | None = None) -> sqlite3.Connection:
    """Return a SQLite connection for the key-value database.

    This helper also ensures the parent directory exists and raises a clear error
    if SQLite cannot open the file (commonly because the path is not writable).
    """
    path = Path(db_path) if db_path is not None else config.DB_PATH
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        conn = sqlite3.connect(path)
    except (OSError, sqlite3.OperationalError) as exc:
        raise StorageUnavailableError(
            f"Unable to open database at {path}. Ensure the directory exists and is writable."
        ) from exc

    conn.row_factory = sqlite3.Row
    return conn


def init_db(db_path: Path | None = None) -> None:
    """Ensure the database exists with the key-value table."""
    conn = get_connection(db_path)
    try:
        conn.execute(
            """
            CREATE TABLE IF NOT EXISTS kv_store (
                key TEXT PRIMARY KEY,
                value TEXT NOT NULL,
                updated_at_utc TEXT NOT NULL
            );
            """
        )
        conn.commit()
    except sqlite3.Error as exc:
        raise StorageUnavailableError(f"Unable to initialize database at {db_path}") from exc
    finally:
        conn.close()


class SqliteStorage:
    """Durable key-value storage backed by one SQLite table."""

    def __init__(self, db_path: Path | None = None):
        self.db_path = Path(db_path) if db_path is not None else config.DB_PATH
        init_db(self.db_path)

    def get(self, key: str) -> Optional[str]:
        conn = get_connection(self.db_path)
        try:
            cur = conn.cursor()
            cur.execute("SELECT value FROM kv_store WHERE key = ?", (key,))
            row = cur.fetchone()
            return row["value"] if row else None
        except sqlite3.Error as exc:
            raise StorageUnavailableError(f"Unable to read {key!r} from {self.db_path}") from exc
        finally:
            conn.close()

    def set(self, key: str, value: str) -> None:
        conn = get_connection(self.db_path)
        try:
            conn.execute(
                """
                INSERT INTO kv_store (key, value, updated_at_utc) VALUES (?, ?, ?)
                ON CONFLICT(key) DO UPDATE SET
                    value = excluded.value,
                    updated_at_utc = excluded.updated_at_utc
                """,
                (key, value, datetime.now(timezone.utc).isoformat()),
            )
            conn.commit()
        except sqlite3.Error as exc:
            raise StorageUnavailableError(f"Unable to write {key!r} to {self.db_path}") from exc
        finally:
            conn.close()

    def remove(self, key: str) -> None:
        conn = get_connection(self.db_path)
        try:
            conn.execute("DELETE FROM kv_store WHERE key = ?", (key,))
            conn.commit()
        except sqlite3.Error as exc:
            raise StorageUnavailableError(f"Unable to remove {key!r} from {self.db_path}") from exc
        finally:
            conn.close()


class MemoryStorage:
    """In-process key-value storage."""

    def __init__(self, initial: dict[str, str] | None = None):
        self.data: dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self.data.get(key)

    def set(self, key: str, value: str) -> None:
        self.data[key] = value

    def remove(self, key: str) -> None:
        self.data.pop(key, None)


def open_storage(db_path: Path | None = None) -> Optional[SqliteStorage]:
    """Open the SQLite store, or return ``None`` when it is unavailable.

    A ``None`` result means the caller runs in-memory only for the lifetime of
    the process.
    """
    try:
        return SqliteStorage(db_path)
    except StorageUnavailableError as exc:
        logger.warning("Persistent storage unavailable, keeping data in memory only: %s", exc)
        return None
