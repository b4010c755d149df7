"""Record store that keeps logged nights and sleepiness ratings in sync with storage."""
from __future__ import annotations

import logging
from datetime import datetime
from typing import Callable, Optional

from . import config, data_io
from .db import KeyValueStorage, StorageUnavailableError
from .metrics import compute_streak
from .models import OvernightSession, SleepinessSample, SleepRecord, wall_time

logger = logging.getLogger(__name__)


class RecordStore:
    """Single source of truth for nights, sleepiness samples and the pending bed time.

    Timestamps are held as naive local wall time; aware values are converted
    on the way in. Every mutation writes the full state back to ``storage``. With no storage,
    or when the backend fails, the in-memory lists stay authoritative.
    """

    def __init__(
        self,
        storage: Optional[KeyValueStorage] = None,
        *,
        clock: Callable[[], datetime] = datetime.now,
    ):
        self.storage = storage
        self._clock = clock
        self._sessions: list[OvernightSession] = []
        self._samples: list[SleepinessSample] = []
        self._records: list[SleepRecord] = []
        self._pending_start: Optional[datetime] = None
        self.streak = 0
        self.reload()

    # ---------- storage ----------

    def _read(self, key: str) -> Optional[str]:
        if self.storage is None:
            return None
        try:
            return self.storage.get(key)
        except StorageUnavailableError as exc:
            logger.warning("Could not read %s, starting empty: %s", key, exc)
            return None

    def _persist(self) -> None:
        if self.storage is None:
            return
        try:
            self.storage.set(config.OVERNIGHT_KEY, data_io.serialize_sessions(self._sessions))
            self.storage.set(config.SLEEPINESS_KEY, data_io.serialize_sleepiness(self._samples))
            if self._pending_start is not None:
                self.storage.set(config.CURRENT_START_KEY, data_io.to_iso(self._pending_start))
            else:
                self.storage.remove(config.CURRENT_START_KEY)
        except StorageUnavailableError as exc:
            logger.warning("Could not persist records, keeping them in memory: %s", exc)

    def reload(self) -> None:
        """Replace in-memory state with whatever storage currently holds."""
        self._sessions.clear()
        self._samples.clear()
        self._records.clear()

        self._sessions.extend(
            OvernightSession(wall_time(s.start), wall_time(s.end))
            for s in data_io.deserialize_sessions(self._read(config.OVERNIGHT_KEY), config.OVERNIGHT_KEY)
        )
        self._samples.extend(
            SleepinessSample(s.value, wall_time(s.logged_at))
            for s in data_io.deserialize_sleepiness(
                self._read(config.SLEEPINESS_KEY), config.SLEEPINESS_KEY, now=self._clock()
            )
        )
        self._records.extend(self._sessions)
        self._records.extend(self._samples)
        pending = data_io.parse_timestamp(self._read(config.CURRENT_START_KEY))
        self._pending_start = wall_time(pending) if pending is not None else None
        self._update_streak()
        logger.debug(
            "Loaded %d nights and %d sleepiness samples", len(self._sessions), len(self._samples)
        )

    def _update_streak(self) -> None:
        self.streak = compute_streak(self._sessions)

    # ---------- overnight ----------

    def begin_session(self, start: datetime) -> None:
        """Save a bed time, replacing any unfinished one."""
        if self._pending_start is not None:
            logger.info("Replacing pending bed time %s", self._pending_start.isoformat())
        self._pending_start = wall_time(start)
        self._persist()

    def complete_session(self, end: datetime) -> Optional[OvernightSession]:
        """Close the pending night at ``end``.

        Returns ``None`` without touching any state when there is no pending
        bed time or ``end`` is not after it.
        """
        start = self._pending_start
        if start is None:
            return None
        end = wall_time(end)
        if end <= start:
            return None

        session = OvernightSession(start, end)
        self._sessions.append(session)
        self._records.append(session)
        self._pending_start = None
        self._persist()
        self._update_streak()
        return session

    def get_pending_start(self) -> Optional[datetime]:
        return self._pending_start

    def latest_session(self) -> Optional[OvernightSession]:
        return self._sessions[-1] if self._sessions else None

    # ---------- sleepiness ----------

    def log_sleepiness(self, value: int, when: Optional[datetime] = None) -> SleepinessSample:
        sample = SleepinessSample(value, wall_time(when if when is not None else self._clock()))
        self._samples.append(sample)
        self._records.append(sample)
        self._persist()
        return sample

    # ---------- delete ----------

    def _remove(self, collection: list, entry) -> bool:
        index = next((i for i, item in enumerate(collection) if item is entry), None)
        if index is None:
            index = next((i for i, item in enumerate(collection) if item == entry), None)
        if index is None:
            return False

        removed = collection.pop(index)
        for i, item in enumerate(self._records):
            if item is removed:
                del self._records[i]
                break
        return True

    def delete_session(self, session: OvernightSession) -> None:
        if self._remove(self._sessions, session):
            self._persist()
            self._update_streak()

    def delete_sleepiness(self, sample: SleepinessSample) -> None:
        if self._remove(self._samples, sample):
            self._persist()

    def delete_record(self, record: SleepRecord) -> None:
        if isinstance(record, OvernightSession):
            self.delete_session(record)
        elif isinstance(record, SleepinessSample):
            self.delete_sleepiness(record)
        else:
            raise TypeError(f"Unsupported record type: {type(record).__name__}")

    # ---------- getters ----------

    def get_all_sessions(self) -> list[OvernightSession]:
        return self._sessions

    def get_all_sleepiness(self) -> list[SleepinessSample]:
        return self._samples

    def get_all_records(self) -> list[SleepRecord]:
        return self._records
