"""Application state: the three persisted aggregates behind one object.

All writes go through `set_*` / `update_*`, each of which swaps one whole
aggregate, saves its key and then notifies listeners with the changed keys.
Writes and transforms run under one re-entrant lock, so a transform always
sees the result of the previous one.
"""
from __future__ import annotations

import logging
import threading
from typing import Callable, Optional

from ..attendance.model import AttendanceRecord
from ..core.constants import ATTENDANCE_KEY, SETTINGS_KEY, STATE_KEYS, TIMETABLE_KEY
from ..settings.model import AppSettings
from ..storage.repository import BlobStore
from ..timetable.model import Timetable

logger = logging.getLogger(__name__)

Listener = Callable[[frozenset], None]


class AppStateStore:
    def __init__(self, blobs: BlobStore):
        self._blobs = blobs
        self._listeners: list[Listener] = []
        self._lock = threading.RLock()

        raw_timetable = blobs.load(TIMETABLE_KEY)
        self._timetable: Optional[Timetable] = Timetable.from_dict(raw_timetable) if raw_timetable else None
        self._attendance: tuple[AttendanceRecord, ...] = tuple(
            AttendanceRecord.from_dict(r) for r in blobs.load(ATTENDANCE_KEY) or []
        )
        self._settings = AppSettings.from_dict(blobs.load(SETTINGS_KEY))
        logger.debug(
            "State loaded (timetable=%s, records=%d)",
            self._timetable.id if self._timetable else None,
            len(self._attendance),
        )

    @property
    def lock(self) -> threading.RLock:
        return self._lock

    @property
    def timetable(self) -> Optional[Timetable]:
        return self._timetable

    @property
    def attendance(self) -> tuple[AttendanceRecord, ...]:
        return self._attendance

    @property
    def settings(self) -> AppSettings:
        return self._settings

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register a change listener; returns a function that removes it."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _notify(self, keys: frozenset) -> None:
        for listener in list(self._listeners):
            listener(keys)

    # Timetable

    def set_timetable(self, timetable: Optional[Timetable]) -> None:
        with self._lock:
            self._timetable = timetable
            if timetable is None:
                self._blobs.delete(TIMETABLE_KEY)
            else:
                self._blobs.save(TIMETABLE_KEY, timetable.to_dict())
            self._notify(frozenset({TIMETABLE_KEY}))

    def update_timetable(self, transform: Callable[[Timetable], Timetable]) -> Optional[Timetable]:
        """Apply a pure transform to the current timetable.

        Without a timetable nothing happens. A transform that returns the same
        object is treated as a no-op and is neither saved nor announced.
        """
        with self._lock:
            current = self._timetable
            if current is None:
                return None
            updated = transform(current)
            if updated is not current:
                self.set_timetable(updated)
            return updated

    # Attendance

    def set_attendance(self, records: tuple[AttendanceRecord, ...]) -> None:
        with self._lock:
            self._attendance = tuple(records)
            self._blobs.save(ATTENDANCE_KEY, [r.to_dict() for r in self._attendance])
            self._notify(frozenset({ATTENDANCE_KEY}))

    def update_attendance(
        self, transform: Callable[[tuple[AttendanceRecord, ...]], tuple[AttendanceRecord, ...]]
    ) -> tuple[AttendanceRecord, ...]:
        with self._lock:
            self.set_attendance(transform(self._attendance))
            return self._attendance

    # Settings

    def set_settings(self, settings: AppSettings) -> None:
        with self._lock:
            self._settings = settings
            self._blobs.save(SETTINGS_KEY, settings.to_dict())
            self._notify(frozenset({SETTINGS_KEY}))

    def clear_all(self) -> None:
        """Forget everything: no timetable, no records, default settings."""
        with self._lock:
            for key in STATE_KEYS:
                self._blobs.delete(key)
            self._timetable = None
            self._attendance = ()
            self._settings = AppSettings()
            logger.info("All stored data cleared")
            self._notify(frozenset(STATE_KEYS))
