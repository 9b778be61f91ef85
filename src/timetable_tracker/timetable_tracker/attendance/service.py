from __future__ import annotations

from datetime import date
from typing import Optional

from ..common.clock import Clock
from ..core.enums import AttendanceStatus
from ..state.store import AppStateStore
from ..timetable import resolver
from . import ledger
from .model import AttendanceRecord, DayProgress, OverallStats, SubjectStats


class AttendanceService:
    def __init__(self, store: AppStateStore, clock: Clock):
        self._store = store
        self._clock = clock

    def mark(self, day: date, class_id: str, subject: str, status: AttendanceStatus) -> AttendanceRecord:
        now = self._clock.now()
        updated = self._store.update_attendance(
            lambda records: ledger.mark(records, day=day, class_id=class_id, subject=subject, status=status, now=now)
        )
        return ledger.find(updated, day, class_id)

    def status_of(self, day: date, class_id: str) -> AttendanceStatus:
        return ledger.status_of(self._store.attendance, day, class_id)

    def records_on(self, day: date) -> tuple[AttendanceRecord, ...]:
        return ledger.records_on(self._store.attendance, day)

    def mark_all_today(self) -> list[AttendanceRecord]:
        """Mark every session and exam resolved for today as present.

        Today's previous records are replaced as a whole; other dates are untouched.
        """
        timetable = self._store.timetable
        if timetable is None:
            return []

        now = self._clock.now()
        today = now.date()
        items = [(s.id, s.subject) for s in resolver.sessions_on(timetable, today)]
        items.extend((e.id, e.subject) for e in resolver.exams_on(timetable, today))

        updated = self._store.update_attendance(
            lambda records: ledger.mark_all_present(records, day=today, items=items, now=now)
        )
        return list(ledger.records_on(updated, today))

    def stats_overall(self) -> OverallStats:
        return ledger.stats_overall(self._store.attendance)

    def stats_by_subject(self) -> list[SubjectStats]:
        return ledger.stats_by_subject(self._store.attendance)

    def history(self) -> dict[date, list[AttendanceRecord]]:
        return ledger.history(self._store.attendance)

    def day_progress(self, day: Optional[date] = None) -> DayProgress:
        day = day or self._clock.today()
        timetable = self._store.timetable
        item_ids: list[str] = []
        if timetable is not None:
            item_ids = [s.id for s in resolver.sessions_on(timetable, day)]
            item_ids.extend(e.id for e in resolver.exams_on(timetable, day))
        return ledger.day_progress(self._store.attendance, day, item_ids)
