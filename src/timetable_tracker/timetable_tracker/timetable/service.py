from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from concurrent.futures import TimeoutError as FutureTimeout
from datetime import date
from typing import Any, Mapping, Optional

from ..common.ids import IdGenerator
from ..core.enums import Weekday
from ..core.exceptions import ExtractionFailure, NotFoundError
from ..reminders.notifier import NotificationCenter
from ..state.store import AppStateStore
from . import editor, resolver
from .extraction import TimetableExtractor
from .model import DayView, Exam, ExtraClass, Timetable

logger = logging.getLogger(__name__)


class TimetableService:
    """Timetable lifecycle, exception edits and calendar views.

    Edits are routed through the pure transforms in `editor` and applied to
    the state store as one replacement of the whole timetable. Without a
    timetable every edit is a no-op.
    """

    def __init__(
        self,
        store: AppStateStore,
        extractor: TimetableExtractor,
        *,
        ids: Optional[IdGenerator] = None,
        notifications: Optional[NotificationCenter] = None,
        extraction_timeout: Optional[float] = None,
    ):
        self._store = store
        self._extractor = extractor
        self._extraction_timeout = extraction_timeout
        self._ids = ids or IdGenerator()
        self._notifications = notifications

    def current(self) -> Optional[Timetable]:
        return self._store.timetable

    def _require(self) -> Timetable:
        timetable = self._store.timetable
        if timetable is None:
            raise NotFoundError("No timetable has been imported yet")
        return timetable

    # Lifecycle

    def import_timetable(self, source: bytes) -> Timetable:
        logger.info("Extracting timetable from %d byte(s)", len(source or b""))
        try:
            timetable = self._extract(source)
        except ExtractionFailure as e:
            logger.warning("Timetable extraction failed: %s", e)
            raise
        except Exception as e:
            logger.warning("Timetable extraction failed: %s", e)
            raise ExtractionFailure(f"Timetable extraction failed: {e}") from e

        self._store.set_timetable(timetable)
        logger.info("Timetable %s imported", timetable.id)
        return timetable

    def _extract(self, source: bytes) -> Timetable:
        if self._extraction_timeout is None:
            return self._extractor.extract(source)

        executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="timetable-extract")
        try:
            future = executor.submit(self._extractor.extract, source)
            try:
                return future.result(timeout=self._extraction_timeout)
            except FutureTimeout:
                future.cancel()
                raise ExtractionFailure(f"Timetable extraction timed out after {self._extraction_timeout:g}s")
        finally:
            # A hung extractor keeps its worker; the request still returns.
            executor.shutdown(wait=False)

    def reset_timetable(self) -> None:
        self._store.set_timetable(None)

    # Views

    def day_view(self, day: date) -> DayView:
        return resolver.day_view(self._require(), day)

    def week_of(self, day: date) -> list[DayView]:
        return resolver.week_of(self._require(), day)

    def month_days(self, year: int, month: int) -> list[DayView]:
        return resolver.month_days(self._require(), year, month)

    def calendar_grid(self, year: int, month: int) -> list[list[DayView]]:
        return resolver.calendar_grid(self._require(), year, month)

    # Holidays

    def add_holiday(self, day: date, reason: Optional[str] = None) -> None:
        # Dismiss before editing; the re-evaluation may show a new alert.
        if self._notifications is not None:
            self._notifications.dismiss()
        self._store.update_timetable(lambda t: editor.add_holiday(t, day, reason))

    def remove_holiday(self, day: date) -> None:
        self._store.update_timetable(lambda t: editor.remove_holiday(t, day))

    # Recurring classes

    def update_class(self, day: Weekday, class_id: str, patch: Mapping[str, Any], *, strict: bool = False) -> None:
        self._store.update_timetable(lambda t: editor.update_class(t, day, class_id, patch, strict=strict))

    def delete_class(self, day: Weekday, class_id: str, *, strict: bool = False) -> None:
        self._store.update_timetable(lambda t: editor.delete_class(t, day, class_id, strict=strict))

    # Extra classes

    def add_extra_class(
        self,
        *,
        date: date,
        subject: str,
        start_time: str,
        end_time: str,
        room: Optional[str] = None,
    ) -> Optional[ExtraClass]:
        timetable = self._store.timetable
        if timetable is None:
            return None
        updated, extra = editor.add_extra_class(
            timetable,
            ids=self._ids,
            date=date,
            subject=subject,
            start_time=start_time,
            end_time=end_time,
            room=room,
        )
        self._store.set_timetable(updated)
        return extra

    def update_extra_class(self, class_id: str, patch: Mapping[str, Any], *, strict: bool = False) -> None:
        self._store.update_timetable(lambda t: editor.update_extra_class(t, class_id, patch, strict=strict))

    def delete_extra_class(self, class_id: str, *, strict: bool = False) -> None:
        self._store.update_timetable(lambda t: editor.delete_extra_class(t, class_id, strict=strict))

    # Exams

    def add_exam(
        self,
        *,
        date: date,
        subject: str,
        type: str,
        time: Optional[str] = None,
        room: Optional[str] = None,
    ) -> Optional[Exam]:
        timetable = self._store.timetable
        if timetable is None:
            return None
        updated, exam = editor.add_exam(
            timetable, ids=self._ids, date=date, subject=subject, type=type, time=time, room=room
        )
        self._store.set_timetable(updated)
        return exam

    def update_exam(self, exam_id: str, patch: Mapping[str, Any], *, strict: bool = False) -> None:
        self._store.update_timetable(lambda t: editor.update_exam(t, exam_id, patch, strict=strict))

    def delete_exam(self, exam_id: str, *, strict: bool = False) -> None:
        self._store.update_timetable(lambda t: editor.delete_exam(t, exam_id, strict=strict))
