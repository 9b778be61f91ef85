from __future__ import annotations

from dataclasses import dataclass
from datetime import timedelta
from typing import Optional

from .attendance.service import AttendanceService
from .common.clock import Clock, SystemClock
from .common.ids import IdGenerator
from .core.constants import DEFAULT_EXTRACTION_TIMEOUT_SECONDS, NOTIFICATION_DISMISS_SECONDS
from .reminders.notifier import NotificationCenter, NotificationSink
from .reminders.scheduler import ReminderScheduler
from .reminders.service import ReminderActionService
from .reminders.timers import TimerQueue
from .state.store import AppStateStore
from .storage.json_file_store import JsonFileBlobStore
from .storage.memory_store import InMemoryBlobStore
from .storage.repository import BlobStore
from .timetable.extraction import MockTimetableExtractor, TimetableExtractor
from .timetable.service import TimetableService


@dataclass(frozen=True)
class Container:
    clock: Clock
    blobs: BlobStore
    store: AppStateStore
    timers: TimerQueue
    notifications: NotificationCenter

    timetable_service: TimetableService
    attendance_service: AttendanceService
    reminder_scheduler: ReminderScheduler
    reminder_actions: ReminderActionService

    def shutdown(self) -> None:
        self.reminder_scheduler.shutdown()


def build_container(
    *,
    data_dir: Optional[str] = None,
    blobs: Optional[BlobStore] = None,
    clock: Optional[Clock] = None,
    extractor: Optional[TimetableExtractor] = None,
    sink: Optional[NotificationSink] = None,
    ids: Optional[IdGenerator] = None,
    dismiss_seconds: int = NOTIFICATION_DISMISS_SECONDS,
    extraction_delay_seconds: float = 0.0,
    extraction_timeout_seconds: Optional[float] = DEFAULT_EXTRACTION_TIMEOUT_SECONDS,
) -> Container:
    clock = clock or SystemClock()
    ids = ids or IdGenerator()
    if blobs is None:
        blobs = JsonFileBlobStore(data_dir) if data_dir else InMemoryBlobStore()

    store = AppStateStore(blobs)
    timers = TimerQueue()
    notifications = NotificationCenter(timers, clock, sink=sink, dismiss_after=timedelta(seconds=dismiss_seconds))

    timetable_service = TimetableService(
        store,
        extractor or MockTimetableExtractor(ids=ids, delay_seconds=extraction_delay_seconds),
        ids=ids,
        notifications=notifications,
        extraction_timeout=extraction_timeout_seconds,
    )
    attendance_service = AttendanceService(store, clock)
    reminder_scheduler = ReminderScheduler(store, timers, notifications, clock)
    reminder_actions = ReminderActionService(notifications, attendance_service, timetable_service)

    reminder_scheduler.start()

    return Container(
        clock=clock,
        blobs=blobs,
        store=store,
        timers=timers,
        notifications=notifications,
        timetable_service=timetable_service,
        attendance_service=attendance_service,
        reminder_scheduler=reminder_scheduler,
        reminder_actions=reminder_actions,
    )
