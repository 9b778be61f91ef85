from __future__ import annotations

from typing import Optional

from ..attendance.model import AttendanceRecord
from ..attendance.service import AttendanceService
from ..core.enums import AttendanceStatus
from ..core.exceptions import ValidationError
from ..timetable.service import TimetableService
from .model import Notification
from .notifier import NotificationCenter


class ReminderActionService:
    """User actions available on the notification currently on display."""

    def __init__(
        self,
        notifications: NotificationCenter,
        attendance: AttendanceService,
        timetables: TimetableService,
    ):
        self._notifications = notifications
        self._attendance = attendance
        self._timetables = timetables

    def active(self) -> Optional[Notification]:
        return self._notifications.active

    def _active_class_reminder(self) -> Notification:
        notification = self._notifications.active
        if notification is None or not notification.is_class_reminder:
            raise ValidationError("No class reminder is on display")
        return notification

    def mark_present(self) -> AttendanceRecord:
        n = self._active_class_reminder()
        self._notifications.dismiss()
        return self._attendance.mark(n.date, n.class_id, n.subject, AttendanceStatus.PRESENT)

    def mark_holiday(self) -> None:
        n = self._active_class_reminder()
        self._notifications.dismiss()
        self._timetables.add_holiday(n.date)

    def close(self) -> None:
        self._notifications.dismiss()
