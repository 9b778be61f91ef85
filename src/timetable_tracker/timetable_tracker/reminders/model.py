from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Any, Optional

from ..common.datetime_utils import format_iso_date
from ..core.enums import ReminderState


@dataclass(frozen=True)
class Notification:
    """Payload handed to the notification sink.

    Class reminders carry class_id/subject/date so the user can act on them;
    exam-eve alerts do not.
    """

    title: str
    body: str
    class_id: Optional[str] = None
    subject: Optional[str] = None
    date: Optional[date] = None

    @property
    def is_class_reminder(self) -> bool:
        return self.class_id is not None

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"title": self.title, "body": self.body}
        if self.class_id is not None:
            data["classId"] = self.class_id
        if self.subject is not None:
            data["subject"] = self.subject
        if self.date is not None:
            data["date"] = format_iso_date(self.date)
        return data


@dataclass
class ScheduledReminder:
    class_id: str
    subject: str
    date: date
    fire_at: datetime
    state: ReminderState = ReminderState.ARMED

    def to_dict(self) -> dict[str, Any]:
        return {
            "classId": self.class_id,
            "subject": self.subject,
            "date": format_iso_date(self.date),
            "fireAt": self.fire_at.isoformat(timespec="seconds"),
            "state": self.state.value,
        }


@dataclass(frozen=True)
class ReminderPass:
    """Outcome of one re-evaluation of the reminder scheduler."""

    evaluated_at: datetime
    state: ReminderState
    reason: Optional[str] = None
    exam_alert: Optional[Notification] = None
    scheduled: tuple[ScheduledReminder, ...] = field(default_factory=tuple)

    def to_dict(self) -> dict[str, Any]:
        return {
            "evaluatedAt": self.evaluated_at.isoformat(timespec="seconds"),
            "state": self.state.value,
            "reason": self.reason,
            "examAlert": self.exam_alert.to_dict() if self.exam_alert else None,
            "scheduled": [r.to_dict() for r in self.scheduled],
        }
