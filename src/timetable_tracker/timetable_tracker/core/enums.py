from __future__ import annotations

from datetime import date
from enum import Enum


class Weekday(str, Enum):
    """Canonical weekday identifier, independent of the display locale."""

    MONDAY = "Monday"
    TUESDAY = "Tuesday"
    WEDNESDAY = "Wednesday"
    THURSDAY = "Thursday"
    FRIDAY = "Friday"
    SATURDAY = "Saturday"
    SUNDAY = "Sunday"

    @classmethod
    def from_date(cls, value: date) -> "Weekday":
        return _ORDERED[value.weekday()]


_ORDERED = tuple(Weekday)

WORKING_DAYS = _ORDERED[:5]


class AttendanceStatus(str, Enum):
    """Attendance state of one session on one date.

    PENDING is never stored: it is reported when no record exists.
    """

    PRESENT = "present"
    ABSENT = "absent"
    PENDING = "pending"


class SessionKind(str, Enum):
    RECURRING = "recurring"
    EXTRA = "extra"


class ExamType(str, Enum):
    """Well-known exam types; their spelling is normalised on input. Other types pass through."""

    MIDTERM = "Midterm"
    FINAL = "Final"
    QUIZ = "Quiz"
    PRACTICAL = "Practical"
    VIVA = "Viva"


class ReminderState(str, Enum):
    IDLE = "IDLE"
    SUPPRESSED = "SUPPRESSED"
    EXAM_EVE = "EXAM_EVE"
    ARMED = "ARMED"
    FIRED = "FIRED"
