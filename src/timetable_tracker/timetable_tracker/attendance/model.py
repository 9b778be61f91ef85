from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Any

from ..common.datetime_utils import format_iso_date, from_epoch_millis, parse_iso_date, to_epoch_millis
from ..core.enums import AttendanceStatus


@dataclass(frozen=True)
class AttendanceRecord:
    """One attendance mark. (date, class_id) is unique within the ledger."""

    date: date
    class_id: str
    subject: str
    status: AttendanceStatus
    timestamp: datetime

    @property
    def key(self) -> tuple[date, str]:
        return (self.date, self.class_id)

    def to_dict(self) -> dict[str, Any]:
        return {
            "date": format_iso_date(self.date),
            "classId": self.class_id,
            "subject": self.subject,
            "status": self.status.value,
            "timestamp": to_epoch_millis(self.timestamp),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "AttendanceRecord":
        return cls(
            date=parse_iso_date(data["date"]),
            class_id=str(data["classId"]),
            subject=str(data["subject"]),
            status=AttendanceStatus(data["status"]),
            timestamp=from_epoch_millis(data["timestamp"]),
        )


@dataclass(frozen=True)
class OverallStats:
    total: int
    present: int
    percentage: int

    def to_dict(self) -> dict[str, int]:
        return {"total": self.total, "present": self.present, "percentage": self.percentage}


@dataclass(frozen=True)
class SubjectStats:
    subject: str
    present: int
    total: int
    percentage: int

    def to_dict(self) -> dict[str, Any]:
        return {
            "subject": self.subject,
            "present": self.present,
            "total": self.total,
            "percentage": self.percentage,
        }


@dataclass(frozen=True)
class DayProgress:
    """How many of a day's sessions and exams have been marked."""

    date: date
    marked: int
    total: int
    percentage: int

    def to_dict(self) -> dict[str, Any]:
        return {
            "date": format_iso_date(self.date),
            "marked": self.marked,
            "total": self.total,
            "percentage": self.percentage,
        }
