from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Any, Optional

from ..common.datetime_utils import format_iso_date, from_epoch_millis, parse_iso_date, to_epoch_millis
from ..core.enums import SessionKind, Weekday


@dataclass(frozen=True)
class ClassSession:
    """One recurring class slot inside a weekday. Times are 24h HH:MM strings."""

    id: str
    subject: str
    start_time: str
    end_time: str
    room: Optional[str] = None

    def to_dict(self) -> dict[str, Any]:
        return _drop_none(
            {
                "id": self.id,
                "subject": self.subject,
                "startTime": self.start_time,
                "endTime": self.end_time,
                "room": self.room,
            }
        )

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ClassSession":
        return cls(
            id=str(data["id"]),
            subject=str(data["subject"]),
            start_time=str(data["startTime"]),
            end_time=str(data["endTime"]),
            room=data.get("room"),
        )


@dataclass(frozen=True)
class DayTimetable:
    day: Weekday
    classes: tuple[ClassSession, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        return {"day": self.day.value, "classes": [c.to_dict() for c in self.classes]}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "DayTimetable":
        return cls(
            day=Weekday(data["day"]),
            classes=tuple(ClassSession.from_dict(c) for c in data.get("classes") or []),
        )


@dataclass(frozen=True)
class ExtraClass:
    """A one-off session on a specific date, outside the weekly pattern."""

    id: str
    date: date
    subject: str
    start_time: str
    end_time: str
    room: Optional[str] = None

    def to_dict(self) -> dict[str, Any]:
        return _drop_none(
            {
                "id": self.id,
                "date": format_iso_date(self.date),
                "subject": self.subject,
                "startTime": self.start_time,
                "endTime": self.end_time,
                "room": self.room,
            }
        )

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ExtraClass":
        return cls(
            id=str(data["id"]),
            date=parse_iso_date(data["date"]),
            subject=str(data["subject"]),
            start_time=str(data["startTime"]),
            end_time=str(data["endTime"]),
            room=data.get("room"),
        )


@dataclass(frozen=True)
class Holiday:
    date: date
    reason: Optional[str] = None

    def to_dict(self) -> dict[str, Any]:
        return _drop_none({"date": format_iso_date(self.date), "reason": self.reason})

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Holiday":
        return cls(date=parse_iso_date(data["date"]), reason=data.get("reason"))


@dataclass(frozen=True)
class Exam:
    """An exam. `type` is an open string; see ExamType for the usual values."""

    id: str
    date: date
    subject: str
    type: str
    time: Optional[str] = None
    room: Optional[str] = None

    def to_dict(self) -> dict[str, Any]:
        return _drop_none(
            {
                "id": self.id,
                "date": format_iso_date(self.date),
                "subject": self.subject,
                "type": self.type,
                "time": self.time,
                "room": self.room,
            }
        )

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Exam":
        return cls(
            id=str(data["id"]),
            date=parse_iso_date(data["date"]),
            subject=str(data["subject"]),
            type=str(data["type"]),
            time=data.get("time"),
            room=data.get("room"),
        )


def full_week(days: tuple[DayTimetable, ...] = ()) -> tuple[DayTimetable, ...]:
    """Return exactly one entry per weekday, Monday..Sunday, keeping given classes."""
    by_day = {d.day: d for d in days}
    return tuple(by_day.get(day) or DayTimetable(day=day) for day in Weekday)


@dataclass(frozen=True)
class Timetable:
    """Root aggregate. Always replaced as a whole, never mutated in place."""

    id: str
    name: str
    schedule: tuple[DayTimetable, ...] = field(default_factory=full_week)
    extra_classes: tuple[ExtraClass, ...] = ()
    holidays: tuple[Holiday, ...] = ()
    exams: tuple[Exam, ...] = ()
    created_at: datetime = field(default_factory=datetime.now)

    def day(self, weekday: Weekday) -> Optional[DayTimetable]:
        for entry in self.schedule:
            if entry.day == weekday:
                return entry
        return None

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "schedule": [d.to_dict() for d in self.schedule],
            "extraClasses": [c.to_dict() for c in self.extra_classes],
            "holidays": [h.to_dict() for h in self.holidays],
            "exams": [e.to_dict() for e in self.exams],
            "createdAt": to_epoch_millis(self.created_at),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Timetable":
        return cls(
            id=str(data["id"]),
            name=str(data.get("name") or ""),
            schedule=full_week(tuple(DayTimetable.from_dict(d) for d in data.get("schedule") or [])),
            extra_classes=tuple(ExtraClass.from_dict(c) for c in data.get("extraClasses") or []),
            holidays=tuple(Holiday.from_dict(h) for h in data.get("holidays") or []),
            exams=tuple(Exam.from_dict(e) for e in data.get("exams") or []),
            created_at=from_epoch_millis(data["createdAt"]) if data.get("createdAt") else datetime.now(),
        )


@dataclass(frozen=True)
class ResolvedSession:
    """A session occurring on a concrete date (recurring or extra)."""

    id: str
    subject: str
    start_time: str
    end_time: str
    kind: SessionKind
    room: Optional[str] = None

    def to_dict(self) -> dict[str, Any]:
        return _drop_none(
            {
                "id": self.id,
                "subject": self.subject,
                "startTime": self.start_time,
                "endTime": self.end_time,
                "room": self.room,
                "kind": self.kind.value,
            }
        )


@dataclass(frozen=True)
class DayView:
    """Read-model for one calendar date."""

    date: date
    weekday: Weekday
    holiday: Optional[Holiday]
    sessions: tuple[ResolvedSession, ...]
    exams: tuple[Exam, ...]

    @property
    def is_holiday(self) -> bool:
        return self.holiday is not None

    def to_dict(self) -> dict[str, Any]:
        return {
            "date": format_iso_date(self.date),
            "weekday": self.weekday.value,
            "holiday": self.holiday.to_dict() if self.holiday else None,
            "sessions": [s.to_dict() for s in self.sessions],
            "exams": [e.to_dict() for e in self.exams],
        }


def _drop_none(data: dict[str, Any]) -> dict[str, Any]:
    return {k: v for k, v in data.items() if v is not None}
