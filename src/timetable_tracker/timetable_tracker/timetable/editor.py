"""Exception editing: immutable-update transforms over a Timetable.

Every function takes the current Timetable and returns a new one; the input
is never modified. Edits and deletes that target a missing id are silent
no-ops unless `strict=True`, in which case NotFoundError is raised.
"""
from __future__ import annotations

import logging
from dataclasses import replace
from datetime import date
from typing import Any, Mapping, Optional

from ..common.ids import IdGenerator
from ..core.enums import Weekday
from ..core.exceptions import NotFoundError, ValidationError
from .model import Exam, ExtraClass, Holiday, Timetable

logger = logging.getLogger(__name__)

CLASS_PATCH_FIELDS = frozenset({"subject", "start_time", "end_time", "room"})
EXTRA_CLASS_PATCH_FIELDS = CLASS_PATCH_FIELDS | {"date"}
EXAM_PATCH_FIELDS = frozenset({"date", "subject", "type", "time", "room"})


def _check_patch(patch: Mapping[str, Any], allowed: frozenset[str]) -> dict[str, Any]:
    unknown = set(patch) - allowed
    if unknown:
        raise ValidationError(f"Cannot update field(s): {', '.join(sorted(unknown))}")
    return dict(patch)


def _missing(what: str, key: str, strict: bool) -> None:
    if strict:
        raise NotFoundError(f"{what} {key!r} not found")
    logger.debug("%s %r not found; edit ignored", what, key)


def _fresh_id(ids: IdGenerator, prefix: str, taken: set[str]) -> str:
    new_id = ids.new_id(prefix)
    while new_id in taken:
        new_id = ids.new_id(prefix)
    return new_id


# Holidays

def add_holiday(timetable: Timetable, day: date, reason: Optional[str] = None) -> Timetable:
    if any(h.date == day for h in timetable.holidays):
        return timetable
    return replace(timetable, holidays=timetable.holidays + (Holiday(date=day, reason=reason),))


def remove_holiday(timetable: Timetable, day: date) -> Timetable:
    kept = tuple(h for h in timetable.holidays if h.date != day)
    if len(kept) == len(timetable.holidays):
        return timetable
    return replace(timetable, holidays=kept)


# Recurring classes

def update_class(
    timetable: Timetable,
    day: Weekday,
    class_id: str,
    patch: Mapping[str, Any],
    *,
    strict: bool = False,
) -> Timetable:
    changes = _check_patch(patch, CLASS_PATCH_FIELDS)
    found = False
    schedule = []
    for entry in timetable.schedule:
        if entry.day == day and any(c.id == class_id for c in entry.classes):
            found = True
            entry = replace(
                entry,
                classes=tuple(replace(c, **changes) if c.id == class_id else c for c in entry.classes),
            )
        schedule.append(entry)

    if not found:
        _missing(f"Class on {day.value}", class_id, strict)
        return timetable
    return replace(timetable, schedule=tuple(schedule))


def delete_class(timetable: Timetable, day: Weekday, class_id: str, *, strict: bool = False) -> Timetable:
    found = False
    schedule = []
    for entry in timetable.schedule:
        if entry.day == day:
            kept = tuple(c for c in entry.classes if c.id != class_id)
            if len(kept) != len(entry.classes):
                found = True
                entry = replace(entry, classes=kept)
        schedule.append(entry)

    if not found:
        _missing(f"Class on {day.value}", class_id, strict)
        return timetable
    return replace(timetable, schedule=tuple(schedule))


# Extra classes

def add_extra_class(
    timetable: Timetable,
    *,
    ids: IdGenerator,
    date: date,
    subject: str,
    start_time: str,
    end_time: str,
    room: Optional[str] = None,
) -> tuple[Timetable, ExtraClass]:
    taken = {c.id for c in timetable.extra_classes}
    extra = ExtraClass(
        id=_fresh_id(ids, "extra", taken),
        date=date,
        subject=subject,
        start_time=start_time,
        end_time=end_time,
        room=room,
    )
    return replace(timetable, extra_classes=timetable.extra_classes + (extra,)), extra


def update_extra_class(
    timetable: Timetable,
    class_id: str,
    patch: Mapping[str, Any],
    *,
    strict: bool = False,
) -> Timetable:
    changes = _check_patch(patch, EXTRA_CLASS_PATCH_FIELDS)
    if not any(c.id == class_id for c in timetable.extra_classes):
        _missing("Extra class", class_id, strict)
        return timetable
    return replace(
        timetable,
        extra_classes=tuple(replace(c, **changes) if c.id == class_id else c for c in timetable.extra_classes),
    )


def delete_extra_class(timetable: Timetable, class_id: str, *, strict: bool = False) -> Timetable:
    kept = tuple(c for c in timetable.extra_classes if c.id != class_id)
    if len(kept) == len(timetable.extra_classes):
        _missing("Extra class", class_id, strict)
        return timetable
    return replace(timetable, extra_classes=kept)


# Exams

def add_exam(
    timetable: Timetable,
    *,
    ids: IdGenerator,
    date: date,
    subject: str,
    type: str,
    time: Optional[str] = None,
    room: Optional[str] = None,
) -> tuple[Timetable, Exam]:
    taken = {e.id for e in timetable.exams}
    exam = Exam(id=_fresh_id(ids, "exam", taken), date=date, subject=subject, type=type, time=time, room=room)
    return replace(timetable, exams=timetable.exams + (exam,)), exam


def update_exam(timetable: Timetable, exam_id: str, patch: Mapping[str, Any], *, strict: bool = False) -> Timetable:
    changes = _check_patch(patch, EXAM_PATCH_FIELDS)
    if not any(e.id == exam_id for e in timetable.exams):
        _missing("Exam", exam_id, strict)
        return timetable
    return replace(
        timetable,
        exams=tuple(replace(e, **changes) if e.id == exam_id else e for e in timetable.exams),
    )


def delete_exam(timetable: Timetable, exam_id: str, *, strict: bool = False) -> Timetable:
    kept = tuple(e for e in timetable.exams if e.id != exam_id)
    if len(kept) == len(timetable.exams):
        _missing("Exam", exam_id, strict)
        return timetable
    return replace(timetable, exams=kept)
