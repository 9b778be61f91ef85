"""Schedule resolution: which sessions and exams apply on a given date.

All functions are pure reads over a Timetable. Holidays suppress recurring
and extra sessions but never exams.
"""
from __future__ import annotations

import calendar
from datetime import date, timedelta
from typing import Optional

from ..core.enums import SessionKind, Weekday
from .model import DayView, Exam, Holiday, ResolvedSession, Timetable


def holiday_on(timetable: Timetable, day: date) -> Optional[Holiday]:
    for holiday in timetable.holidays:
        if holiday.date == day:
            return holiday
    return None


def is_holiday(timetable: Timetable, day: date) -> bool:
    return holiday_on(timetable, day) is not None


def scheduled_sessions(timetable: Timetable, day: date) -> tuple[ResolvedSession, ...]:
    """Recurring classes for the weekday followed by extra classes on that date.

    Ignores holidays; `sessions_on` is the holiday-aware variant.
    """
    entry = timetable.day(Weekday.from_date(day))
    recurring = entry.classes if entry else ()

    out = [
        ResolvedSession(
            id=c.id,
            subject=c.subject,
            start_time=c.start_time,
            end_time=c.end_time,
            room=c.room,
            kind=SessionKind.RECURRING,
        )
        for c in recurring
    ]
    out.extend(
        ResolvedSession(
            id=c.id,
            subject=c.subject,
            start_time=c.start_time,
            end_time=c.end_time,
            room=c.room,
            kind=SessionKind.EXTRA,
        )
        for c in timetable.extra_classes
        if c.date == day
    )
    return tuple(out)


def sessions_on(timetable: Timetable, day: date) -> tuple[ResolvedSession, ...]:
    if is_holiday(timetable, day):
        return ()
    return scheduled_sessions(timetable, day)


def exams_on(timetable: Timetable, day: date) -> tuple[Exam, ...]:
    return tuple(e for e in timetable.exams if e.date == day)


def day_view(timetable: Timetable, day: date) -> DayView:
    return DayView(
        date=day,
        weekday=Weekday.from_date(day),
        holiday=holiday_on(timetable, day),
        sessions=sessions_on(timetable, day),
        exams=exams_on(timetable, day),
    )


def days_between(timetable: Timetable, start: date, end: date) -> list[DayView]:
    """Day views for every date from start to end, both inclusive."""
    out: list[DayView] = []
    current = start
    while current <= end:
        out.append(day_view(timetable, current))
        current += timedelta(days=1)
    return out


def start_of_week(day: date) -> date:
    # Weeks start on Sunday in calendar views.
    return day - timedelta(days=(day.weekday() + 1) % 7)


def week_of(timetable: Timetable, day: date) -> list[DayView]:
    start = start_of_week(day)
    return days_between(timetable, start, start + timedelta(days=6))


def month_days(timetable: Timetable, year: int, month: int) -> list[DayView]:
    last = calendar.monthrange(year, month)[1]
    return days_between(timetable, date(year, month, 1), date(year, month, last))


def calendar_grid(timetable: Timetable, year: int, month: int) -> list[list[DayView]]:
    """Whole Sunday-start weeks covering the month, including spill-over days."""
    first = date(year, month, 1)
    last = date(year, month, calendar.monthrange(year, month)[1])
    start = start_of_week(first)
    end = start_of_week(last) + timedelta(days=6)

    days = days_between(timetable, start, end)
    return [days[i:i + 7] for i in range(0, len(days), 7)]
