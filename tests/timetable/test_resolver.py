from __future__ import annotations

from dataclasses import replace
from datetime import date, timedelta

from timetable_tracker.core.enums import SessionKind, Weekday
from timetable_tracker.timetable import resolver
from timetable_tracker.timetable.model import Exam, ExtraClass, Holiday, Timetable


def test_sessions_on_monday_returns_recurring_classes_in_order(timetable, monday):
    sessions = resolver.sessions_on(timetable, monday)

    assert [s.id for s in sessions] == ["m1", "m2"]
    assert all(s.kind == SessionKind.RECURRING for s in sessions)
    assert sessions[0].room == "Room 101"


def test_extra_classes_follow_recurring_classes(timetable, monday):
    tt = replace(
        timetable,
        extra_classes=(
            ExtraClass(id="x1", date=monday, subject="Lab", start_time="08:00", end_time="09:00"),
            ExtraClass(id="x2", date=monday + timedelta(days=1), subject="Other day", start_time="08:00", end_time="09:00"),
            ExtraClass(id="x3", date=monday, subject="Seminar", start_time="15:00", end_time="16:00"),
        ),
    )

    sessions = resolver.sessions_on(tt, monday)

    assert [s.id for s in sessions] == ["m1", "m2", "x1", "x3"]
    assert [s.kind for s in sessions][2:] == [SessionKind.EXTRA, SessionKind.EXTRA]


def test_holiday_suppresses_sessions_but_not_exams(timetable, monday):
    tt = replace(
        timetable,
        extra_classes=(ExtraClass(id="x1", date=monday, subject="Lab", start_time="08:00", end_time="09:00"),),
        holidays=(Holiday(date=monday, reason="Founders day"),),
        exams=(Exam(id="e1", date=monday, subject="Math", type="Quiz"),),
    )

    assert resolver.sessions_on(tt, monday) == ()
    assert [e.id for e in resolver.exams_on(tt, monday)] == ["e1"]
    # The weekly schedule itself is untouched.
    assert [c.id for c in tt.day(Weekday.MONDAY).classes] == ["m1", "m2"]


def test_weekend_has_no_sessions(timetable):
    saturday = date(2026, 2, 7)

    assert resolver.sessions_on(timetable, saturday) == ()


def test_missing_weekday_entry_resolves_to_empty(monday):
    tt = Timetable(id="x", name="broken", schedule=())

    assert resolver.sessions_on(tt, monday) == ()


def test_day_view_reports_holiday_and_weekday(timetable, monday):
    tt = replace(timetable, holidays=(Holiday(date=monday),))

    view = resolver.day_view(tt, monday)

    assert view.weekday == Weekday.MONDAY
    assert view.is_holiday
    assert view.sessions == ()


def test_week_of_starts_on_sunday(timetable, monday):
    week = resolver.week_of(timetable, monday)

    assert [v.date for v in week] == [date(2026, 2, 1) + timedelta(days=i) for i in range(7)]
    assert week[0].weekday == Weekday.SUNDAY


def test_month_days_and_calendar_grid(timetable):
    days = resolver.month_days(timetable, 2026, 2)
    grid = resolver.calendar_grid(timetable, 2026, 2)

    assert len(days) == 28
    assert days[0].date == date(2026, 2, 1)
    assert all(len(week) == 7 for week in grid)
    assert grid[0][0].date == date(2026, 2, 1)
    assert grid[-1][-1].date == date(2026, 2, 28)


def test_calendar_grid_includes_spill_over_days(timetable):
    grid = resolver.calendar_grid(timetable, 2026, 3)

    # March 2026 starts on a Sunday and ends on a Tuesday.
    assert grid[0][0].date == date(2026, 3, 1)
    assert grid[-1][-1].date == date(2026, 4, 4)
