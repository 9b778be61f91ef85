from __future__ import annotations

from datetime import date, datetime

import pytest

from timetable_tracker.attendance import ledger
from timetable_tracker.attendance.model import AttendanceRecord
from timetable_tracker.core.enums import AttendanceStatus
from timetable_tracker.core.exceptions import ValidationError

PRESENT = AttendanceStatus.PRESENT
ABSENT = AttendanceStatus.ABSENT


def _rec(day, class_id, subject, status, minute=0):
    return AttendanceRecord(date=day, class_id=class_id, subject=subject, status=status, timestamp=datetime(2026, 2, 1, 9, minute))


def test_status_defaults_to_pending(monday):
    assert ledger.status_of((), monday, "m1") == AttendanceStatus.PENDING


def test_marking_twice_keeps_one_record(monday):
    now = datetime(2026, 2, 2, 9, 5)
    records = ledger.mark((), day=monday, class_id="m1", subject="Math", status=PRESENT, now=now)
    records = ledger.mark(records, day=monday, class_id="m1", subject="Math", status=PRESENT, now=now)

    assert len(records) == 1
    assert ledger.status_of(records, monday, "m1") == PRESENT


def test_later_mark_overrides_earlier_one(monday):
    first = datetime(2026, 2, 2, 9, 5)
    later = datetime(2026, 2, 2, 9, 30)
    records = ledger.mark((), day=monday, class_id="m1", subject="Math", status=PRESENT, now=first)
    records = ledger.mark(records, day=monday, class_id="m1", subject="Math", status=ABSENT, now=later)

    assert len(records) == 1
    assert records[0].status == ABSENT
    assert records[0].timestamp == later


def test_same_class_on_other_date_is_a_separate_key(monday):
    now = datetime(2026, 2, 9, 9, 0)
    records = ledger.mark((), day=monday, class_id="m1", subject="Math", status=PRESENT, now=now)
    records = ledger.mark(records, day=date(2026, 2, 9), class_id="m1", subject="Math", status=ABSENT, now=now)

    assert len(records) == 2
    assert ledger.status_of(records, monday, "m1") == PRESENT


def test_pending_cannot_be_recorded(monday):
    with pytest.raises(ValidationError):
        ledger.mark((), day=monday, class_id="m1", subject="Math", status=AttendanceStatus.PENDING, now=datetime.now())


def test_mark_all_present_replaces_only_that_day(monday):
    other = date(2026, 1, 30)
    existing = (
        _rec(other, "f1", "Economics", ABSENT),
        _rec(monday, "m1", "Math", ABSENT),
    )

    records = ledger.mark_all_present(
        existing,
        day=monday,
        items=[("m1", "Math"), ("m2", "Physics"), ("x1", "Lab"), ("e1", "Math")],
        now=datetime(2026, 2, 2, 18, 0),
    )

    assert records[0] == existing[0]
    today = ledger.records_on(records, monday)
    assert [r.class_id for r in today] == ["m1", "m2", "x1", "e1"]
    assert all(r.status == PRESENT for r in today)


def test_stats_with_no_records_are_zero():
    overall = ledger.stats_overall(())

    assert (overall.total, overall.present, overall.percentage) == (0, 0, 0)
    assert ledger.stats_by_subject(()) == []


def test_stats_by_subject_sorted_by_percentage(monday):
    records = (
        _rec(monday, "a", "Math", PRESENT),
        _rec(monday, "b", "Math", ABSENT),
        _rec(monday, "c", "Math", ABSENT),
        _rec(monday, "d", "Physics", PRESENT),
        _rec(monday, "e", "English", ABSENT),
    )

    stats = ledger.stats_by_subject(records)

    assert [(s.subject, s.present, s.total, s.percentage) for s in stats] == [
        ("Physics", 1, 1, 100),
        ("Math", 1, 3, 33),
        ("English", 0, 1, 0),
    ]
    overall = ledger.stats_overall(records)
    assert (overall.total, overall.present, overall.percentage) == (5, 2, 40)


def test_percentage_rounds_half_up(monday):
    records = tuple(_rec(monday, str(i), "Math", PRESENT if i == 0 else ABSENT) for i in range(8))

    # 1 of 8 is 12.5%
    assert ledger.stats_overall(records).percentage == 13


def test_history_groups_by_date_most_recent_first(monday):
    older = date(2026, 1, 26)
    records = (
        _rec(older, "m1", "Math", PRESENT),
        _rec(monday, "m1", "Math", ABSENT),
        _rec(older, "m2", "Physics", PRESENT),
    )

    history = ledger.history(records)

    assert list(history) == [monday, older]
    assert [r.class_id for r in history[older]] == ["m1", "m2"]


def test_day_progress(monday):
    records = (_rec(monday, "m1", "Math", ABSENT),)

    progress = ledger.day_progress(records, monday, ["m1", "m2", "e1"])

    assert (progress.marked, progress.total, progress.percentage) == (1, 3, 33)
    assert ledger.day_progress((), monday, []).percentage == 0
