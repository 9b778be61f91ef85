from __future__ import annotations

from datetime import datetime

import pytest

from timetable_tracker.core.enums import AttendanceStatus, ReminderState
from timetable_tracker.core.exceptions import ValidationError
from timetable_tracker.timetable import resolver


@pytest.fixture
def reminder_on_display(loaded_container, clock):
    clock.current = datetime(2026, 2, 2, 8, 50)
    loaded_container.reminder_scheduler.tick()
    assert loaded_container.notifications.active.class_id == "m1"
    return loaded_container


def test_mark_present_records_attendance_and_dismisses(reminder_on_display, monday, clock, sink):
    c = reminder_on_display

    record = c.reminder_actions.mark_present()

    assert record.class_id == "m1"
    assert record.status == AttendanceStatus.PRESENT
    assert record.timestamp == clock.now()
    assert c.attendance_service.status_of(monday, "m1") == AttendanceStatus.PRESENT
    assert c.notifications.active is None
    assert sink.dismissed == 1
    assert [r.class_id for r in c.reminder_scheduler.reminders] == ["m2"]


def test_mark_holiday_marks_the_whole_day(reminder_on_display, monday):
    c = reminder_on_display

    c.reminder_actions.mark_holiday()

    assert resolver.is_holiday(c.store.timetable, monday)
    assert c.notifications.active is None
    assert c.reminder_scheduler.state == ReminderState.SUPPRESSED


def test_close_only_dismisses(reminder_on_display, monday):
    c = reminder_on_display

    c.reminder_actions.close()

    assert c.notifications.active is None
    assert c.store.attendance == ()
    assert not resolver.is_holiday(c.store.timetable, monday)


def test_actions_require_a_class_reminder(loaded_container):
    with pytest.raises(ValidationError):
        loaded_container.reminder_actions.mark_present()
    with pytest.raises(ValidationError):
        loaded_container.reminder_actions.mark_holiday()
