from __future__ import annotations

from dataclasses import replace
from datetime import date, datetime, timedelta

from timetable_tracker.core.enums import AttendanceStatus, ReminderState
from timetable_tracker.settings.model import AppSettings
from timetable_tracker.timetable.model import Exam, ExtraClass, Holiday

TUESDAY = date(2026, 2, 3)


def test_arms_one_timer_per_upcoming_session(loaded_container):
    scheduler = loaded_container.reminder_scheduler

    last = scheduler.last_pass
    assert last.state == ReminderState.ARMED
    assert [(r.class_id, r.fire_at) for r in last.scheduled] == [
        ("m1", datetime(2026, 2, 2, 8, 50)),
        ("m2", datetime(2026, 2, 2, 10, 50)),
    ]


def test_timer_fires_class_reminder(loaded_container, clock, sink, monday):
    scheduler = loaded_container.reminder_scheduler

    clock.advance(minutes=50)
    assert scheduler.tick() == 1

    n = sink.shown[-1]
    assert n.title == "Class Reminder"
    assert n.body == "Your Math class starts in 10 minutes."
    assert (n.class_id, n.subject, n.date) == ("m1", "Math", monday)
    assert scheduler.state == ReminderState.ARMED

    clock.advance(hours=2)
    scheduler.tick()
    assert sink.shown[-1].class_id == "m2"
    assert scheduler.state == ReminderState.FIRED


def test_notification_auto_dismisses_after_five_seconds(loaded_container, clock, sink):
    c = loaded_container
    clock.current = datetime(2026, 2, 2, 8, 50)
    c.reminder_scheduler.tick()
    assert c.notifications.active is not None

    clock.advance(seconds=4)
    c.reminder_scheduler.tick()
    assert c.notifications.active is not None

    clock.advance(seconds=1)
    c.reminder_scheduler.tick()
    assert c.notifications.active is None
    assert sink.dismissed == 1


def test_reminders_already_past_are_not_scheduled(loaded_container, clock):
    clock.current = datetime(2026, 2, 2, 8, 50)

    result = loaded_container.reminder_scheduler.evaluate()

    assert [r.class_id for r in result.scheduled] == ["m2"]


def test_exam_tomorrow_takes_precedence_over_class_reminders(loaded_container, timetable, sink):
    c = loaded_container
    c.store.set_timetable(
        replace(
            timetable,
            exams=(
                Exam(id="e1", date=TUESDAY, subject="Physics", type="Midterm", time="10:00"),
                Exam(id="e2", date=TUESDAY, subject="English", type="Quiz"),
            ),
        )
    )

    last = c.reminder_scheduler.last_pass
    assert last.state == ReminderState.EXAM_EVE
    assert last.scheduled == ()
    assert c.reminder_scheduler.reminders == []
    assert sink.shown[-1].title == "Upcoming Exam Tomorrow!"
    assert sink.shown[-1].body == "Don't forget: Physics (Midterm) is scheduled for tomorrow at 10:00."
    assert sink.shown[-1].class_id is None


def test_disabled_notifications_suppress_everything(loaded_container):
    c = loaded_container
    c.store.set_settings(AppSettings(notifications_enabled=False))

    assert c.reminder_scheduler.last_pass.state == ReminderState.SUPPRESSED
    assert len(c.timers) == 0


def test_holiday_today_suppresses_reminders(loaded_container, monday):
    c = loaded_container
    c.timetable_service.add_holiday(monday)

    assert c.reminder_scheduler.state == ReminderState.SUPPRESSED
    assert c.reminder_scheduler.last_pass.reason == "holiday"


def test_fully_marked_day_suppresses_reminders(loaded_container, monday):
    c = loaded_container
    c.attendance_service.mark(monday, "m1", "Math", AttendanceStatus.PRESENT)
    assert c.reminder_scheduler.state == ReminderState.ARMED

    c.attendance_service.mark(monday, "m2", "Physics", AttendanceStatus.ABSENT)
    assert c.reminder_scheduler.last_pass.reason == "day fully marked"


def test_marking_a_session_drops_its_reminder(loaded_container, monday):
    c = loaded_container
    c.attendance_service.mark(monday, "m1", "Math", AttendanceStatus.PRESENT)

    assert [r.class_id for r in c.reminder_scheduler.reminders] == ["m2"]


def test_settings_change_rearms_without_stale_timers(loaded_container, clock, sink):
    c = loaded_container
    c.store.set_settings(AppSettings(reminder_minutes_before=30))

    clock.current = datetime(2026, 2, 2, 8, 30)
    c.reminder_scheduler.tick()
    assert sink.shown[-1].body == "Your Math class starts in 30 minutes."

    shown = len(sink.shown)
    clock.current = datetime(2026, 2, 2, 8, 50)
    c.reminder_scheduler.tick()
    assert len(sink.shown) == shown


def test_simultaneous_reminders_fire_and_last_one_stays_on_display(loaded_container, timetable, monday, clock, sink):
    c = loaded_container
    c.store.set_timetable(
        replace(
            timetable,
            extra_classes=(ExtraClass(id="x1", date=monday, subject="Lab", start_time="09:00", end_time="10:00"),),
        )
    )

    clock.current = datetime(2026, 2, 2, 8, 50)
    assert c.reminder_scheduler.tick() == 2
    assert [n.class_id for n in sink.shown[-2:]] == ["m1", "x1"]
    assert c.notifications.active.class_id == "x1"


def test_shutdown_cancels_all_timers(loaded_container, clock, sink):
    c = loaded_container
    c.reminder_scheduler.shutdown()

    clock.advance(hours=6)
    assert c.reminder_scheduler.tick() == 0
    assert sink.shown == []

    # No longer following the store either.
    c.store.set_timetable(replace(c.store.timetable, holidays=(Holiday(date=TUESDAY),)))
    assert len(c.timers) == 0


def test_no_timetable_is_suppressed(container):
    assert container.reminder_scheduler.last_pass.state == ReminderState.SUPPRESSED
    assert container.reminder_scheduler.last_pass.reason == "no timetable"


def test_evening_pass_with_nothing_left_is_idle(loaded_container, clock):
    clock.current = datetime(2026, 2, 2, 20, 0)

    result = loaded_container.reminder_scheduler.evaluate()

    assert result.state == ReminderState.IDLE
    assert result.scheduled == ()
    assert loaded_container.reminder_scheduler.evaluate(clock.now() + timedelta(hours=1)).state == ReminderState.IDLE


def test_first_tick_of_a_new_day_arms_that_days_reminders(loaded_container, clock, sink):
    c = loaded_container

    clock.current = datetime(2026, 2, 3, 9, 0)
    c.reminder_scheduler.tick()

    last = c.reminder_scheduler.last_pass
    assert last.evaluated_at.date() == TUESDAY
    assert [(r.class_id, r.fire_at) for r in last.scheduled] == [("t1", datetime(2026, 2, 3, 9, 50))]
    # Monday's timers were dropped, not fired late.
    assert sink.shown == []

    clock.current = datetime(2026, 2, 3, 9, 55)
    c.reminder_scheduler.tick()

    assert [(n.class_id, n.date) for n in sink.shown] == [("t1", TUESDAY)]


def test_new_day_runs_exam_eve_check(loaded_container, timetable, clock, sink):
    c = loaded_container
    wednesday = date(2026, 2, 4)
    c.store.set_timetable(replace(timetable, exams=(Exam(id="e1", date=wednesday, subject="Math", type="Final"),)))
    assert c.reminder_scheduler.state == ReminderState.ARMED

    clock.current = datetime(2026, 2, 3, 7, 0)
    c.reminder_scheduler.tick()

    assert c.reminder_scheduler.state == ReminderState.EXAM_EVE
    assert sink.shown[-1].title == "Upcoming Exam Tomorrow!"


def test_same_day_tick_does_not_rerun_the_pass(loaded_container, clock):
    c = loaded_container
    first = c.reminder_scheduler.last_pass

    clock.advance(minutes=30)
    c.reminder_scheduler.tick()

    assert c.reminder_scheduler.last_pass is first
