"""Example: drive the service layer directly (no Flask).

Controllers are a thin layer; everything below runs the same way in-process.
"""

from datetime import timedelta

from timetable_tracker.container import build_container
from timetable_tracker.core.enums import AttendanceStatus


def main():
    container = build_container()
    timetable = container.timetable_service.import_timetable(b"demo image bytes")

    today = container.clock.today()
    view = container.timetable_service.day_view(today)
    print(f"{view.weekday.value}: {[s.subject for s in view.sessions]}")

    if view.sessions:
        first = view.sessions[0]
        container.attendance_service.mark(today, first.id, first.subject, AttendanceStatus.PRESENT)

    container.timetable_service.add_exam(date=today + timedelta(days=1), subject="Physics", type="Quiz", time="10:00")
    print(container.reminder_scheduler.last_pass)
    print(container.attendance_service.stats_overall())
    print(f"timetable {timetable.id} has {len(timetable.exams)} exam(s) before edits")

    container.shutdown()


if __name__ == "__main__":
    main()
