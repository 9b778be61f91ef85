"""Reminder scheduling for today's classes and tomorrow's exams.

The scheduler owns one set of timer handles. Every pass (triggered by any
change to the timetable, the settings or the attendance ledger) first
cancels the previous set, then decides what to arm:

    notifications off / no timetable / holiday / day fully marked -> SUPPRESSED
    exam tomorrow                                                 -> EXAM_EVE (alert now, no class timers)
    otherwise one timer per unmarked session still ahead          -> ARMED (IDLE if none)

Timers only fire when the owner polls `tick()`.
"""
from __future__ import annotations

import logging
from datetime import date, datetime, timedelta
from typing import Callable, Optional

from ..attendance import ledger
from ..common.clock import Clock
from ..common.datetime_utils import parse_hhmm
from ..core.enums import ReminderState
from ..state.store import AppStateStore
from ..timetable import resolver
from ..timetable.model import Exam, ResolvedSession
from .model import Notification, ReminderPass, ScheduledReminder
from .notifier import NotificationCenter
from .timers import TimerHandle, TimerQueue

logger = logging.getLogger(__name__)


def class_reminder(session: ResolvedSession, day: date, minutes_before: int) -> Notification:
    return Notification(
        title="Class Reminder",
        body=f"Your {session.subject} class starts in {minutes_before} minutes.",
        class_id=session.id,
        subject=session.subject,
        date=day,
    )


def exam_eve_alert(exam: Exam) -> Notification:
    at = f" at {exam.time}" if exam.time else ""
    return Notification(
        title="Upcoming Exam Tomorrow!",
        body=f"Don't forget: {exam.subject} ({exam.type}) is scheduled for tomorrow{at}.",
    )


class ReminderScheduler:
    def __init__(
        self,
        store: AppStateStore,
        timers: TimerQueue,
        notifications: NotificationCenter,
        clock: Clock,
    ):
        self._store = store
        self._timers = timers
        self._notifications = notifications
        self._clock = clock

        self._handles: list[TimerHandle] = []
        self._reminders: list[ScheduledReminder] = []
        self._last_pass: Optional[ReminderPass] = None
        self._unsubscribe: Optional[Callable[[], None]] = None

    @property
    def last_pass(self) -> Optional[ReminderPass]:
        return self._last_pass

    @property
    def reminders(self) -> list[ScheduledReminder]:
        return list(self._reminders)

    @property
    def state(self) -> ReminderState:
        if self._last_pass is None:
            return ReminderState.IDLE
        if self._last_pass.state != ReminderState.ARMED:
            return self._last_pass.state
        if any(r.state == ReminderState.ARMED for r in self._reminders):
            return ReminderState.ARMED
        return ReminderState.FIRED

    def start(self) -> ReminderPass:
        """Follow store changes and run a first pass."""
        if self._unsubscribe is None:
            self._unsubscribe = self._store.subscribe(self._on_state_change)
        return self.evaluate()

    def shutdown(self) -> None:
        """Cancel every outstanding timer and stop following the store."""
        self.cancel_all()
        self._notifications.shutdown()
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None

    def cancel_all(self) -> None:
        for handle in self._handles:
            self._timers.cancel(handle)
        self._handles = []
        self._reminders = []

    def tick(self, now: Optional[datetime] = None) -> int:
        """Fire every timer that is due at `now`.

        The first tick on a new calendar day re-runs the pass for that day
        before anything fires, so yesterday's leftovers are cancelled.
        """
        now = now or self._clock.now()
        with self._store.lock:
            if self._unsubscribe is not None and self._needs_new_day(now):
                logger.info("Date changed to %s; re-evaluating reminders", now.date())
                self.evaluate(now)
        return self._timers.run_due(now)

    def _needs_new_day(self, now: datetime) -> bool:
        return self._last_pass is not None and self._last_pass.evaluated_at.date() != now.date()

    def _on_state_change(self, keys: frozenset) -> None:
        logger.debug("State changed (%s); re-evaluating reminders", ", ".join(sorted(keys)))
        self.evaluate()

    def evaluate(self, now: Optional[datetime] = None) -> ReminderPass:
        with self._store.lock:
            self.cancel_all()
            now = now or self._clock.now()
            result = self._evaluate(now)
            self._last_pass = result
        logger.info(
            "Reminder pass: %s%s (%d timer(s))",
            result.state.value,
            f" [{result.reason}]" if result.reason else "",
            len(result.scheduled),
        )
        return result

    def _evaluate(self, now: datetime) -> ReminderPass:
        settings = self._store.settings
        timetable = self._store.timetable
        today = now.date()

        if not settings.notifications_enabled:
            return ReminderPass(evaluated_at=now, state=ReminderState.SUPPRESSED, reason="notifications disabled")
        if timetable is None:
            return ReminderPass(evaluated_at=now, state=ReminderState.SUPPRESSED, reason="no timetable")
        if resolver.is_holiday(timetable, today):
            return ReminderPass(evaluated_at=now, state=ReminderState.SUPPRESSED, reason="holiday")

        sessions = resolver.sessions_on(timetable, today)
        recorded = {r.class_id for r in ledger.records_on(self._store.attendance, today)}
        if sessions and all(s.id in recorded for s in sessions):
            return ReminderPass(evaluated_at=now, state=ReminderState.SUPPRESSED, reason="day fully marked")

        tomorrow_exams = resolver.exams_on(timetable, today + timedelta(days=1))
        if tomorrow_exams:
            alert = exam_eve_alert(tomorrow_exams[0])
            self._notifications.show(alert)
            return ReminderPass(evaluated_at=now, state=ReminderState.EXAM_EVE, exam_alert=alert)

        minutes = settings.reminder_minutes_before
        for session in sessions:
            if session.id in recorded:
                continue
            try:
                starts_at = datetime.combine(today, parse_hhmm(session.start_time))
            except ValueError:
                logger.warning("Skipping reminder for %s: bad start time %r", session.id, session.start_time)
                continue

            fire_at = starts_at - timedelta(minutes=minutes)
            if fire_at <= now:
                continue

            reminder = ScheduledReminder(class_id=session.id, subject=session.subject, date=today, fire_at=fire_at)
            notification = class_reminder(session, today, minutes)
            handle = self._timers.schedule(
                fire_at,
                self._fire_callback(reminder, notification),
                label=f"class-reminder:{session.id}",
            )
            self._handles.append(handle)
            self._reminders.append(reminder)

        state = ReminderState.ARMED if self._reminders else ReminderState.IDLE
        return ReminderPass(evaluated_at=now, state=state, scheduled=tuple(self._reminders))

    def _fire_callback(self, reminder: ScheduledReminder, notification: Notification) -> Callable[[], None]:
        def fire() -> None:
            reminder.state = ReminderState.FIRED
            logger.info("Reminder fired for %s (%s)", reminder.class_id, reminder.subject)
            self._notifications.show(notification)

        return fire
