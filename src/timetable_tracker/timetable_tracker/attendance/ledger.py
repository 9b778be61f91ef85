"""Attendance ledger: the append/override log of attendance records.

The ledger is an immutable tuple of records. Writes return a new tuple in
which the (date, class_id) key appears at most once; reads never fail on
empty input.
"""
from __future__ import annotations

from datetime import date, datetime
from typing import Iterable, Sequence

from ..common.datetime_utils import percentage
from ..core.enums import AttendanceStatus
from ..core.exceptions import ValidationError
from .model import AttendanceRecord, DayProgress, OverallStats, SubjectStats

Ledger = tuple[AttendanceRecord, ...]


def mark(
    ledger: Sequence[AttendanceRecord],
    *,
    day: date,
    class_id: str,
    subject: str,
    status: AttendanceStatus,
    now: datetime,
) -> Ledger:
    """Replace any record for (day, class_id) with a fresh one stamped `now`."""
    status = AttendanceStatus(status)
    if status == AttendanceStatus.PENDING:
        raise ValidationError("Only present or absent can be recorded")

    kept = [r for r in ledger if r.key != (day, class_id)]
    kept.append(AttendanceRecord(date=day, class_id=class_id, subject=subject, status=status, timestamp=now))
    return tuple(kept)


def mark_all_present(
    ledger: Sequence[AttendanceRecord],
    *,
    day: date,
    items: Iterable[tuple[str, str]],
    now: datetime,
) -> Ledger:
    """Replace the whole `day` bucket with PRESENT records for (class_id, subject) items.

    Records on other dates are left untouched.
    """
    kept = [r for r in ledger if r.date != day]
    seen: set[str] = set()
    for class_id, subject in items:
        if class_id in seen:
            continue
        seen.add(class_id)
        kept.append(
            AttendanceRecord(date=day, class_id=class_id, subject=subject, status=AttendanceStatus.PRESENT, timestamp=now)
        )
    return tuple(kept)


def find(ledger: Sequence[AttendanceRecord], day: date, class_id: str):
    for record in ledger:
        if record.key == (day, class_id):
            return record
    return None


def status_of(ledger: Sequence[AttendanceRecord], day: date, class_id: str) -> AttendanceStatus:
    record = find(ledger, day, class_id)
    return record.status if record else AttendanceStatus.PENDING


def records_on(ledger: Sequence[AttendanceRecord], day: date) -> Ledger:
    return tuple(r for r in ledger if r.date == day)


def stats_overall(ledger: Sequence[AttendanceRecord]) -> OverallStats:
    total = len(ledger)
    present = sum(1 for r in ledger if r.status == AttendanceStatus.PRESENT)
    return OverallStats(total=total, present=present, percentage=percentage(present, total))


def stats_by_subject(ledger: Sequence[AttendanceRecord]) -> list[SubjectStats]:
    """Per-subject attendance, highest percentage first.

    Subjects with equal percentages keep the order in which they first appear.
    """
    counts: dict[str, list[int]] = {}
    for r in ledger:
        present_total = counts.setdefault(r.subject, [0, 0])
        present_total[1] += 1
        if r.status == AttendanceStatus.PRESENT:
            present_total[0] += 1

    out = [
        SubjectStats(subject=subject, present=present, total=total, percentage=percentage(present, total))
        for subject, (present, total) in counts.items()
    ]
    out.sort(key=lambda s: s.percentage, reverse=True)
    return out


def history(ledger: Sequence[AttendanceRecord]) -> dict[date, list[AttendanceRecord]]:
    """Records grouped by date, most recent date first; ledger order within a date."""
    grouped: dict[date, list[AttendanceRecord]] = {}
    for r in ledger:
        grouped.setdefault(r.date, []).append(r)
    return {d: grouped[d] for d in sorted(grouped, reverse=True)}


def day_progress(ledger: Sequence[AttendanceRecord], day: date, item_ids: Sequence[str]) -> DayProgress:
    recorded = {r.class_id for r in ledger if r.date == day}
    marked = sum(1 for item_id in item_ids if item_id in recorded)
    total = len(item_ids)
    return DayProgress(date=day, marked=marked, total=total, percentage=percentage(marked, total))
