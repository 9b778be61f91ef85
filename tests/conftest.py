from __future__ import annotations

import itertools
from datetime import date, datetime, timedelta

import pytest

from timetable_tracker.container import build_container
from timetable_tracker.core.enums import Weekday
from timetable_tracker.storage.memory_store import InMemoryBlobStore
from timetable_tracker.timetable.model import ClassSession, DayTimetable, Timetable, full_week

MONDAY = date(2026, 2, 2)


class FakeClock:
    def __init__(self, now: datetime):
        self.current = now

    def now(self) -> datetime:
        return self.current

    def today(self) -> date:
        return self.current.date()

    def advance(self, **kwargs) -> datetime:
        self.current += timedelta(**kwargs)
        return self.current


class RecordingSink:
    def __init__(self):
        self.shown = []
        self.dismissed = 0

    def show(self, notification) -> None:
        self.shown.append(notification)

    def dismiss(self) -> None:
        self.dismissed += 1


class SequentialIds:
    def __init__(self):
        self._counter = itertools.count(1)

    def new_id(self, prefix: str) -> str:
        return f"{prefix}-{next(self._counter)}"


def build_timetable() -> Timetable:
    return Timetable(
        id="tt-1",
        name="Spring term",
        schedule=full_week(
            (
                DayTimetable(
                    day=Weekday.MONDAY,
                    classes=(
                        ClassSession(id="m1", subject="Math", start_time="09:00", end_time="10:00", room="Room 101"),
                        ClassSession(id="m2", subject="Physics", start_time="11:00", end_time="12:00"),
                    ),
                ),
                DayTimetable(
                    day=Weekday.TUESDAY,
                    classes=(ClassSession(id="t1", subject="English", start_time="10:00", end_time="11:00"),),
                ),
            )
        ),
        created_at=datetime(2026, 1, 15, 12, 0),
    )


@pytest.fixture
def monday() -> date:
    return MONDAY


@pytest.fixture
def fixed_now() -> datetime:
    # Monday 2026-02-02, 08:00
    return datetime(2026, 2, 2, 8, 0, 0)


@pytest.fixture
def clock(fixed_now) -> FakeClock:
    return FakeClock(fixed_now)


@pytest.fixture
def sink() -> RecordingSink:
    return RecordingSink()


@pytest.fixture
def ids() -> SequentialIds:
    return SequentialIds()


@pytest.fixture
def timetable() -> Timetable:
    return build_timetable()


@pytest.fixture
def blobs() -> InMemoryBlobStore:
    return InMemoryBlobStore()


@pytest.fixture
def container(blobs, clock, sink, ids):
    c = build_container(blobs=blobs, clock=clock, sink=sink, ids=ids)
    yield c
    c.shutdown()


@pytest.fixture
def loaded_container(container, timetable):
    container.store.set_timetable(timetable)
    return container
