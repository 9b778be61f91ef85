from __future__ import annotations

import random
import time
from datetime import datetime
from typing import Optional, Protocol

from ..common.ids import IdGenerator
from ..core.enums import WORKING_DAYS
from ..core.exceptions import ExtractionFailure
from .model import ClassSession, DayTimetable, Timetable, full_week

SUBJECTS = (
    "Mathematics",
    "Physics",
    "Computer Science",
    "Data Structures",
    "Digital Logic",
    "Economics",
    "English",
    "Operating Systems",
)

FIRST_CLASS_HOUR = 9
LUNCH_HOUR = 12


class TimetableExtractor(Protocol):
    def extract(self, source: bytes) -> Timetable:
        """Turn an uploaded timetable image/document into a Timetable.

        Raises ExtractionFailure (or any exception, which callers wrap) on failure.
        """

        raise NotImplementedError


class MockTimetableExtractor:
    """Stand-in for OCR: builds a plausible Monday-Friday timetable.

    Each working day gets 3-5 one-hour classes from 09:00, skipping the
    12:00 lunch hour. Weekend entries are present but empty.
    """

    def __init__(
        self,
        *,
        rng: Optional[random.Random] = None,
        ids: Optional[IdGenerator] = None,
        delay_seconds: float = 0.0,
    ):
        self._rng = rng or random.Random()
        self._ids = ids or IdGenerator()
        self._delay_seconds = float(delay_seconds)

    def extract(self, source: bytes) -> Timetable:
        if not source:
            raise ExtractionFailure("No image data to extract a timetable from")

        if self._delay_seconds > 0:
            time.sleep(self._delay_seconds)

        days = tuple(DayTimetable(day=day, classes=self._classes_for(day.value.lower())) for day in WORKING_DAYS)
        return Timetable(
            id=self._ids.new_id("timetable"),
            name="Extracted Timetable",
            schedule=full_week(days),
            created_at=datetime.now(),
        )

    def _classes_for(self, prefix: str) -> tuple[ClassSession, ...]:
        count = self._rng.randint(3, 5)
        hour = FIRST_CLASS_HOUR
        classes = []
        for i in range(count):
            classes.append(
                ClassSession(
                    id=f"{prefix}-{i}",
                    subject=self._rng.choice(SUBJECTS),
                    start_time=f"{hour:02d}:00",
                    end_time=f"{hour + 1:02d}:00",
                    room=f"Room {100 + self._rng.randrange(50)}",
                )
            )
            hour += 1
            if hour == LUNCH_HOUR:
                hour += 1
        return tuple(classes)
