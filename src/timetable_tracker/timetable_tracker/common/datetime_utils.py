from __future__ import annotations

from datetime import date, datetime, time

from ..core.constants import DATE_FORMAT, TIME_FORMAT


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value, DATE_FORMAT).date()


def format_iso_date(value: date) -> str:
    return value.strftime(DATE_FORMAT)


def parse_hhmm(value: str) -> time:
    """Parse a 24h HH:MM wall-clock time."""
    return datetime.strptime(value, TIME_FORMAT).time()


def to_epoch_millis(value: datetime) -> int:
    return int(value.timestamp() * 1000)


def from_epoch_millis(value: int) -> datetime:
    return datetime.fromtimestamp(int(value) / 1000)


def percentage(part: int, total: int) -> int:
    """Whole-number percentage, rounded half up. 0 when total is 0."""
    if total <= 0:
        return 0
    return (200 * part + total) // (2 * total)
