"""Request-boundary validation helpers used by the controllers."""
from __future__ import annotations

from datetime import date
from typing import Any, Mapping, Optional

from ..core.enums import AttendanceStatus, ExamType, Weekday
from ..core.exceptions import ValidationError
from .datetime_utils import parse_hhmm, parse_iso_date


def require_non_empty(value: Any, field_name: str) -> str:
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(f"{field_name} is required")
    return value.strip()


def optional_text(value: Any, field_name: str) -> Optional[str]:
    if value is None:
        return None
    if not isinstance(value, str):
        raise ValidationError(f"{field_name} must be text")
    return value.strip() or None


def require_date(value: Any, field_name: str = "date") -> date:
    try:
        return parse_iso_date(require_non_empty(value, field_name))
    except ValueError:
        raise ValidationError(f"{field_name} must be a YYYY-MM-DD date")


def require_time(value: Any, field_name: str) -> str:
    text = require_non_empty(value, field_name)
    try:
        parse_hhmm(text)
    except ValueError:
        raise ValidationError(f"{field_name} must be a HH:MM time")
    return text


def optional_time(value: Any, field_name: str) -> Optional[str]:
    if value in (None, ""):
        return None
    return require_time(value, field_name)


def exam_type(value: Any, field_name: str = "type") -> str:
    """Known exam types are normalised to their canonical spelling; others pass through."""
    text = require_non_empty(value, field_name)
    for known in ExamType:
        if known.value.lower() == text.lower():
            return known.value
    return text


def require_weekday(value: Any) -> Weekday:
    try:
        return Weekday(str(value).capitalize())
    except ValueError:
        raise ValidationError(f"Unknown weekday: {value!r}")


def require_mark_status(value: Any) -> AttendanceStatus:
    try:
        status = AttendanceStatus(value)
    except ValueError:
        status = None
    if status not in (AttendanceStatus.PRESENT, AttendanceStatus.ABSENT):
        raise ValidationError("status must be 'present' or 'absent'")
    return status


CLASS_FIELD_NAMES = {"subject": "subject", "startTime": "start_time", "endTime": "end_time", "room": "room"}
EXTRA_CLASS_FIELD_NAMES = {**CLASS_FIELD_NAMES, "date": "date"}
EXAM_FIELD_NAMES = {"date": "date", "subject": "subject", "type": "type", "time": "time", "room": "room"}


def class_patch(data: Mapping[str, Any], names: Mapping[str, str]) -> dict[str, Any]:
    """Translate a camelCase JSON patch into validated model field values."""
    patch: dict[str, Any] = {}
    for key, value in data.items():
        if key not in names:
            raise ValidationError(f"Cannot update field: {key}")
        field = names[key]
        if field == "date":
            patch[field] = require_date(value)
        elif field in ("start_time", "end_time"):
            patch[field] = require_time(value, key)
        elif field == "time":
            patch[field] = optional_time(value, key)
        elif field == "room":
            patch[field] = optional_text(value, key)
        elif field == "type":
            patch[field] = exam_type(value, key)
        else:
            patch[field] = require_non_empty(value, key)
    return patch
