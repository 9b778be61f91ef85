from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping

from ..core.constants import DEFAULT_NOTIFICATIONS_ENABLED, DEFAULT_REMINDER_MINUTES_BEFORE
from ..core.exceptions import ValidationError


@dataclass(frozen=True)
class AppSettings:
    notifications_enabled: bool = DEFAULT_NOTIFICATIONS_ENABLED
    reminder_minutes_before: int = DEFAULT_REMINDER_MINUTES_BEFORE

    def to_dict(self) -> dict[str, Any]:
        return {
            "notificationsEnabled": self.notifications_enabled,
            "reminderMinutesBefore": self.reminder_minutes_before,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any] | None) -> "AppSettings":
        """Build settings from a stored blob; missing fields fall back to defaults."""
        defaults = cls()
        data = data or {}
        return cls(
            notifications_enabled=bool(data.get("notificationsEnabled", defaults.notifications_enabled)),
            reminder_minutes_before=int(data.get("reminderMinutesBefore", defaults.reminder_minutes_before)),
        )

    def updated(self, patch: Mapping[str, Any]) -> "AppSettings":
        """Apply a partial camelCase update, validating values."""
        unknown = set(patch) - {"notificationsEnabled", "reminderMinutesBefore"}
        if unknown:
            raise ValidationError(f"Unknown setting(s): {', '.join(sorted(unknown))}")

        enabled = patch.get("notificationsEnabled", self.notifications_enabled)
        if not isinstance(enabled, bool):
            raise ValidationError("notificationsEnabled must be true or false")

        minutes = patch.get("reminderMinutesBefore", self.reminder_minutes_before)
        if isinstance(minutes, bool) or not isinstance(minutes, int) or minutes < 0:
            raise ValidationError("reminderMinutesBefore must be a non-negative whole number")

        return AppSettings(notifications_enabled=enabled, reminder_minutes_before=minutes)
