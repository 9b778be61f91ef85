"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

DEFAULT_NOTIFICATIONS_ENABLED = True
DEFAULT_REMINDER_MINUTES_BEFORE = 10
NOTIFICATION_DISMISS_SECONDS = 5

# Persisted state keys
TIMETABLE_KEY = "timetable"
ATTENDANCE_KEY = "attendance"
SETTINGS_KEY = "settings"
STATE_KEYS = (TIMETABLE_KEY, ATTENDANCE_KEY, SETTINGS_KEY)

DATE_FORMAT = "%Y-%m-%d"
TIME_FORMAT = "%H:%M"

DEFAULT_EXTRACTION_TIMEOUT_SECONDS = 30
