import os

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")

# Directory holding timetable.json / attendance.json / settings.json
DATA_DIR = os.getenv("DATA_DIR", "data")

DEBUG = True
LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")

NOTIFICATION_DISMISS_SECONDS = int(os.getenv("NOTIFICATION_DISMISS_SECONDS", "5"))

# Simulated processing time of the mock timetable extractor
EXTRACTION_DELAY_SECONDS = float(os.getenv("EXTRACTION_DELAY_SECONDS", "2"))

# Longest wait for the extractor before the import fails
EXTRACTION_TIMEOUT_SECONDS = float(os.getenv("EXTRACTION_TIMEOUT_SECONDS", "30"))
