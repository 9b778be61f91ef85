import os

SECRET_KEY = os.getenv("SECRET_KEY", "please-set-SECRET_KEY")

DATA_DIR = os.getenv("DATA_DIR", os.path.join(os.path.expanduser("~"), ".timetable_tracker"))

DEBUG = False
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

NOTIFICATION_DISMISS_SECONDS = int(os.getenv("NOTIFICATION_DISMISS_SECONDS", "5"))

EXTRACTION_DELAY_SECONDS = float(os.getenv("EXTRACTION_DELAY_SECONDS", "0"))

EXTRACTION_TIMEOUT_SECONDS = float(os.getenv("EXTRACTION_TIMEOUT_SECONDS", "30"))
