SECRET_KEY = "test-secret"

# None selects the in-memory store
DATA_DIR = None

DEBUG = False
TESTING = True
LOG_LEVEL = "WARNING"

NOTIFICATION_DISMISS_SECONDS = 5

EXTRACTION_DELAY_SECONDS = 0

EXTRACTION_TIMEOUT_SECONDS = 5
