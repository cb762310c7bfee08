import os

API_BASE_URL = "http://testserver/api"
REQUEST_TIMEOUT_SECONDS = 2.0

STATE_DATABASE_URI = os.getenv("STATE_DATABASE_URI", "sqlite:///:memory:")

LOG_LEVEL = os.getenv("LOG_LEVEL", "WARNING")

POLL_INTERVAL_SECONDS = 60.0
REFRESH_DELAY_SECONDS = 0.0
VALIDATION_CACHE_TTL_SECONDS = 60.0

LOCATION_TIMEOUT_SECONDS = 1.0
LAST_KNOWN_MAX_AGE_SECONDS = 60.0

GEOFENCE_FILE = None

DEBUG = False
TESTING = True
