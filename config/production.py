import os

API_BASE_URL = os.getenv("API_BASE_URL", "https://please-set-API_BASE_URL/api")
REQUEST_TIMEOUT_SECONDS = float(os.getenv("REQUEST_TIMEOUT_SECONDS", "10"))

STATE_DATABASE_URI = os.getenv("STATE_DATABASE_URI", "sqlite:///attendance_state.db")

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

POLL_INTERVAL_SECONDS = float(os.getenv("POLL_INTERVAL_SECONDS", "60"))
REFRESH_DELAY_SECONDS = float(os.getenv("REFRESH_DELAY_SECONDS", "1"))
VALIDATION_CACHE_TTL_SECONDS = float(os.getenv("VALIDATION_CACHE_TTL_SECONDS", "60"))

LOCATION_TIMEOUT_SECONDS = float(os.getenv("LOCATION_TIMEOUT_SECONDS", "15"))
LAST_KNOWN_MAX_AGE_SECONDS = float(os.getenv("LAST_KNOWN_MAX_AGE_SECONDS", "60"))

GEOFENCE_FILE = os.getenv("GEOFENCE_FILE") or None

DEBUG = False
