import os

API_BASE_URL = os.getenv("API_BASE_URL", "http://localhost:8080/api")
REQUEST_TIMEOUT_SECONDS = float(os.getenv("REQUEST_TIMEOUT_SECONDS", "10"))

# Local state survives restarts in this SQLite file
STATE_DATABASE_URI = os.getenv("STATE_DATABASE_URI", "sqlite:///attendance_state.db")

LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")

POLL_INTERVAL_SECONDS = float(os.getenv("POLL_INTERVAL_SECONDS", "60"))
REFRESH_DELAY_SECONDS = float(os.getenv("REFRESH_DELAY_SECONDS", "1"))
VALIDATION_CACHE_TTL_SECONDS = float(os.getenv("VALIDATION_CACHE_TTL_SECONDS", "60"))

LOCATION_TIMEOUT_SECONDS = float(os.getenv("LOCATION_TIMEOUT_SECONDS", "15"))
LAST_KNOWN_MAX_AGE_SECONDS = float(os.getenv("LAST_KNOWN_MAX_AGE_SECONDS", "60"))

# Optional JSON file overriding the built-in geofence table
GEOFENCE_FILE = os.getenv("GEOFENCE_FILE") or None

DEBUG = True
