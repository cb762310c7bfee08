"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
Working-hour boundaries are minutes since local midnight.
"""

FORENOON_START_MINUTES = 9 * 60
FORENOON_END_MINUTES = 13 * 60
AFTERNOON_START_MINUTES = 13 * 60
AFTERNOON_END_MINUTES = 17 * 60 + 30

EARTH_RADIUS_METERS = 6371000

DEFAULT_VALIDATION_CACHE_TTL_SECONDS = 60
DEFAULT_POLL_INTERVAL_SECONDS = 60
DEFAULT_REFRESH_DELAY_SECONDS = 1
DEFAULT_REQUEST_TIMEOUT_SECONDS = 10
DEFAULT_LOCATION_TIMEOUT_SECONDS = 15
DEFAULT_LAST_KNOWN_MAX_AGE_SECONDS = 60

AUTO_COMPLETE_HOUR = 23

STATE_STORAGE_KEY = "attendance-storage"
HOLIDAY_CACHE_KEY_FORMAT = "cached_holidays_{year}_{month}"

FIELD_TRIP_LOCATION_LABEL = "Outside IIT (Field Trip)"
