from __future__ import annotations

from enum import Enum


class LocationMode(str, Enum):
    """Which geofence checks apply to the user today."""

    CAMPUS = "CAMPUS"
    FIELDTRIP = "FIELDTRIP"


class SessionWindow(str, Enum):
    """Working-hour window a wall-clock time falls into."""

    FORENOON = "FORENOON"
    AFTERNOON = "AFTERNOON"
    OUTSIDE = "OUTSIDE"


class SessionType(str, Enum):
    """Session stored on an attendance record (never OUTSIDE)."""

    FORENOON = "FORENOON"
    AFTERNOON = "AFTERNOON"


class AttendanceType(str, Enum):
    FULL_DAY = "FULL_DAY"
    HALF_DAY = "HALF_DAY"


class ViewMode(str, Enum):
    """Screen of the capture flow."""

    HOME = "home"
    CAMERA = "camera"
    AUDIO_RECORDER = "audioRecorder"


class RecordState(str, Enum):
    """Whether a local record has been confirmed by the backend."""

    UNCONFIRMED = "UNCONFIRMED"
    CONFIRMED = "CONFIRMED"


class AttendanceDayStatus(str, Enum):
    NOT_MARKED = "NOT_MARKED"
    MARKED_IN_PROGRESS = "MARKED_IN_PROGRESS"
    CHECKED_OUT = "CHECKED_OUT"
