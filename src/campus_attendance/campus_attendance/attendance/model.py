from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Any, Mapping, Optional

from ..common.datetime_utils import date_key, parse_iso_date
from ..core.enums import AttendanceType, LocationMode, RecordState, SessionType, ViewMode

SESSION_CODES = {
    "FN": SessionType.FORENOON,
    "FORENOON": SessionType.FORENOON,
    "AF": SessionType.AFTERNOON,
    "AN": SessionType.AFTERNOON,
    "AFTERNOON": SessionType.AFTERNOON,
}


def _optional_float(value: Any) -> Optional[float]:
    if value is None or value == "":
        return None
    return float(value)


def _attendance_type(value: Any) -> Optional[AttendanceType]:
    try:
        return AttendanceType(value)
    except ValueError:
        return None


@dataclass(frozen=True)
class AttendanceRecord:
    """One attendance record. The store keeps at most one per date."""

    date: str
    check_in_time: str
    session_type: SessionType
    taken_location: str
    check_out_time: Optional[str] = None
    attendance_type: Optional[AttendanceType] = None
    is_checked_out: bool = False
    latitude: Optional[float] = None
    longitude: Optional[float] = None

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any], *, day: date) -> "AttendanceRecord":
        """Build a record from the backend's today/checkout payload.

        Accepts both ``checkInTime`` and ``checkinTime`` spellings and the
        short ``FN``/``AF`` session codes.
        """
        check_in = payload.get("checkInTime") or payload.get("checkinTime") or ""
        check_out = payload.get("checkOutTime") or payload.get("checkoutTime")
        raw_session = str(payload.get("sessionType") or "").upper()
        raw_type = payload.get("attendanceType")

        return cls(
            date=date_key(day),
            check_in_time=check_in,
            check_out_time=check_out,
            session_type=SESSION_CODES.get(raw_session, SessionType.AFTERNOON),
            attendance_type=_attendance_type(raw_type),
            is_checked_out=bool(payload.get("isCheckedOut")) or bool(check_out),
            taken_location=payload.get("takenLocation") or "Unknown",
            latitude=_optional_float(payload.get("latitude")),
            longitude=_optional_float(payload.get("longitude")),
        )

    def to_dict(self) -> dict:
        return {
            "date": self.date,
            "checkInTime": self.check_in_time,
            "checkOutTime": self.check_out_time,
            "sessionType": self.session_type.value,
            "attendanceType": self.attendance_type.value if self.attendance_type else None,
            "isCheckedOut": self.is_checked_out,
            "takenLocation": self.taken_location,
            "latitude": self.latitude,
            "longitude": self.longitude,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "AttendanceRecord":
        return cls.from_payload(data, day=parse_iso_date(data["date"]))


@dataclass(frozen=True)
class TrackedRecord:
    """A record plus whether the backend has confirmed it yet."""

    record: AttendanceRecord
    state: RecordState

    @property
    def is_confirmed(self) -> bool:
        return self.state == RecordState.CONFIRMED


@dataclass(frozen=True)
class FieldTrip:
    start_date: date
    end_date: date
    is_active: bool = True

    def covers(self, day: date) -> bool:
        return self.is_active and self.start_date <= day <= self.end_date

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> "FieldTrip":
        return cls(
            start_date=parse_iso_date(str(payload["startDate"])),
            end_date=parse_iso_date(str(payload["endDate"])),
            is_active=bool(payload.get("isActive", True)),
        )

    def to_dict(self) -> dict:
        return {
            "startDate": date_key(self.start_date),
            "endDate": date_key(self.end_date),
            "isActive": self.is_active,
        }


@dataclass(frozen=True)
class CapturedPhoto:
    uri: str


@dataclass(frozen=True)
class AudioRecording:
    uri: str
    duration: Optional[float] = None


@dataclass
class CaptureSession:
    """Scratch state of the capture flow. Never persisted."""

    photo: Optional[CapturedPhoto] = None
    audio_recording: Optional[AudioRecording] = None
    uploading: bool = False
    current_view: ViewMode = ViewMode.HOME

    @property
    def is_complete(self) -> bool:
        return self.photo is not None and self.audio_recording is not None


@dataclass
class PersistedState:
    """The slice of session-store state written to durable storage."""

    user_location_type: Optional[LocationMode] = None
    is_field_trip: bool = False
    field_trip_dates: list[FieldTrip] = field(default_factory=list)
    attendance_records: dict[str, TrackedRecord] = field(default_factory=dict)
    today_attendance_marked: bool = False

    def to_dict(self) -> dict:
        return {
            "userLocationType": self.user_location_type.value if self.user_location_type else None,
            "isFieldTrip": self.is_field_trip,
            "fieldTripDates": [t.to_dict() for t in self.field_trip_dates],
            "attendanceRecords": [
                {**t.record.to_dict(), "state": t.state.value} for t in self.attendance_records.values()
            ],
            "todayAttendanceMarked": self.today_attendance_marked,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "PersistedState":
        records: dict[str, TrackedRecord] = {}
        for raw in data.get("attendanceRecords") or []:
            record = AttendanceRecord.from_dict(raw)
            records[record.date] = TrackedRecord(record=record, state=RecordState(raw.get("state", "CONFIRMED")))

        mode = data.get("userLocationType")
        return cls(
            user_location_type=LocationMode(mode) if mode else None,
            is_field_trip=bool(data.get("isFieldTrip")),
            field_trip_dates=[FieldTrip.from_payload(t) for t in data.get("fieldTripDates") or []],
            attendance_records=records,
            today_attendance_marked=bool(data.get("todayAttendanceMarked")),
        )
