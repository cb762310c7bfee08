from datetime import datetime, timedelta

from src.campus_attendance.campus_attendance.core.enums import LocationMode, SessionWindow
from src.campus_attendance.campus_attendance.geo.model import GeoPoint
from src.campus_attendance.campus_attendance.geo.zones import ZoneRegistry
from src.campus_attendance.campus_attendance.validation.factory import ValidationStrategyFactory
from src.campus_attendance.campus_attendance.validation.service import ValidationEngine, coerce_mode
from src.campus_attendance.campus_attendance.validation.strategies.campus_strategy import CampusStrategy
from src.campus_attendance.campus_attendance.validation.strategies.field_trip_strategy import FieldTripStrategy


class FakeClock:
    def __init__(self, now: datetime):
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> None:
        self.now = self.now + timedelta(**kwargs)


ZONES = ZoneRegistry.default()
DEPT3 = ZONES.resolve("Dept3")
FAR_AWAY = GeoPoint(lat=-33.8688, lng=151.2093)


def _engine(now: datetime) -> tuple[ValidationEngine, FakeClock]:
    clock = FakeClock(now)
    return ValidationEngine(ZONES, clock=clock), clock


def test_factory_picks_strategy_by_mode():
    factory = ValidationStrategyFactory()

    assert isinstance(factory.for_mode(LocationMode.FIELDTRIP), FieldTripStrategy)
    assert isinstance(factory.for_mode(LocationMode.CAMPUS), CampusStrategy)
    assert isinstance(factory.for_mode(None), CampusStrategy)


def test_coerce_mode_accepts_strings_and_ignores_unknown():
    assert coerce_mode("fieldtrip") == LocationMode.FIELDTRIP
    assert coerce_mode(LocationMode.CAMPUS) == LocationMode.CAMPUS
    assert coerce_mode("SPACE") is None
    assert coerce_mode(None) is None


def test_department_center_in_forenoon_is_valid():
    engine, _ = _engine(datetime(2025, 3, 4, 10, 0))

    result = engine.validate(DEPT3.center, "Dept3", LocationMode.CAMPUS)

    assert result.is_valid
    assert result.reason is None
    assert result.details.is_inside_campus
    assert result.details.is_inside_department
    assert result.details.current_session == SessionWindow.FORENOON
    assert result.details.user_location_label == "Computer Science and Engineering"
    assert result.details.distance_meters == 0


def test_campus_center_is_outside_department():
    engine, _ = _engine(datetime(2025, 3, 4, 10, 0))

    result = engine.validate(ZONES.campus.center, "Dept3", LocationMode.CAMPUS)

    assert not result.is_valid
    assert result.reason.startswith("You must be within 200 meters of your department to mark attendance.")
    assert "away from Computer Science and Engineering" in result.reason
    assert result.details.is_inside_campus
    assert not result.details.is_inside_department
    assert result.details.distance_meters > 200
    assert result.details.user_location_label == f"Outside Department ({result.details.distance_meters}m away)"


def test_outside_campus_is_reported_before_department():
    engine, _ = _engine(datetime(2025, 3, 4, 14, 0))

    result = engine.validate(FAR_AWAY, "Dept3", LocationMode.CAMPUS)

    assert not result.is_valid
    assert result.reason == "You must be inside IIT Guwahati campus to mark attendance."
    assert result.details.user_location_label == "Outside IIT Guwahati"


def test_working_hours_are_checked_first():
    engine, _ = _engine(datetime(2025, 3, 4, 20, 0))

    result = engine.validate(FAR_AWAY, "Dept3", LocationMode.CAMPUS)

    assert not result.is_valid
    assert result.reason.startswith("Cannot mark attendance outside working hours. Working hours have ended for today.")
    assert not result.details.is_within_working_hours
    assert not result.details.is_inside_campus
    assert result.details.current_session == SessionWindow.OUTSIDE


def test_unknown_department_inside_campus():
    engine, _ = _engine(datetime(2025, 3, 4, 10, 0))

    result = engine.validate(ZONES.campus.center, "Dept99", LocationMode.CAMPUS)

    assert not result.is_valid
    assert result.reason == (
        "You are inside IIT Guwahati campus, but your department was not found. Please contact support."
    )
    assert result.details.user_location_label == "Inside IIT Guwahati (Department not found)"


def test_field_trip_ignores_location_but_not_hours():
    engine, _ = _engine(datetime(2025, 3, 4, 10, 0))

    result = engine.validate(FAR_AWAY, None, LocationMode.FIELDTRIP)

    assert result.is_valid
    assert result.details.user_location_label == "Outside IIT (Field Trip)"
    assert not result.details.is_inside_campus

    late_engine, _ = _engine(datetime(2025, 3, 4, 18, 0))
    late = late_engine.validate(FAR_AWAY, None, LocationMode.FIELDTRIP)
    assert not late.is_valid
    assert late.reason.startswith("Cannot mark attendance outside working hours.")


def test_missing_mode_is_validated_as_campus():
    engine, _ = _engine(datetime(2025, 3, 4, 10, 0))

    result = engine.validate(FAR_AWAY, "Dept3", None)

    assert not result.is_valid
    assert result.reason == "You must be inside IIT Guwahati campus to mark attendance."


def test_cached_result_is_reused_within_ttl_even_after_hours_change():
    engine, clock = _engine(datetime(2025, 3, 4, 17, 30, 30))

    first = engine.validate(DEPT3.center, "Dept3", LocationMode.CAMPUS)
    clock.advance(seconds=59)
    second = engine.validate(DEPT3.center, "Dept3", LocationMode.CAMPUS)

    assert first.is_valid
    assert second is first


def test_cache_expires_after_ttl():
    engine, clock = _engine(datetime(2025, 3, 4, 17, 30))

    first = engine.validate(DEPT3.center, "Dept3", LocationMode.CAMPUS)
    clock.advance(seconds=60)
    second = engine.validate(DEPT3.center, "Dept3", LocationMode.CAMPUS)

    assert first.is_valid
    assert second is not first
    assert not second.is_valid


def test_location_status_labels():
    engine, _ = _engine(datetime(2025, 3, 4, 10, 0))

    assert engine.location_status(DEPT3.center, "Dept3", LocationMode.CAMPUS) == "Computer Science and Engineering"
    assert engine.location_status(ZONES.campus.center, "Dept3", LocationMode.CAMPUS) == (
        "Inside IIT Guwahati (Outside Department)"
    )
    assert engine.location_status(FAR_AWAY, "Dept3", LocationMode.CAMPUS) == "Outside IIT Guwahati"
    assert engine.location_status(FAR_AWAY, "Dept3", LocationMode.FIELDTRIP) == "Outside IIT (Field Trip)"


def test_is_within_working_hours_uses_engine_clock():
    engine, clock = _engine(datetime(2025, 3, 4, 8, 0))
    assert not engine.is_within_working_hours()

    clock.advance(hours=1)
    assert engine.is_within_working_hours()
