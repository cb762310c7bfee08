from datetime import datetime, timedelta

from src.campus_attendance.campus_attendance.core.enums import LocationMode, SessionWindow
from src.campus_attendance.campus_attendance.geo.model import GeoPoint
from src.campus_attendance.campus_attendance.validation.cache import ValidationCache, cache_key
from src.campus_attendance.campus_attendance.validation.model import ValidationDetails, ValidationResult


def _result() -> ValidationResult:
    return ValidationResult(
        is_valid=True,
        reason=None,
        details=ValidationDetails(
            is_within_working_hours=True,
            is_inside_campus=True,
            is_inside_department=True,
            current_session=SessionWindow.FORENOON,
            user_location_label="Physics",
            time_info="",
        ),
    )


def test_cache_key_rounds_coordinates_and_names_missing_mode():
    p = GeoPoint(lat=26.1923000001, lng=91.6951)

    assert cache_key(p, "Dept3", LocationMode.CAMPUS) == "26.192300|91.695100|Dept3|CAMPUS"
    assert cache_key(p, None, None) == "26.192300|91.695100|None|NONE"


def test_put_sweeps_expired_entries():
    now = [datetime(2025, 1, 1, 10, 0)]
    cache = ValidationCache(ttl_seconds=60, clock=lambda: now[0])

    cache.put("a", _result())
    cache.put("b", _result())
    assert len(cache) == 2

    now[0] = now[0] + timedelta(seconds=61)
    assert cache.get("a") is None

    cache.put("c", _result())
    assert len(cache) == 1
    assert cache.get("c") is not None


def test_sweep_reports_evicted_count():
    now = [datetime(2025, 1, 1, 10, 0)]
    cache = ValidationCache(ttl_seconds=10, clock=lambda: now[0])
    cache.put("a", _result())

    assert cache.sweep(now[0] + timedelta(seconds=5)) == 0
    assert cache.sweep(now[0] + timedelta(seconds=10)) == 1
    assert len(cache) == 0
