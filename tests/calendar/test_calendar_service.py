import asyncio
import json
from datetime import date
from typing import Any, Optional

from src.campus_attendance.campus_attendance.auth.model import Credentials
from src.campus_attendance.campus_attendance.auth.service import SessionManager
from src.campus_attendance.campus_attendance.calendar.service import CalendarService
from src.campus_attendance.campus_attendance.core.enums import SessionType
from src.campus_attendance.campus_attendance.core.exceptions import StorageError, TransientNetworkFailure
from src.campus_attendance.campus_attendance.gateway.model import GatewayResponse


class InMemoryStorage:
    def __init__(self):
        self.items: dict[str, str] = {}

    def load(self, key: str) -> Optional[Any]:
        raw = self.items.get(key)
        return json.loads(raw) if raw is not None else None

    def save(self, key: str, value: Any) -> None:
        self.items[key] = json.dumps(value)

    def delete(self, key: str) -> None:
        self.items.pop(key, None)


class FakeCalendarGateway:
    def __init__(self, *, calendar=None, holidays=None, error=None):
        self.calendar = calendar
        self.holidays = holidays
        self.error = error
        self.holiday_calls = 0

    async def get_calendar(self, *, employee_id, year, month):
        if self.error:
            raise self.error
        return self.calendar

    async def get_holidays(self, *, year, month):
        self.holiday_calls += 1
        if self.error:
            raise self.error
        return self.holidays


def _service(gateway, storage=None, signed_in=True):
    session = SessionManager(Credentials(employee_id="EMP001", token="tok") if signed_in else None)
    return CalendarService(gateway, session, storage if storage is not None else InMemoryStorage())


def test_fetch_month_maps_days_and_statistics():
    gateway = FakeCalendarGateway(
        calendar=GatewayResponse(
            success=True,
            data={
                "attendances": [
                    {"date": "2025-03-03T00:00:00", "checkinTime": "09:10", "sessionType": "FN",
                     "attendanceType": "HALF_DAY", "checkoutTime": "12:40"},
                    {"date": "2025-03-04", "checkinTime": "13:30", "sessionType": "AF", "autoCompleted": True},
                    {"date": "2025-03-05"},
                ],
                "statistics": {"totalDays": 2, "totalHalfDays": 1, "year": 2025, "month": 3},
            },
        )
    )

    calendar = asyncio.run(_service(gateway).fetch_month(2025, 3))

    assert [d.date for d in calendar.days] == ["2025-03-03", "2025-03-04"]
    first, second = calendar.days
    assert first.half_day and first.is_checked_out and first.session_type == SessionType.FORENOON
    assert second.full_day and second.is_checked_out and second.session_type == SessionType.AFTERNOON
    assert calendar.statistics.total_days == 2
    assert calendar.statistics.total_half_days == 1


def test_fetch_month_failures_give_none():
    assert asyncio.run(_service(FakeCalendarGateway(), signed_in=False).fetch_month(2025, 3)) is None

    failing = FakeCalendarGateway(error=TransientNetworkFailure("Network error"))
    assert asyncio.run(_service(failing).fetch_month(2025, 3)) is None

    rejected = FakeCalendarGateway(calendar=GatewayResponse(success=False, error="nope"))
    assert asyncio.run(_service(rejected).fetch_month(2025, 3)) is None


def test_holidays_are_cached_per_month():
    gateway = FakeCalendarGateway(
        holidays=GatewayResponse(
            success=True, data={"entries": [{"date": "2025-03-14T00:00:00Z", "description": "Holi"}]}
        )
    )
    storage = InMemoryStorage()
    service = _service(gateway, storage)

    first = asyncio.run(service.holidays(2025, 3))
    second = asyncio.run(service.holidays(2025, 3))

    assert first == second
    assert first[0].date == "2025-03-14"
    assert gateway.holiday_calls == 1
    assert "cached_holidays_2025_3" in storage.items


def test_holiday_failure_gives_empty_list_and_no_cache():
    gateway = FakeCalendarGateway(error=TransientNetworkFailure("Network error"))
    storage = InMemoryStorage()

    assert asyncio.run(_service(gateway, storage).holidays(2025, 3)) == []
    assert storage.items == {}


def test_holiday_for_weekend_and_listed_day():
    gateway = FakeCalendarGateway(
        holidays=GatewayResponse(success=True, data={"entries": [{"date": "2025-03-14", "description": "Holi"}]})
    )
    service = _service(gateway)

    saturday = asyncio.run(service.holiday_for(date(2025, 3, 15)))
    assert saturday.is_weekend and saturday.description == "Saturday"

    assert asyncio.run(service.holiday_for(date(2025, 3, 14))).description == "Holi"
    assert asyncio.run(service.holiday_for(date(2025, 3, 13))) is None


class BrokenStorage(InMemoryStorage):
    def load(self, key: str) -> Optional[Any]:
        raise StorageError(f"Stored value for {key!r} is not valid JSON")


def test_fetch_month_with_malformed_entries_gives_none():
    missing_date = FakeCalendarGateway(
        calendar=GatewayResponse(success=True, data={"attendances": [{"checkinTime": "2025-03-04T10:00"}]})
    )
    assert asyncio.run(_service(missing_date).fetch_month(2025, 3)) is None

    not_a_dict = FakeCalendarGateway(calendar=GatewayResponse(success=True, data={"attendances": ["2025-03-04"]}))
    assert asyncio.run(_service(not_a_dict).fetch_month(2025, 3)) is None


def test_fetch_month_reads_an_session_code():
    gateway = FakeCalendarGateway(
        calendar=GatewayResponse(
            success=True, data={"records": [{"date": "2025-03-04", "checkInTime": "14:00", "sessionType": "AN"}]}
        )
    )

    calendar = asyncio.run(_service(gateway).fetch_month(2025, 3))

    assert calendar.days[0].session_type == SessionType.AFTERNOON


def test_holiday_entry_without_date_gives_empty_list():
    gateway = FakeCalendarGateway(holidays=GatewayResponse(success=True, data={"entries": [{"description": "Holi"}]}))
    storage = InMemoryStorage()

    assert asyncio.run(_service(gateway, storage).holidays(2025, 3)) == []
    assert storage.items == {}


def test_unreadable_holiday_cache_falls_back_to_backend():
    gateway = FakeCalendarGateway(
        holidays=GatewayResponse(success=True, data={"entries": [{"date": "2025-03-14", "description": "Holi"}]})
    )

    holidays = asyncio.run(_service(gateway, BrokenStorage()).holidays(2025, 3))

    assert [h.description for h in holidays] == ["Holi"]
    assert gateway.holiday_calls == 1
