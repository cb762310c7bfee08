from __future__ import annotations

import logging
from datetime import date
from typing import Any, Mapping, Optional

from ..attendance.model import SESSION_CODES
from ..attendance.repository import StateRepository
from ..auth.service import SessionManager
from ..common.datetime_utils import date_key
from ..core.constants import HOLIDAY_CACHE_KEY_FORMAT
from ..core.exceptions import DomainError
from ..gateway.repository import AttendanceGateway
from .model import AttendanceCalendar, CalendarDay, CalendarStatistics, Holiday

logger = logging.getLogger(__name__)


def _check_in(raw: Mapping[str, Any]) -> Optional[str]:
    return raw.get("checkinTime") or raw.get("checkInTime")


def _to_calendar_day(raw: Mapping[str, Any]) -> CalendarDay:
    auto_completed = raw.get("autoCompleted") is True
    check_out = raw.get("checkoutTime") or raw.get("checkOutTime")
    return CalendarDay(
        date=str(raw["date"]).split("T")[0],
        taken_location=raw.get("takenLocation") or raw.get("locationType"),
        check_in_time=_check_in(raw),
        check_out_time=check_out,
        session_type=SESSION_CODES.get(str(raw.get("sessionType") or "").upper()),
        full_day=raw.get("attendanceType") == "FULL_DAY" or auto_completed,
        half_day=raw.get("attendanceType") == "HALF_DAY",
        is_checked_out=bool(check_out) or auto_completed,
    )


class CalendarService:
    """Monthly attendance calendar and the holiday list.

    Read-only views for the profile screen; failures, including malformed
    payloads, are logged and yield empty results rather than errors.
    """

    def __init__(self, gateway: AttendanceGateway, session: SessionManager, storage: StateRepository):
        self._gateway = gateway
        self._session = session
        self._storage = storage

    async def fetch_month(self, year: int, month: int) -> Optional[AttendanceCalendar]:
        employee_id = self._session.employee_id
        if not employee_id:
            return None

        try:
            response = await self._gateway.get_calendar(employee_id=employee_id, year=year, month=month)
            if not response.success or not isinstance(response.data, dict):
                logger.warning("Invalid calendar response: %s", response.error)
                return None

            raw_days = response.data.get("attendances") or response.data.get("records") or []
            days = [_to_calendar_day(r) for r in raw_days if _check_in(r)]
            statistics = CalendarStatistics.from_payload(response.data.get("statistics"))
        except (DomainError, AttributeError, KeyError, TypeError, ValueError):
            logger.exception("Failed to load attendance calendar for %s-%02d", year, month)
            return None

        skipped = len(raw_days) - len(days)
        if skipped:
            logger.debug("Skipped %d calendar entries without check-in", skipped)
        return AttendanceCalendar(days=days, statistics=statistics)

    async def holidays(self, year: int, month: int) -> list[Holiday]:
        cache_key = HOLIDAY_CACHE_KEY_FORMAT.format(year=year, month=month)
        try:
            cached = self._storage.load(cache_key)
            if cached is not None:
                return [Holiday.from_payload(h) for h in cached]
        except (DomainError, KeyError, TypeError, ValueError):
            logger.exception("Dropping unreadable holiday cache %s", cache_key)

        try:
            response = await self._gateway.get_holidays(year=year, month=month)
            if not response.success or not isinstance(response.data, dict) or "entries" not in response.data:
                logger.warning("Invalid holiday response: %s", response.error)
                return []
            holidays = [Holiday.from_payload(entry) for entry in response.data["entries"]]
            self._storage.save(cache_key, [h.to_dict() for h in holidays])
        except (DomainError, KeyError, TypeError, ValueError):
            logger.exception("Failed to load holidays for %s-%02d", year, month)
            return []
        return holidays

    async def holiday_for(self, day: date) -> Optional[Holiday]:
        if day.weekday() >= 5:
            return Holiday(
                date=date_key(day),
                description="Saturday" if day.weekday() == 5 else "Sunday",
                is_holiday=True,
                is_weekend=True,
            )

        key = date_key(day)
        for holiday in await self.holidays(day.year, day.month):
            if holiday.date == key:
                return holiday
        return None
