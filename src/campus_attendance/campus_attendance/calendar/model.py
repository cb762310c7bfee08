from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Optional

from ..core.enums import SessionType


@dataclass(frozen=True)
class CalendarDay:
    """One attended day in the monthly calendar."""

    date: str
    taken_location: Optional[str]
    check_in_time: Optional[str]
    check_out_time: Optional[str]
    session_type: Optional[SessionType]
    full_day: bool
    half_day: bool
    is_checked_out: bool


@dataclass(frozen=True)
class CalendarStatistics:
    total_days: int = 0
    total_full_days: int = 0
    total_half_days: int = 0
    not_checked_out: int = 0
    year: Optional[int] = None
    month: Optional[int] = None

    @classmethod
    def from_payload(cls, payload: Optional[Mapping[str, Any]]) -> "CalendarStatistics":
        payload = payload or {}
        return cls(
            total_days=int(payload.get("totalDays") or 0),
            total_full_days=int(payload.get("totalFullDays") or 0),
            total_half_days=int(payload.get("totalHalfDays") or 0),
            not_checked_out=int(payload.get("notCheckedOut") or 0),
            year=payload.get("year"),
            month=payload.get("month"),
        )


@dataclass(frozen=True)
class AttendanceCalendar:
    days: list[CalendarDay]
    statistics: CalendarStatistics


@dataclass(frozen=True)
class Holiday:
    date: str
    description: str
    is_holiday: bool = True
    is_weekend: bool = False

    def to_dict(self) -> dict:
        return {
            "date": self.date,
            "description": self.description,
            "isHoliday": self.is_holiday,
            "isWeekend": self.is_weekend,
        }

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> "Holiday":
        return cls(
            date=str(payload["date"]).split("T")[0],
            description=str(payload.get("description") or ""),
            is_holiday=bool(payload.get("isHoliday", True)),
            is_weekend=bool(payload.get("isWeekend", False)),
        )
