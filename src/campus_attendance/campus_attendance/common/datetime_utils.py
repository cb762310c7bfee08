from __future__ import annotations

from datetime import date, datetime
from typing import Optional


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date.

    Longer ISO strings (``2025-01-01T00:00:00Z``) are cut at the ``T``.
    """
    return datetime.strptime(value.split("T")[0], "%Y-%m-%d").date()


def parse_iso_datetime(value: Optional[str]) -> Optional[datetime]:
    if not value:
        return None
    return datetime.fromisoformat(value.replace("Z", "+00:00"))


def now_local() -> datetime:
    """Current local time.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now()


def date_key(day: date) -> str:
    return day.strftime("%Y-%m-%d")


def minutes_since_midnight(now: datetime) -> int:
    return now.hour * 60 + now.minute


def format_duration(minutes: int) -> str:
    """``95`` -> ``"1h 35m"``."""
    return f"{minutes // 60}h {minutes % 60}m"


def format_clock(minutes: int) -> str:
    """Minutes since midnight as a 12-hour label, e.g. ``1050`` -> ``"5:30 PM"``."""
    hour, minute = divmod(minutes, 60)
    suffix = "AM" if hour < 12 else "PM"
    hour12 = hour % 12 or 12
    return f"{hour12}:{minute:02d} {suffix}"
