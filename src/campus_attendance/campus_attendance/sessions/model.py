from __future__ import annotations

from dataclasses import dataclass

from ..core.enums import SessionWindow


@dataclass(frozen=True)
class WorkingWindow:
    """Named time-of-day interval, bounds in minutes since midnight."""

    session: SessionWindow
    start_minutes: int
    end_minutes: int
    end_inclusive: bool = False

    def contains(self, minutes: int) -> bool:
        if minutes < self.start_minutes:
            return False
        if self.end_inclusive:
            return minutes <= self.end_minutes
        return minutes < self.end_minutes


@dataclass(frozen=True)
class SessionClassification:
    session: SessionWindow
    remaining_minutes: int
    window_end_label: str
    time_info: str

    @property
    def is_within_working_hours(self) -> bool:
        return self.session != SessionWindow.OUTSIDE
