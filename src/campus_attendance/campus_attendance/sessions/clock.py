from __future__ import annotations

from datetime import datetime

from ..common.datetime_utils import format_clock, format_duration, minutes_since_midnight
from ..core.constants import (
    AFTERNOON_END_MINUTES,
    AFTERNOON_START_MINUTES,
    FORENOON_END_MINUTES,
    FORENOON_START_MINUTES,
)
from ..core.enums import SessionType, SessionWindow
from .model import SessionClassification, WorkingWindow

MINUTES_PER_DAY = 24 * 60


class SessionClock:
    """Maps wall-clock time to a working-hour session.

    FORENOON is half-open ``[start, end)`` and AFTERNOON is closed
    ``[start, end]``; the two windows meet at 13:00, which belongs to
    AFTERNOON.
    """

    def __init__(
        self,
        *,
        forenoon: tuple[int, int] = (FORENOON_START_MINUTES, FORENOON_END_MINUTES),
        afternoon: tuple[int, int] = (AFTERNOON_START_MINUTES, AFTERNOON_END_MINUTES),
    ):
        self._windows = (
            WorkingWindow(SessionWindow.FORENOON, forenoon[0], forenoon[1]),
            WorkingWindow(SessionWindow.AFTERNOON, afternoon[0], afternoon[1], end_inclusive=True),
        )

    @property
    def windows(self) -> tuple[WorkingWindow, ...]:
        return self._windows

    def classify(self, now: datetime) -> SessionClassification:
        minutes = minutes_since_midnight(now)

        for window in self._windows:
            if window.contains(minutes):
                start_label = format_clock(window.start_minutes)
                end_label = format_clock(window.end_minutes)
                return SessionClassification(
                    session=window.session,
                    remaining_minutes=window.end_minutes - minutes,
                    window_end_label=end_label,
                    time_info=f"{window.session.value.title()} Session ({start_label} - {end_label})",
                )

        first = self._windows[0]
        first_label = format_clock(first.start_minutes)

        upcoming = [w for w in self._windows if w.start_minutes > minutes]
        if upcoming:
            nxt = upcoming[0]
            until = nxt.start_minutes - minutes
            label = format_clock(nxt.start_minutes)
            return SessionClassification(
                session=SessionWindow.OUTSIDE,
                remaining_minutes=until,
                window_end_label=label,
                time_info=f"Next session starts in {format_duration(until)} ({label})",
            )

        until_tomorrow = MINUTES_PER_DAY - minutes + first.start_minutes
        return SessionClassification(
            session=SessionWindow.OUTSIDE,
            remaining_minutes=0,
            window_end_label=first_label,
            time_info=(
                "Working hours have ended for today. "
                f"Next session starts tomorrow at {first_label} (in {format_duration(until_tomorrow)})"
            ),
        )

    def is_within_working_hours(self, now: datetime) -> bool:
        return self.classify(now).is_within_working_hours

    def current_session_type(self, now: datetime) -> SessionType:
        """Session to stamp on a freshly submitted record.

        OUTSIDE falls back to FORENOON. Submissions outside working hours are
        blocked by validation before they get here.
        """
        session = self.classify(now).session
        if session == SessionWindow.AFTERNOON:
            return SessionType.AFTERNOON
        return SessionType.FORENOON
