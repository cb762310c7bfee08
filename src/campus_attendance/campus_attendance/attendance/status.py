"""Read-time projections of an attendance record.

Nothing here writes back into the store: the 23:00 auto-complete is a
display rule only.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from ..core.constants import AUTO_COMPLETE_HOUR
from ..core.enums import AttendanceDayStatus, AttendanceType
from .model import AttendanceRecord


def day_status(record: Optional[AttendanceRecord]) -> AttendanceDayStatus:
    if record is None:
        return AttendanceDayStatus.NOT_MARKED
    if record.is_checked_out or record.check_out_time:
        return AttendanceDayStatus.CHECKED_OUT
    return AttendanceDayStatus.MARKED_IN_PROGRESS


def is_auto_completed(record: Optional[AttendanceRecord], now: datetime) -> bool:
    return day_status(record) == AttendanceDayStatus.MARKED_IN_PROGRESS and now.hour >= AUTO_COMPLETE_HOUR


def status_label(record: Optional[AttendanceRecord], now: datetime) -> str:
    status = day_status(record)
    if status == AttendanceDayStatus.NOT_MARKED:
        return "Not Marked"
    if status == AttendanceDayStatus.CHECKED_OUT:
        if record.attendance_type == AttendanceType.HALF_DAY:
            return "Present (Half Day)"
        return "Present (Full Day)"
    if is_auto_completed(record, now):
        return "Present (auto-completed)"
    return "In Progress"


def can_checkout(record: Optional[AttendanceRecord]) -> bool:
    return day_status(record) == AttendanceDayStatus.MARKED_IN_PROGRESS and bool(record.check_in_time)
