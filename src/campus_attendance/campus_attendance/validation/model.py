from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..core.enums import SessionWindow


@dataclass(frozen=True)
class ValidationDetails:
    """Partial evaluation kept for diagnostic display, even when invalid."""

    is_within_working_hours: bool
    is_inside_campus: bool
    is_inside_department: bool
    current_session: SessionWindow
    user_location_label: str
    time_info: str
    distance_meters: Optional[int] = None


@dataclass(frozen=True)
class ValidationResult:
    is_valid: bool
    reason: Optional[str]
    details: ValidationDetails
