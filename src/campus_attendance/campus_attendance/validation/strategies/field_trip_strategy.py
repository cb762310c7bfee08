from __future__ import annotations

from typing import Optional

from ...core.constants import FIELD_TRIP_LOCATION_LABEL
from ...geo.model import GeoPoint
from ...geo.zones import ZoneRegistry
from ...sessions.model import SessionClassification
from ..model import ValidationDetails, ValidationResult
from .base import ValidationStrategy, outside_hours_reason


class FieldTripStrategy(ValidationStrategy):
    """Field trip: only working hours matter, no distance is computed."""

    def evaluate(
        self,
        *,
        position: GeoPoint,
        department_id: Optional[str],
        timing: SessionClassification,
        zones: ZoneRegistry,
    ) -> ValidationResult:
        details = ValidationDetails(
            is_within_working_hours=timing.is_within_working_hours,
            is_inside_campus=False,
            is_inside_department=False,
            current_session=timing.session,
            user_location_label=FIELD_TRIP_LOCATION_LABEL,
            time_info=timing.time_info,
        )
        if not timing.is_within_working_hours:
            return ValidationResult(is_valid=False, reason=outside_hours_reason(timing), details=details)
        return ValidationResult(is_valid=True, reason=None, details=details)

    def location_label(self, *, position: GeoPoint, department_id: Optional[str], zones: ZoneRegistry) -> str:
        return FIELD_TRIP_LOCATION_LABEL
