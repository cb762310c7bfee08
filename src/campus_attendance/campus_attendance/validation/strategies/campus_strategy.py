from __future__ import annotations

from typing import Optional

from ...geo.model import GeoPoint
from ...geo.zones import ZoneRegistry
from ...sessions.model import SessionClassification
from ..model import ValidationDetails, ValidationResult
from .base import ValidationStrategy, outside_hours_reason


class CampusStrategy(ValidationStrategy):
    """Campus mode: working hours, then campus zone, then department zone.

    Only the first blocking check is reported.
    """

    def evaluate(
        self,
        *,
        position: GeoPoint,
        department_id: Optional[str],
        timing: SessionClassification,
        zones: ZoneRegistry,
    ) -> ValidationResult:
        campus = zones.campus
        inside_campus = campus.contains(position)
        campus_label = f"Inside {campus.label}" if inside_campus else f"Outside {campus.label}"

        if not timing.is_within_working_hours:
            return ValidationResult(
                is_valid=False,
                reason=outside_hours_reason(timing),
                details=ValidationDetails(
                    is_within_working_hours=False,
                    is_inside_campus=inside_campus,
                    is_inside_department=False,
                    current_session=timing.session,
                    user_location_label=campus_label,
                    time_info=timing.time_info,
                ),
            )

        if not inside_campus:
            return ValidationResult(
                is_valid=False,
                reason=f"You must be inside {campus.label} campus to mark attendance.",
                details=ValidationDetails(
                    is_within_working_hours=True,
                    is_inside_campus=False,
                    is_inside_department=False,
                    current_session=timing.session,
                    user_location_label=campus_label,
                    time_info=timing.time_info,
                ),
            )

        department = zones.resolve(department_id)
        if department is None:
            return ValidationResult(
                is_valid=False,
                reason=f"You are inside {campus.label} campus, but your department was not found. Please contact support.",
                details=ValidationDetails(
                    is_within_working_hours=True,
                    is_inside_campus=True,
                    is_inside_department=False,
                    current_session=timing.session,
                    user_location_label=f"Inside {campus.label} (Department not found)",
                    time_info=timing.time_info,
                ),
            )

        distance = round(department.distance_to(position))
        if not department.contains(position):
            return ValidationResult(
                is_valid=False,
                reason=(
                    f"You must be within {department.radius_meters:g} meters of your department to mark attendance. "
                    f"You are {distance}m away from {department.label}."
                ),
                details=ValidationDetails(
                    is_within_working_hours=True,
                    is_inside_campus=True,
                    is_inside_department=False,
                    current_session=timing.session,
                    user_location_label=f"Outside Department ({distance}m away)",
                    time_info=timing.time_info,
                    distance_meters=distance,
                ),
            )

        return ValidationResult(
            is_valid=True,
            reason=None,
            details=ValidationDetails(
                is_within_working_hours=True,
                is_inside_campus=True,
                is_inside_department=True,
                current_session=timing.session,
                user_location_label=department.label,
                time_info=timing.time_info,
                distance_meters=distance,
            ),
        )

    def location_label(self, *, position: GeoPoint, department_id: Optional[str], zones: ZoneRegistry) -> str:
        campus = zones.campus
        if not campus.contains(position):
            return f"Outside {campus.label}"

        department = zones.resolve(department_id)
        if department is not None and department.contains(position):
            return department.label
        return f"Inside {campus.label} (Outside Department)"
