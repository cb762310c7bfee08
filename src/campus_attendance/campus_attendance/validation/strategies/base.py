from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Optional

from ...geo.model import GeoPoint
from ...geo.zones import ZoneRegistry
from ...sessions.model import SessionClassification
from ..model import ValidationResult


class ValidationStrategy(ABC):
    """Strategy Pattern: encapsulate which checks a location mode applies."""

    @abstractmethod
    def evaluate(
        self,
        *,
        position: GeoPoint,
        department_id: Optional[str],
        timing: SessionClassification,
        zones: ZoneRegistry,
    ) -> ValidationResult:
        raise NotImplementedError

    @abstractmethod
    def location_label(self, *, position: GeoPoint, department_id: Optional[str], zones: ZoneRegistry) -> str:
        raise NotImplementedError


def outside_hours_reason(timing: SessionClassification) -> str:
    return f"Cannot mark attendance outside working hours. {timing.time_info}"
