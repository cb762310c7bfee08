from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..core.enums import LocationMode
from .strategies.base import ValidationStrategy
from .strategies.campus_strategy import CampusStrategy
from .strategies.field_trip_strategy import FieldTripStrategy


@dataclass
class ValidationStrategyFactory:
    """Factory Pattern: choose the validation strategy for a location mode.

    A missing mode is treated as CAMPUS, the stricter of the two.
    """

    def for_mode(self, mode: Optional[LocationMode]) -> ValidationStrategy:
        if mode == LocationMode.FIELDTRIP:
            return FieldTripStrategy()
        return CampusStrategy()
