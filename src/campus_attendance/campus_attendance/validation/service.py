from __future__ import annotations

import logging
from datetime import datetime
from typing import Callable, Optional, Union

from ..common.datetime_utils import now_local
from ..core.enums import LocationMode
from ..geo.model import GeoPoint
from ..geo.zones import ZoneRegistry
from ..sessions.clock import SessionClock
from .cache import ValidationCache, cache_key
from .factory import ValidationStrategyFactory
from .model import ValidationResult

logger = logging.getLogger(__name__)


def coerce_mode(mode: Union[LocationMode, str, None]) -> Optional[LocationMode]:
    if mode is None or isinstance(mode, LocationMode):
        return mode
    try:
        return LocationMode(str(mode).upper())
    except ValueError:
        logger.warning("Unknown location mode %r, treating as campus", mode)
        return None


class ValidationEngine:
    """Decides whether an attendance attempt is valid right now, here.

    Identical inputs within the cache TTL return the stored result without
    looking at the clock again.
    """

    def __init__(
        self,
        zones: Optional[ZoneRegistry] = None,
        *,
        session_clock: Optional[SessionClock] = None,
        cache: Optional[ValidationCache] = None,
        strategy_factory: Optional[ValidationStrategyFactory] = None,
        clock: Callable[[], datetime] = now_local,
    ):
        self._zones = zones or ZoneRegistry.default()
        self._session_clock = session_clock or SessionClock()
        self._cache = cache if cache is not None else ValidationCache(clock=clock)
        self._factory = strategy_factory or ValidationStrategyFactory()
        self._clock = clock

    @property
    def zones(self) -> ZoneRegistry:
        return self._zones

    @property
    def cache(self) -> ValidationCache:
        return self._cache

    def validate(
        self,
        position: GeoPoint,
        department_id: Optional[str],
        location_mode: Union[LocationMode, str, None],
    ) -> ValidationResult:
        mode = coerce_mode(location_mode)
        key = cache_key(position, department_id, mode)

        cached = self._cache.get(key)
        if cached is not None:
            return cached

        timing = self._session_clock.classify(self._clock())
        strategy = self._factory.for_mode(mode)
        result = strategy.evaluate(
            position=position,
            department_id=department_id,
            timing=timing,
            zones=self._zones,
        )

        if not result.is_valid:
            logger.debug("Attendance blocked at %s: %s", key, result.reason)

        self._cache.put(key, result)
        return result

    def location_status(
        self,
        position: GeoPoint,
        department_id: Optional[str],
        location_mode: Union[LocationMode, str, None],
    ) -> str:
        """Label submitted with the attendance record (not cached)."""
        strategy = self._factory.for_mode(coerce_mode(location_mode))
        return strategy.location_label(position=position, department_id=department_id, zones=self._zones)

    def is_within_working_hours(self) -> bool:
        return self._session_clock.is_within_working_hours(self._clock())
