from __future__ import annotations

import asyncio
import logging
from typing import Optional

from ..core.constants import DEFAULT_LAST_KNOWN_MAX_AGE_SECONDS, DEFAULT_LOCATION_TIMEOUT_SECONDS
from ..core.exceptions import LocationUnavailable
from ..geo.model import GeoPoint
from .model import PositionFix
from .repository import PositionProvider

logger = logging.getLogger(__name__)

LAST_KNOWN_NOTICE = "Using recent location. For best accuracy, ensure GPS has clear sky view."
UNAVAILABLE_MESSAGE = (
    "Unable to determine your location. Please ensure location services are enabled, "
    "GPS is turned on and you have a good signal."
)


class LocationService:
    """Acquires a position fix for attendance.

    A live fix is bounded by ``timeout_seconds``; when it cannot be had, a
    recent last-known fix is used and flagged with a notice.
    """

    def __init__(
        self,
        provider: PositionProvider,
        *,
        timeout_seconds: float = DEFAULT_LOCATION_TIMEOUT_SECONDS,
        last_known_max_age_seconds: float = DEFAULT_LAST_KNOWN_MAX_AGE_SECONDS,
    ):
        self._provider = provider
        self._timeout_seconds = float(timeout_seconds)
        self._max_age_seconds = float(last_known_max_age_seconds)

    async def acquire(self) -> PositionFix:
        try:
            point = await asyncio.wait_for(self._provider.current_position(), timeout=self._timeout_seconds)
            return PositionFix(point=point)
        except asyncio.TimeoutError:
            logger.warning("Live position fix timed out after %ss", self._timeout_seconds)
        except Exception:
            logger.warning("Live position fix failed", exc_info=True)

        last_known: Optional[GeoPoint] = None
        try:
            last_known = await self._provider.last_known_position(max_age_seconds=self._max_age_seconds)
        except Exception:
            logger.warning("Last known position lookup failed", exc_info=True)

        if last_known is None:
            raise LocationUnavailable(UNAVAILABLE_MESSAGE)

        logger.info("Falling back to last known position")
        return PositionFix(point=last_known, from_last_known=True, notice=LAST_KNOWN_NOTICE)
