from __future__ import annotations

from typing import Optional, Protocol

from ..geo.model import GeoPoint


class PositionProvider(Protocol):
    """Platform geolocation SDK adapter."""

    async def current_position(self) -> GeoPoint:
        raise NotImplementedError

    async def last_known_position(self, *, max_age_seconds: float) -> Optional[GeoPoint]:
        raise NotImplementedError
