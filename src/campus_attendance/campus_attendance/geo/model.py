from __future__ import annotations

from dataclasses import dataclass

from ..core.exceptions import ValidationError
from .distance import distance_meters


@dataclass(frozen=True)
class GeoPoint:
    """WGS84 position in degrees."""

    lat: float
    lng: float


@dataclass(frozen=True)
class GeofenceZone:
    """Circular zone (center + radius) used for containment checks."""

    id: str
    label: str
    center: GeoPoint
    radius_meters: float

    def __post_init__(self):
        if not self.radius_meters > 0:
            raise ValidationError(f"Geofence {self.id} must have a positive radius")

    def distance_to(self, point: GeoPoint) -> float:
        return distance_meters(point, self.center)

    def contains(self, point: GeoPoint) -> bool:
        return self.distance_to(point) <= self.radius_meters
