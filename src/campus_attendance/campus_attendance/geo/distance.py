from __future__ import annotations

import math
from typing import TYPE_CHECKING

from ..core.constants import EARTH_RADIUS_METERS

if TYPE_CHECKING:
    from .model import GeoPoint


def distance_meters(a: "GeoPoint", b: "GeoPoint") -> float:
    """Great-circle distance between two points in meters (haversine)."""
    lat1_rad = math.radians(a.lat)
    lat2_rad = math.radians(b.lat)
    delta_lat = math.radians(b.lat - a.lat)
    delta_lng = math.radians(b.lng - a.lng)

    h = (math.sin(delta_lat / 2) ** 2
         + math.cos(lat1_rad) * math.cos(lat2_rad) * math.sin(delta_lng / 2) ** 2)
    c = 2 * math.atan2(math.sqrt(h), math.sqrt(1 - h))

    return EARTH_RADIUS_METERS * c
