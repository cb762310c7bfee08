from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..geo.model import GeoPoint


@dataclass(frozen=True)
class PositionFix:
    point: GeoPoint
    from_last_known: bool = False
    notice: Optional[str] = None
