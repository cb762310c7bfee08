from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Callable, Optional

from ..common.datetime_utils import now_local
from ..core.constants import DEFAULT_VALIDATION_CACHE_TTL_SECONDS
from ..core.enums import LocationMode
from ..geo.model import GeoPoint
from .model import ValidationResult

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CacheEntry:
    result: ValidationResult
    timestamp: datetime


def cache_key(position: GeoPoint, department_id: Optional[str], mode: Optional[LocationMode]) -> str:
    mode_part = mode.value if mode else "NONE"
    return f"{position.lat:.6f}|{position.lng:.6f}|{department_id}|{mode_part}"


class ValidationCache:
    """TTL cache for validation decisions.

    Expired entries are swept on every write, so the map never outgrows the
    set of inputs seen within one TTL window.
    """

    def __init__(
        self,
        *,
        ttl_seconds: float = DEFAULT_VALIDATION_CACHE_TTL_SECONDS,
        clock: Callable[[], datetime] = now_local,
    ):
        self._ttl_seconds = float(ttl_seconds)
        self._clock = clock
        self._entries: dict[str, CacheEntry] = {}

    def __len__(self) -> int:
        return len(self._entries)

    def _is_fresh(self, entry: CacheEntry, now: datetime) -> bool:
        return (now - entry.timestamp).total_seconds() < self._ttl_seconds

    def get(self, key: str) -> Optional[ValidationResult]:
        entry = self._entries.get(key)
        if entry is None:
            return None
        if not self._is_fresh(entry, self._clock()):
            return None
        return entry.result

    def put(self, key: str, result: ValidationResult) -> None:
        now = self._clock()
        self.sweep(now)
        self._entries[key] = CacheEntry(result=result, timestamp=now)

    def sweep(self, now: Optional[datetime] = None) -> int:
        now = now or self._clock()
        expired = [k for k, e in self._entries.items() if not self._is_fresh(e, now)]
        for k in expired:
            del self._entries[k]
        if expired:
            logger.debug("Evicted %d expired validation entries", len(expired))
        return len(expired)

    def clear(self) -> None:
        self._entries.clear()
