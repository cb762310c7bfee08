from __future__ import annotations

from typing import Any, Optional, Protocol


class StateRepository(Protocol):
    """Durable local key-value storage for JSON-serializable state."""

    def load(self, key: str) -> Optional[Any]:
        raise NotImplementedError

    def save(self, key: str, value: Any) -> None:
        raise NotImplementedError

    def delete(self, key: str) -> None:
        raise NotImplementedError
