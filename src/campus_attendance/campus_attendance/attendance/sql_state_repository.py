from __future__ import annotations

import json
import logging
from typing import Any, Optional

from sqlalchemy import delete, insert, select, update

from ..common.datetime_utils import now_local
from ..core.exceptions import StorageError
from ..database.bootstrap import app_state
from ..database.connection import DatabaseConnection
from ..database.sql_base import db_connection
from .repository import StateRepository

logger = logging.getLogger(__name__)


class SqlStateRepository(StateRepository):
    """Stores each key as one JSON document in the ``app_state`` table."""

    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def load(self, key: str) -> Optional[Any]:
        with db_connection(self._conn_factory) as conn:
            raw = conn.execute(select(app_state.c.value).where(app_state.c.key == key)).scalar_one_or_none()
        if raw is None:
            return None
        try:
            return json.loads(raw)
        except ValueError as exc:
            raise StorageError(f"Stored value for {key!r} is not valid JSON") from exc

    def save(self, key: str, value: Any) -> None:
        try:
            payload = json.dumps(value)
        except (TypeError, ValueError) as exc:
            raise StorageError(f"Value for {key!r} is not JSON-serializable") from exc

        stamp = now_local()
        with db_connection(self._conn_factory) as conn:
            updated = conn.execute(
                update(app_state).where(app_state.c.key == key).values(value=payload, updated_at=stamp)
            ).rowcount
            if not updated:
                conn.execute(insert(app_state).values(key=key, value=payload, updated_at=stamp))
        logger.debug("Saved state %s (%d bytes)", key, len(payload))

    def delete(self, key: str) -> None:
        with db_connection(self._conn_factory) as conn:
            conn.execute(delete(app_state).where(app_state.c.key == key))
