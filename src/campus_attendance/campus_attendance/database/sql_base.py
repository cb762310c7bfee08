from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Iterator

from sqlalchemy.engine import Connection
from sqlalchemy.exc import SQLAlchemyError

from ..core.exceptions import StorageError
from .connection import DatabaseConnection

logger = logging.getLogger(__name__)


@contextmanager
def db_connection(conn_factory: DatabaseConnection) -> Iterator[Connection]:
    """Open a connection inside a transaction; commit on success, roll back on error."""
    try:
        with conn_factory.engine.begin() as conn:
            yield conn
    except SQLAlchemyError as exc:
        logger.exception("Storage operation failed")
        raise StorageError(str(exc)) from exc
