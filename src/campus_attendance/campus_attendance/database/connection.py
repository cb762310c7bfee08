from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine


@dataclass
class DBConfig:
    uri: str
    echo: bool = False


class DatabaseConnection:
    """Singleton-like engine holder.

    The engine is created lazily on first use; callers open short-lived
    connections per operation.
    """

    _instance: Optional["DatabaseConnection"] = None

    def __init__(self, config: DBConfig):
        self._config = config
        self._engine: Optional[Engine] = None

    @classmethod
    def get_instance(cls, config: DBConfig) -> "DatabaseConnection":
        if cls._instance is None or cls._instance._config.uri != config.uri:
            cls._instance = DatabaseConnection(config)
        return cls._instance

    @property
    def uri(self) -> str:
        return self._config.uri

    @property
    def engine(self) -> Engine:
        if self._engine is None:
            self._engine = create_engine(self._config.uri, echo=self._config.echo, future=True)
        return self._engine

    def dispose(self) -> None:
        if self._engine is not None:
            self._engine.dispose()
            self._engine = None
