from __future__ import annotations

from sqlalchemy import Column, DateTime, MetaData, String, Table, Text, inspect

from .connection import DatabaseConnection

metadata = MetaData()

app_state = Table(
    "app_state",
    metadata,
    Column("key", String(128), primary_key=True),
    Column("value", Text, nullable=False),
    Column("updated_at", DateTime, nullable=False),
)


def apply_schema(conn_factory: DatabaseConnection) -> None:
    """Create missing tables. Safe to call on every start."""
    metadata.create_all(conn_factory.engine)


def list_tables(conn_factory: DatabaseConnection) -> list[str]:
    return sorted(inspect(conn_factory.engine).get_table_names())
