"""Catalog record models for SchemaDoc."""

from .metadata import (
    DatabaseType,
    TableKey,
    ColumnRecord,
    PrimaryKeyRecord,
    ForeignKeyRecord,
    IndexRecord,
    EnumRecord,
    SchemaSnapshot,
)

__all__ = [
    "DatabaseType",
    "TableKey",
    "ColumnRecord",
    "PrimaryKeyRecord",
    "ForeignKeyRecord",
    "IndexRecord",
    "EnumRecord",
    "SchemaSnapshot",
]
