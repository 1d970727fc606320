"""Records pulled from a database catalog during one export run."""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, NamedTuple, Optional


class DatabaseType(Enum):
    """Supported database types."""
    POSTGRESQL = "postgresql"
    MYSQL = "mysql"
    MSSQL = "mssql"
    SQLITE = "sqlite"

    @property
    def label(self) -> str:
        return {
            DatabaseType.POSTGRESQL: "PostgreSQL",
            DatabaseType.MYSQL: "MySQL",
            DatabaseType.MSSQL: "SQL Server",
            DatabaseType.SQLITE: "SQLite",
        }[self]


class TableKey(NamedTuple):
    """Composite (schema, table) key used to group catalog records."""
    schema: str
    table: str

    @property
    def qualified_name(self) -> str:
        return f"{self.schema}.{self.table}"


@dataclass
class ColumnRecord:
    """A single column of a base table."""
    schema: str
    table: str
    column: str
    data_type: str
    nullable: bool
    default: Optional[str] = None
    ordinal_position: int = 0

    @property
    def table_key(self) -> TableKey:
        return TableKey(self.schema, self.table)


@dataclass
class PrimaryKeyRecord:
    """One member column of a table's primary key."""
    schema: str
    table: str
    column: str
    ordinal_position: int = 1

    @property
    def table_key(self) -> TableKey:
        return TableKey(self.schema, self.table)


@dataclass
class ForeignKeyRecord:
    """One column pair of a foreign key constraint.

    Composite constraints produce one record per column pair, all sharing the
    same ``constraint_name``.
    """
    schema: str
    table: str
    constraint_name: str
    column: str
    referenced_schema: str
    referenced_table: str
    referenced_column: str
    on_update: Optional[str] = None
    on_delete: Optional[str] = None

    @property
    def table_key(self) -> TableKey:
        return TableKey(self.schema, self.table)

    @property
    def referenced_key(self) -> TableKey:
        return TableKey(self.referenced_schema, self.referenced_table)


@dataclass
class IndexRecord:
    """One member of an index. ``column`` is None for expression members."""
    schema: str
    table: str
    index_name: str
    column: Optional[str]
    is_unique: bool = False
    is_primary: bool = False

    @property
    def table_key(self) -> TableKey:
        return TableKey(self.schema, self.table)


@dataclass
class EnumRecord:
    """One value of an enumerated type."""
    schema: str
    enum_name: str
    value: str


@dataclass
class SchemaSnapshot:
    """Everything read from the catalog in one pass."""
    dialect: DatabaseType
    database: str
    columns: List[ColumnRecord] = field(default_factory=list)
    primary_keys: List[PrimaryKeyRecord] = field(default_factory=list)
    foreign_keys: List[ForeignKeyRecord] = field(default_factory=list)
    indexes: List[IndexRecord] = field(default_factory=list)
    enums: List[EnumRecord] = field(default_factory=list)

    def table_keys(self) -> List[TableKey]:
        """Distinct tables present in ``columns``, in first-appearance order."""
        return list(dict.fromkeys(column.table_key for column in self.columns))
