"""Catalog readers for PostgreSQL, MySQL, SQL Server, and SQLite."""

import logging
import re
from abc import ABC, abstractmethod
from typing import Any, Callable, Dict, List, Mapping, Optional

from sqlalchemy import text
from sqlalchemy.engine import Connection
from sqlalchemy.exc import SQLAlchemyError

from ..exceptions import ExtractionError
from ..models import (
    DatabaseType,
    ColumnRecord,
    PrimaryKeyRecord,
    ForeignKeyRecord,
    IndexRecord,
    EnumRecord,
    SchemaSnapshot,
)

logger = logging.getLogger(__name__)

ENUM_VALUE_PATTERN = re.compile(r"'((?:[^']|'')*)'")


def _normalize_action(action: Optional[str]) -> Optional[str]:
    """``SET_NULL`` / ``set null`` -> ``SET NULL``."""
    if not action:
        return None
    return action.replace("_", " ").upper()


def parse_mysql_enum_values(column_type: str) -> List[str]:
    """Extract the values of a MySQL ``enum('a','b')`` column type."""
    return [value.replace("''", "'") for value in ENUM_VALUE_PATTERN.findall(column_type)]


class MetadataReader(ABC):
    """Runs a fixed sequence of read-only catalog queries on one connection."""

    dialect: DatabaseType

    def read(self, conn: Connection, database: str) -> SchemaSnapshot:
        """Read columns, keys, indexes and enums into a snapshot.

        Any driver error aborts the whole read; nothing partial is returned.
        """
        snapshot = SchemaSnapshot(dialect=self.dialect, database=database)
        steps = [
            ("columns", self.get_columns),
            ("primary_keys", self.get_primary_keys),
            ("foreign_keys", self.get_foreign_keys),
            ("indexes", self.get_indexes),
            ("enums", self.get_enums),
        ]
        for name, step in steps:
            records = self._run_step(conn, name, step)
            setattr(snapshot, name, records)
            logger.info(f"Read {len(records)} {name.replace('_', ' ')} from {self.dialect.label}")
        return snapshot

    def _run_step(self, conn: Connection, name: str, step: Callable[[Connection], List[Any]]) -> List[Any]:
        try:
            return step(conn)
        except SQLAlchemyError as e:
            raise ExtractionError(f"Failed to read {name.replace('_', ' ')}: {e}") from e

    def _fetch(self, conn: Connection, query: str,
               params: Optional[Dict[str, Any]] = None) -> List[Mapping[str, Any]]:
        result = conn.execute(text(query), params or {})
        return [row._mapping for row in result]

    @abstractmethod
    def get_columns(self, conn: Connection) -> List[ColumnRecord]:
        """Columns of every user base table, ordered by schema, table, position."""

    @abstractmethod
    def get_primary_keys(self, conn: Connection) -> List[PrimaryKeyRecord]:
        """Primary key members in key order."""

    @abstractmethod
    def get_foreign_keys(self, conn: Connection) -> List[ForeignKeyRecord]:
        """Foreign key column pairs, rows of one constraint adjacent."""

    @abstractmethod
    def get_indexes(self, conn: Connection) -> List[IndexRecord]:
        """Index key members, rows of one index adjacent."""

    def get_enums(self, conn: Connection) -> List[EnumRecord]:
        return []


class PostgresMetadataReader(MetadataReader):
    """Reads ``information_schema`` and ``pg_catalog``."""

    dialect = DatabaseType.POSTGRESQL

    COLUMNS_QUERY = """
        SELECT
            c.table_schema,
            c.table_name,
            c.column_name,
            c.data_type,
            c.udt_name,
            c.character_maximum_length,
            c.is_nullable,
            c.column_default,
            c.ordinal_position
        FROM information_schema.columns c
        JOIN information_schema.tables t
            ON t.table_schema = c.table_schema
            AND t.table_name = c.table_name
        WHERE t.table_type = 'BASE TABLE'
        AND c.table_schema NOT IN ('pg_catalog', 'information_schema')
        ORDER BY c.table_schema, c.table_name, c.ordinal_position
    """

    PRIMARY_KEYS_QUERY = """
        SELECT
            kcu.table_schema,
            kcu.table_name,
            kcu.column_name,
            kcu.ordinal_position
        FROM information_schema.table_constraints tc
        JOIN information_schema.key_column_usage kcu
            ON tc.constraint_name = kcu.constraint_name
            AND tc.table_schema = kcu.table_schema
            AND tc.table_name = kcu.table_name
        WHERE tc.constraint_type = 'PRIMARY KEY'
        AND tc.table_schema NOT IN ('pg_catalog', 'information_schema')
        ORDER BY kcu.table_schema, kcu.table_name, kcu.ordinal_position
    """

    FOREIGN_KEYS_QUERY = """
        SELECT
            ns.nspname AS table_schema,
            cl.relname AS table_name,
            con.conname AS constraint_name,
            att.attname AS column_name,
            fns.nspname AS referenced_schema,
            fcl.relname AS referenced_table,
            fatt.attname AS referenced_column,
            CASE con.confupdtype
                WHEN 'r' THEN 'RESTRICT' WHEN 'c' THEN 'CASCADE'
                WHEN 'n' THEN 'SET NULL' WHEN 'd' THEN 'SET DEFAULT'
                ELSE 'NO ACTION' END AS on_update,
            CASE con.confdeltype
                WHEN 'r' THEN 'RESTRICT' WHEN 'c' THEN 'CASCADE'
                WHEN 'n' THEN 'SET NULL' WHEN 'd' THEN 'SET DEFAULT'
                ELSE 'NO ACTION' END AS on_delete
        FROM pg_constraint con
        CROSS JOIN LATERAL unnest(con.conkey, con.confkey)
            WITH ORDINALITY AS k(attnum, fattnum, ord)
        JOIN pg_class cl ON cl.oid = con.conrelid
        JOIN pg_namespace ns ON ns.oid = cl.relnamespace
        JOIN pg_attribute att ON att.attrelid = con.conrelid AND att.attnum = k.attnum
        JOIN pg_class fcl ON fcl.oid = con.confrelid
        JOIN pg_namespace fns ON fns.oid = fcl.relnamespace
        JOIN pg_attribute fatt ON fatt.attrelid = con.confrelid AND fatt.attnum = k.fattnum
        WHERE con.contype = 'f'
        AND ns.nspname NOT IN ('pg_catalog', 'information_schema')
        ORDER BY ns.nspname, cl.relname, con.conname, k.ord
    """

    INDEXES_QUERY = """
        SELECT
            n.nspname AS table_schema,
            t.relname AS table_name,
            i.relname AS index_name,
            a.attname AS column_name,
            ix.indisunique AS is_unique,
            ix.indisprimary AS is_primary
        FROM pg_index ix
        JOIN pg_class t ON t.oid = ix.indrelid
        JOIN pg_class i ON i.oid = ix.indexrelid
        JOIN pg_namespace n ON n.oid = t.relnamespace
        CROSS JOIN LATERAL unnest(CAST(ix.indkey AS int2[]))
            WITH ORDINALITY AS k(attnum, ord)
        LEFT JOIN pg_attribute a ON a.attrelid = t.oid AND a.attnum = k.attnum
        WHERE t.relkind IN ('r', 'p')
        AND k.ord <= ix.indnkeyatts
        AND n.nspname NOT IN ('pg_catalog', 'information_schema', 'pg_toast')
        ORDER BY n.nspname, t.relname, i.relname, k.ord
    """

    ENUMS_QUERY = """
        SELECT
            n.nspname AS enum_schema,
            t.typname AS enum_name,
            e.enumlabel AS enum_value
        FROM pg_type t
        JOIN pg_enum e ON t.oid = e.enumtypid
        JOIN pg_namespace n ON n.oid = t.typnamespace
        ORDER BY n.nspname, t.typname, e.enumsortorder
    """

    @staticmethod
    def format_type(row: Mapping[str, Any]) -> str:
        data_type = row["data_type"]
        if data_type == "USER-DEFINED":
            return row["udt_name"]
        if data_type == "ARRAY":
            return f"{row['udt_name'].lstrip('_')}[]"
        if row["character_maximum_length"]:
            return f"{data_type}({row['character_maximum_length']})"
        return data_type

    def get_columns(self, conn: Connection) -> List[ColumnRecord]:
        return [
            ColumnRecord(
                schema=row["table_schema"],
                table=row["table_name"],
                column=row["column_name"],
                data_type=self.format_type(row),
                nullable=row["is_nullable"] == "YES",
                default=row["column_default"],
                ordinal_position=row["ordinal_position"],
            )
            for row in self._fetch(conn, self.COLUMNS_QUERY)
        ]

    def get_primary_keys(self, conn: Connection) -> List[PrimaryKeyRecord]:
        return [
            PrimaryKeyRecord(
                schema=row["table_schema"],
                table=row["table_name"],
                column=row["column_name"],
                ordinal_position=row["ordinal_position"],
            )
            for row in self._fetch(conn, self.PRIMARY_KEYS_QUERY)
        ]

    def get_foreign_keys(self, conn: Connection) -> List[ForeignKeyRecord]:
        return [
            ForeignKeyRecord(
                schema=row["table_schema"],
                table=row["table_name"],
                constraint_name=row["constraint_name"],
                column=row["column_name"],
                referenced_schema=row["referenced_schema"],
                referenced_table=row["referenced_table"],
                referenced_column=row["referenced_column"],
                on_update=row["on_update"],
                on_delete=row["on_delete"],
            )
            for row in self._fetch(conn, self.FOREIGN_KEYS_QUERY)
        ]

    def get_indexes(self, conn: Connection) -> List[IndexRecord]:
        return [
            IndexRecord(
                schema=row["table_schema"],
                table=row["table_name"],
                index_name=row["index_name"],
                column=row["column_name"],
                is_unique=bool(row["is_unique"]),
                is_primary=bool(row["is_primary"]),
            )
            for row in self._fetch(conn, self.INDEXES_QUERY)
        ]

    def get_enums(self, conn: Connection) -> List[EnumRecord]:
        return [
            EnumRecord(
                schema=row["enum_schema"],
                enum_name=row["enum_name"],
                value=row["enum_value"],
            )
            for row in self._fetch(conn, self.ENUMS_QUERY)
        ]


class MySQLMetadataReader(MetadataReader):
    """Reads ``information_schema`` for the connected database only."""

    dialect = DatabaseType.MYSQL

    COLUMNS_QUERY = """
        SELECT
            c.TABLE_SCHEMA AS table_schema,
            c.TABLE_NAME AS table_name,
            c.COLUMN_NAME AS column_name,
            c.COLUMN_TYPE AS column_type,
            c.IS_NULLABLE AS is_nullable,
            c.COLUMN_DEFAULT AS column_default,
            c.EXTRA AS extra,
            c.ORDINAL_POSITION AS ordinal_position
        FROM information_schema.COLUMNS c
        JOIN information_schema.TABLES t
            ON t.TABLE_SCHEMA = c.TABLE_SCHEMA
            AND t.TABLE_NAME = c.TABLE_NAME
        WHERE c.TABLE_SCHEMA = DATABASE()
        AND t.TABLE_TYPE = 'BASE TABLE'
        ORDER BY c.TABLE_NAME, c.ORDINAL_POSITION
    """

    PRIMARY_KEYS_QUERY = """
        SELECT
            TABLE_SCHEMA AS table_schema,
            TABLE_NAME AS table_name,
            COLUMN_NAME AS column_name,
            ORDINAL_POSITION AS ordinal_position
        FROM information_schema.KEY_COLUMN_USAGE
        WHERE TABLE_SCHEMA = DATABASE()
        AND CONSTRAINT_NAME = 'PRIMARY'
        ORDER BY TABLE_NAME, ORDINAL_POSITION
    """

    FOREIGN_KEYS_QUERY = """
        SELECT
            k.TABLE_SCHEMA AS table_schema,
            k.TABLE_NAME AS table_name,
            k.CONSTRAINT_NAME AS constraint_name,
            k.COLUMN_NAME AS column_name,
            k.REFERENCED_TABLE_SCHEMA AS referenced_schema,
            k.REFERENCED_TABLE_NAME AS referenced_table,
            k.REFERENCED_COLUMN_NAME AS referenced_column,
            r.UPDATE_RULE AS on_update,
            r.DELETE_RULE AS on_delete
        FROM information_schema.KEY_COLUMN_USAGE k
        JOIN information_schema.REFERENTIAL_CONSTRAINTS r
            ON r.CONSTRAINT_SCHEMA = k.CONSTRAINT_SCHEMA
            AND r.CONSTRAINT_NAME = k.CONSTRAINT_NAME
            AND r.TABLE_NAME = k.TABLE_NAME
        WHERE k.TABLE_SCHEMA = DATABASE()
        AND k.REFERENCED_TABLE_NAME IS NOT NULL
        ORDER BY k.TABLE_NAME, k.CONSTRAINT_NAME, k.ORDINAL_POSITION
    """

    INDEXES_QUERY = """
        SELECT
            TABLE_SCHEMA AS table_schema,
            TABLE_NAME AS table_name,
            INDEX_NAME AS index_name,
            COLUMN_NAME AS column_name,
            NON_UNIQUE AS non_unique
        FROM information_schema.STATISTICS
        WHERE TABLE_SCHEMA = DATABASE()
        ORDER BY TABLE_NAME, INDEX_NAME, SEQ_IN_INDEX
    """

    ENUMS_QUERY = """
        SELECT
            TABLE_SCHEMA AS table_schema,
            TABLE_NAME AS table_name,
            COLUMN_NAME AS column_name,
            COLUMN_TYPE AS column_type
        FROM information_schema.COLUMNS
        WHERE TABLE_SCHEMA = DATABASE()
        AND DATA_TYPE = 'enum'
        ORDER BY TABLE_NAME, ORDINAL_POSITION
    """

    @staticmethod
    def normalize_default(default: Optional[str], extra: Optional[str]) -> Optional[str]:
        """MariaDB reports a missing default as the literal ``NULL``."""
        if default == "NULL":
            default = None
        if default is None and "auto_increment" in (extra or ""):
            return "auto_increment"
        return default

    def get_columns(self, conn: Connection) -> List[ColumnRecord]:
        columns = []
        for row in self._fetch(conn, self.COLUMNS_QUERY):
            default = self.normalize_default(row["column_default"], row["extra"])
            columns.append(ColumnRecord(
                schema=row["table_schema"],
                table=row["table_name"],
                column=row["column_name"],
                data_type=row["column_type"],
                nullable=row["is_nullable"] == "YES",
                default=default,
                ordinal_position=row["ordinal_position"],
            ))
        return columns

    def get_primary_keys(self, conn: Connection) -> List[PrimaryKeyRecord]:
        return [
            PrimaryKeyRecord(
                schema=row["table_schema"],
                table=row["table_name"],
                column=row["column_name"],
                ordinal_position=row["ordinal_position"],
            )
            for row in self._fetch(conn, self.PRIMARY_KEYS_QUERY)
        ]

    def get_foreign_keys(self, conn: Connection) -> List[ForeignKeyRecord]:
        return [
            ForeignKeyRecord(
                schema=row["table_schema"],
                table=row["table_name"],
                constraint_name=row["constraint_name"],
                column=row["column_name"],
                referenced_schema=row["referenced_schema"],
                referenced_table=row["referenced_table"],
                referenced_column=row["referenced_column"],
                on_update=_normalize_action(row["on_update"]),
                on_delete=_normalize_action(row["on_delete"]),
            )
            for row in self._fetch(conn, self.FOREIGN_KEYS_QUERY)
        ]

    def get_indexes(self, conn: Connection) -> List[IndexRecord]:
        return [
            IndexRecord(
                schema=row["table_schema"],
                table=row["table_name"],
                index_name=row["index_name"],
                column=row["column_name"],
                is_unique=not int(row["non_unique"]),
                is_primary=row["index_name"] == "PRIMARY",
            )
            for row in self._fetch(conn, self.INDEXES_QUERY)
        ]

    def get_enums(self, conn: Connection) -> List[EnumRecord]:
        # MySQL enums live inline on the column, so they are named after it
        enums = []
        for row in self._fetch(conn, self.ENUMS_QUERY):
            name = f"{row['table_name']}.{row['column_name']}"
            for value in parse_mysql_enum_values(row["column_type"]):
                enums.append(EnumRecord(schema=row["table_schema"], enum_name=name, value=value))
        return enums


class MSSQLMetadataReader(MetadataReader):
    """Reads ``INFORMATION_SCHEMA`` and the ``sys`` catalog views."""

    dialect = DatabaseType.MSSQL

    COLUMNS_QUERY = """
        SELECT
            c.TABLE_SCHEMA AS table_schema,
            c.TABLE_NAME AS table_name,
            c.COLUMN_NAME AS column_name,
            c.DATA_TYPE AS data_type,
            c.CHARACTER_MAXIMUM_LENGTH AS character_maximum_length,
            c.NUMERIC_PRECISION AS numeric_precision,
            c.NUMERIC_SCALE AS numeric_scale,
            c.IS_NULLABLE AS is_nullable,
            c.COLUMN_DEFAULT AS column_default,
            c.ORDINAL_POSITION AS ordinal_position
        FROM INFORMATION_SCHEMA.COLUMNS c
        JOIN INFORMATION_SCHEMA.TABLES t
            ON t.TABLE_SCHEMA = c.TABLE_SCHEMA
            AND t.TABLE_NAME = c.TABLE_NAME
        WHERE t.TABLE_TYPE = 'BASE TABLE'
        AND c.TABLE_SCHEMA NOT IN ('sys', 'INFORMATION_SCHEMA')
        AND t.TABLE_NAME <> 'sysdiagrams'
        ORDER BY c.TABLE_SCHEMA, c.TABLE_NAME, c.ORDINAL_POSITION
    """

    PRIMARY_KEYS_QUERY = """
        SELECT
            kcu.TABLE_SCHEMA AS table_schema,
            kcu.TABLE_NAME AS table_name,
            kcu.COLUMN_NAME AS column_name,
            kcu.ORDINAL_POSITION AS ordinal_position
        FROM INFORMATION_SCHEMA.TABLE_CONSTRAINTS tc
        JOIN INFORMATION_SCHEMA.KEY_COLUMN_USAGE kcu
            ON tc.CONSTRAINT_NAME = kcu.CONSTRAINT_NAME
            AND tc.CONSTRAINT_SCHEMA = kcu.CONSTRAINT_SCHEMA
            AND tc.TABLE_NAME = kcu.TABLE_NAME
        WHERE tc.CONSTRAINT_TYPE = 'PRIMARY KEY'
        ORDER BY kcu.TABLE_SCHEMA, kcu.TABLE_NAME, kcu.ORDINAL_POSITION
    """

    FOREIGN_KEYS_QUERY = """
        SELECT
            SCHEMA_NAME(pt.schema_id) AS table_schema,
            pt.name AS table_name,
            fk.name AS constraint_name,
            pc.name AS column_name,
            SCHEMA_NAME(rt.schema_id) AS referenced_schema,
            rt.name AS referenced_table,
            rc.name AS referenced_column,
            fk.update_referential_action_desc AS on_update,
            fk.delete_referential_action_desc AS on_delete
        FROM sys.foreign_keys fk
        JOIN sys.foreign_key_columns fkc ON fkc.constraint_object_id = fk.object_id
        JOIN sys.tables pt ON pt.object_id = fkc.parent_object_id
        JOIN sys.columns pc
            ON pc.object_id = fkc.parent_object_id
            AND pc.column_id = fkc.parent_column_id
        JOIN sys.tables rt ON rt.object_id = fkc.referenced_object_id
        JOIN sys.columns rc
            ON rc.object_id = fkc.referenced_object_id
            AND rc.column_id = fkc.referenced_column_id
        ORDER BY SCHEMA_NAME(pt.schema_id), pt.name, fk.name, fkc.constraint_column_id
    """

    INDEXES_QUERY = """
        SELECT
            SCHEMA_NAME(t.schema_id) AS table_schema,
            t.name AS table_name,
            i.name AS index_name,
            c.name AS column_name,
            i.is_unique AS is_unique,
            i.is_primary_key AS is_primary
        FROM sys.indexes i
        JOIN sys.tables t ON t.object_id = i.object_id
        JOIN sys.index_columns ic
            ON ic.object_id = i.object_id
            AND ic.index_id = i.index_id
        JOIN sys.columns c
            ON c.object_id = ic.object_id
            AND c.column_id = ic.column_id
        WHERE i.type > 0
        AND ic.is_included_column = 0
        AND t.is_ms_shipped = 0
        ORDER BY SCHEMA_NAME(t.schema_id), t.name, i.name, ic.key_ordinal
    """

    CHARACTER_TYPES = {"char", "varchar", "nchar", "nvarchar", "binary", "varbinary"}
    DECIMAL_TYPES = {"decimal", "numeric"}

    @classmethod
    def format_type(cls, row: Mapping[str, Any]) -> str:
        data_type = row["data_type"]
        length = row["character_maximum_length"]
        if data_type in cls.CHARACTER_TYPES and length is not None:
            return f"{data_type}({'max' if length == -1 else length})"
        if data_type in cls.DECIMAL_TYPES and row["numeric_precision"] is not None:
            return f"{data_type}({row['numeric_precision']},{row['numeric_scale'] or 0})"
        return data_type

    def get_columns(self, conn: Connection) -> List[ColumnRecord]:
        return [
            ColumnRecord(
                schema=row["table_schema"],
                table=row["table_name"],
                column=row["column_name"],
                data_type=self.format_type(row),
                nullable=row["is_nullable"] == "YES",
                default=row["column_default"],
                ordinal_position=row["ordinal_position"],
            )
            for row in self._fetch(conn, self.COLUMNS_QUERY)
        ]

    def get_primary_keys(self, conn: Connection) -> List[PrimaryKeyRecord]:
        return [
            PrimaryKeyRecord(
                schema=row["table_schema"],
                table=row["table_name"],
                column=row["column_name"],
                ordinal_position=row["ordinal_position"],
            )
            for row in self._fetch(conn, self.PRIMARY_KEYS_QUERY)
        ]

    def get_foreign_keys(self, conn: Connection) -> List[ForeignKeyRecord]:
        return [
            ForeignKeyRecord(
                schema=row["table_schema"],
                table=row["table_name"],
                constraint_name=row["constraint_name"],
                column=row["column_name"],
                referenced_schema=row["referenced_schema"],
                referenced_table=row["referenced_table"],
                referenced_column=row["referenced_column"],
                on_update=_normalize_action(row["on_update"]),
                on_delete=_normalize_action(row["on_delete"]),
            )
            for row in self._fetch(conn, self.FOREIGN_KEYS_QUERY)
        ]

    def get_indexes(self, conn: Connection) -> List[IndexRecord]:
        return [
            IndexRecord(
                schema=row["table_schema"],
                table=row["table_name"],
                index_name=row["index_name"],
                column=row["column_name"],
                is_unique=bool(row["is_unique"]),
                is_primary=bool(row["is_primary"]),
            )
            for row in self._fetch(conn, self.INDEXES_QUERY)
        ]


class SQLiteMetadataReader(MetadataReader):
    """Reads ``sqlite_master`` plus per-table ``PRAGMA`` calls."""

    dialect = DatabaseType.SQLITE
    schema_name = "main"

    TABLES_QUERY = """
        SELECT name
        FROM sqlite_master
        WHERE type = 'table'
        AND name NOT LIKE 'sqlite_%'
        ORDER BY name
    """

    @staticmethod
    def quote(identifier: str) -> str:
        return '"' + identifier.replace('"', '""') + '"'

    def _table_names(self, conn: Connection) -> List[str]:
        return [row["name"] for row in self._fetch(conn, self.TABLES_QUERY)]

    def _pragma(self, conn: Connection, pragma: str, name: str) -> List[Mapping[str, Any]]:
        # colons would otherwise be read as bind parameters
        quoted = self.quote(name).replace(":", "\\:")
        return self._fetch(conn, f"PRAGMA {pragma}({quoted})")

    def _primary_key_columns(self, conn: Connection, table: str) -> List[str]:
        rows = [row for row in self._pragma(conn, "table_info", table) if row["pk"]]
        return [row["name"] for row in sorted(rows, key=lambda row: row["pk"])]

    def get_columns(self, conn: Connection) -> List[ColumnRecord]:
        columns = []
        for table in self._table_names(conn):
            for row in self._pragma(conn, "table_info", table):
                # PRAGMA table_info returns: cid, name, type, notnull, dflt_value, pk
                columns.append(ColumnRecord(
                    schema=self.schema_name,
                    table=table,
                    column=row["name"],
                    data_type=row["type"] or "-",
                    nullable=not bool(row["notnull"]),
                    default=row["dflt_value"],
                    ordinal_position=row["cid"] + 1,
                ))
        return columns

    def get_primary_keys(self, conn: Connection) -> List[PrimaryKeyRecord]:
        primary_keys = []
        for table in self._table_names(conn):
            for position, column in enumerate(self._primary_key_columns(conn, table), start=1):
                primary_keys.append(PrimaryKeyRecord(
                    schema=self.schema_name,
                    table=table,
                    column=column,
                    ordinal_position=position,
                ))
        return primary_keys

    def get_foreign_keys(self, conn: Connection) -> List[ForeignKeyRecord]:
        foreign_keys = []
        for table in self._table_names(conn):
            rows = sorted(
                self._pragma(conn, "foreign_key_list", table),
                key=lambda row: (row["id"], row["seq"]),
            )
            parent_keys: Dict[str, List[str]] = {}
            for row in rows:
                parent = row["table"]
                referenced_column = row["to"]
                if referenced_column is None:
                    # REFERENCES parent without a column list targets the parent's primary key
                    if parent not in parent_keys:
                        parent_keys[parent] = self._primary_key_columns(conn, parent)
                    pk_columns = parent_keys[parent]
                    referenced_column = pk_columns[row["seq"]] if row["seq"] < len(pk_columns) else "?"
                foreign_keys.append(ForeignKeyRecord(
                    schema=self.schema_name,
                    table=table,
                    constraint_name=f"fk_{table}_{row['id']}",
                    column=row["from"],
                    referenced_schema=self.schema_name,
                    referenced_table=parent,
                    referenced_column=referenced_column,
                    on_update=_normalize_action(row["on_update"]),
                    on_delete=_normalize_action(row["on_delete"]),
                ))
        return foreign_keys

    def get_indexes(self, conn: Connection) -> List[IndexRecord]:
        indexes = []
        for table in self._table_names(conn):
            index_rows = sorted(self._pragma(conn, "index_list", table), key=lambda row: row["name"])
            for index_row in index_rows:
                index_name = index_row["name"]
                members = sorted(self._pragma(conn, "index_info", index_name), key=lambda row: row["seqno"])
                for member in members:
                    indexes.append(IndexRecord(
                        schema=self.schema_name,
                        table=table,
                        index_name=index_name,
                        column=member["name"],
                        is_unique=bool(index_row["unique"]),
                        is_primary=index_row["origin"] == "pk",
                    ))
        return indexes


READERS = {
    DatabaseType.POSTGRESQL: PostgresMetadataReader,
    DatabaseType.MYSQL: MySQLMetadataReader,
    DatabaseType.MSSQL: MSSQLMetadataReader,
    DatabaseType.SQLITE: SQLiteMetadataReader,
}


def get_reader(database_type: DatabaseType) -> MetadataReader:
    """Return the catalog reader for a dialect."""
    try:
        return READERS[database_type]()
    except KeyError:
        raise ValueError(f"Unsupported database type: {database_type}")
