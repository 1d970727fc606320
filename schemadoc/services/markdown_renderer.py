"""Markdown rendering of a schema snapshot."""

import logging
import re
from collections import defaultdict
from datetime import datetime, timezone
from typing import Dict, Iterable, List, Optional, Set, Tuple, TypeVar

from ..models import (
    TableKey,
    ColumnRecord,
    ForeignKeyRecord,
    IndexRecord,
    SchemaSnapshot,
)

logger = logging.getLogger(__name__)

ARROW = "→"
NO_VALUE = "-"
DEFAULT_ACTION = "NO ACTION"

Record = TypeVar("Record")


def group_by_table(records: Iterable[Record]) -> Dict[TableKey, List[Record]]:
    """Group records by their ``table_key``, preserving input order."""
    grouped: Dict[TableKey, List[Record]] = defaultdict(list)
    for record in records:
        grouped[record.table_key].append(record)
    return grouped


def _group_in_order(records: Iterable[Record], key) -> List[List[Record]]:
    groups: Dict[object, List[Record]] = {}
    for record in records:
        groups.setdefault(key(record), []).append(record)
    return list(groups.values())


def escape_cell(value: str) -> str:
    """Make a value safe inside a Markdown table cell."""
    return re.sub(r"\s*[\r\n]+\s*", " ", value).replace("|", "\\|")


def _code(name: str) -> str:
    return f"`{name}`"


class MarkdownRenderer:
    """Render a ``SchemaSnapshot`` into the DATABASE_SCHEMA.md document."""

    def render(self, snapshot: SchemaSnapshot, generated_at: Optional[datetime] = None) -> str:
        """Build the full document.

        Output depends only on the snapshot and ``generated_at``; tables
        appear in the order the catalog queries returned them.
        """
        if generated_at is None:
            generated_at = datetime.now(timezone.utc)

        table_keys = snapshot.table_keys()
        columns_by_table = group_by_table(snapshot.columns)
        foreign_keys_by_table = group_by_table(snapshot.foreign_keys)
        indexes_by_table = group_by_table(snapshot.indexes)

        pk_columns: Set[Tuple[TableKey, str]] = {
            (pk.table_key, pk.column) for pk in snapshot.primary_keys
        }
        fk_columns: Set[Tuple[TableKey, str]] = {
            (fk.table_key, fk.column) for fk in snapshot.foreign_keys
        }

        anchors = self._build_anchors(table_keys)

        lines = self._build_header(snapshot, generated_at, len(table_keys))
        lines.extend(self._build_table_of_contents(table_keys, anchors))

        for table_key in table_keys:
            lines.append("---")
            lines.append("")
            lines.extend(self._build_table_section(
                table_key,
                columns_by_table[table_key],
                foreign_keys_by_table.get(table_key, []),
                indexes_by_table.get(table_key, []),
                pk_columns,
                fk_columns,
            ))

        if snapshot.enums:
            lines.append("---")
            lines.append("")
            lines.extend(self._build_enums(snapshot))

        logger.debug(f"Rendered {len(table_keys)} tables")
        return "\n".join(lines).rstrip("\n") + "\n"

    def _build_header(self, snapshot: SchemaSnapshot, generated_at: datetime, table_count: int) -> List[str]:
        return [
            "# Database Schema",
            "",
            f"- **Database:** {_code(snapshot.database)} ({snapshot.dialect.label})",
            f"- **Generated:** {generated_at.isoformat(timespec='seconds')}",
            f"- **Tables:** {table_count}",
            "",
        ]

    def _build_table_of_contents(self, table_keys: List[TableKey], anchors: Dict[TableKey, str]) -> List[str]:
        lines = ["## Table of Contents", ""]
        if not table_keys:
            lines.append("_No tables found._")
        for number, table_key in enumerate(table_keys, start=1):
            lines.append(f"{number}. [{table_key.qualified_name}](#{anchors[table_key]})")
        lines.append("")
        return lines

    def _build_table_section(self,
                             table_key: TableKey,
                             columns: List[ColumnRecord],
                             foreign_keys: List[ForeignKeyRecord],
                             indexes: List[IndexRecord],
                             pk_columns: Set[Tuple[TableKey, str]],
                             fk_columns: Set[Tuple[TableKey, str]]) -> List[str]:
        lines = [
            f"## {table_key.qualified_name}",
            "",
            "| Column | Type | Nullable | Default | Key |",
            "| --- | --- | --- | --- | --- |",
        ]

        for column in columns:
            lines.append(
                f"| {_code(escape_cell(column.column))} "
                f"| {escape_cell(column.data_type) or NO_VALUE} "
                f"| {'YES' if column.nullable else 'NO'} "
                f"| {self._format_default(column.default)} "
                f"| {self.key_marker(table_key, column.column, pk_columns, fk_columns)} |"
            )
        lines.append("")

        if foreign_keys:
            lines.append("### Foreign Keys")
            lines.append("")
            for constraint in _group_in_order(foreign_keys, lambda fk: fk.constraint_name):
                lines.append(self._format_foreign_key(constraint))
            lines.append("")

        if indexes:
            lines.append("### Indexes")
            lines.append("")
            for index in _group_in_order(indexes, lambda ix: ix.index_name):
                lines.append(self._format_index(index))
            lines.append("")

        return lines

    def _build_enums(self, snapshot: SchemaSnapshot) -> List[str]:
        lines = ["## Enums", ""]
        for values in _group_in_order(snapshot.enums, lambda e: (e.schema, e.enum_name)):
            lines.append(f"### {values[0].schema}.{values[0].enum_name}")
            lines.append("")
            for record in values:
                lines.append(f"- {_code(record.value)}")
            lines.append("")
        return lines

    @staticmethod
    def key_marker(table_key: TableKey,
                   column: str,
                   pk_columns: Set[Tuple[TableKey, str]],
                   fk_columns: Set[Tuple[TableKey, str]]) -> str:
        markers = []
        if (table_key, column) in pk_columns:
            markers.append("PK")
        if (table_key, column) in fk_columns:
            markers.append("FK")
        return ", ".join(markers) if markers else NO_VALUE

    @staticmethod
    def _format_default(default: Optional[str]) -> str:
        if default is None or str(default) == "":
            return NO_VALUE
        return _code(escape_cell(str(default)))

    @staticmethod
    def _format_foreign_key(constraint: List[ForeignKeyRecord]) -> str:
        """One bullet per constraint; composite keys list their column pairs jointly."""
        first = constraint[0]
        source = ", ".join(_code(fk.column) for fk in constraint)
        target = ", ".join(_code(fk.referenced_column) for fk in constraint)
        line = f"- {source} {ARROW} {_code(first.referenced_key.qualified_name)} ({target})"

        for label, action in (("ON DELETE", first.on_delete), ("ON UPDATE", first.on_update)):
            if action and action != DEFAULT_ACTION:
                line += f" {label} {action}"
        return line

    @staticmethod
    def _format_index(members: List[IndexRecord]) -> str:
        first = members[0]
        flags = []
        if first.is_primary:
            flags.append("PRIMARY")
        elif first.is_unique:
            flags.append("UNIQUE")
        flag_text = f" ({', '.join(flags)})" if flags else ""
        columns = ", ".join(
            _code(member.column) if member.column is not None else "(expression)"
            for member in members
        )
        return f"- {_code(first.index_name)}{flag_text}: {columns}"

    @staticmethod
    def _build_anchors(table_keys: List[TableKey]) -> Dict[TableKey, str]:
        """GitHub-style heading anchors, suffixed ``-1``, ``-2`` on collision."""
        anchors: Dict[TableKey, str] = {}
        seen: Dict[str, int] = {}
        for table_key in table_keys:
            slug = re.sub(r"[^\w\- ]", "", table_key.qualified_name.lower()).replace(" ", "-")
            if slug in seen:
                seen[slug] += 1
                anchor = f"{slug}-{seen[slug]}"
            else:
                seen[slug] = 0
                anchor = slug
            anchors[table_key] = anchor
        return anchors


def render_markdown(snapshot: SchemaSnapshot, generated_at: Optional[datetime] = None) -> str:
    """Shortcut for ``MarkdownRenderer().render``."""
    return MarkdownRenderer().render(snapshot, generated_at)
