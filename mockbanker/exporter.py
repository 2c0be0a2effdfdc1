"""
Export engine: CSV, JSON and SQL text for a row snapshot.

All functions are pure over (descriptor, rows, spacing flag). Values are
interpolated as-is: no CSV quoting and no SQL escaping. The output is meant
for throwaway local fixtures of generated data, never for untrusted input.
"""

from __future__ import annotations

import json
from typing import Any, Literal, NamedTuple, Sequence

from mockbanker.descriptors import Column, DomainDescriptor
from mockbanker.domain.rows import ResultRow

ExportFormat = Literal["csv", "json", "sql"]

MIME_TYPES = {
    "csv": "text/csv;charset=utf-8;",
    "json": "application/json;charset=utf-8;",
    "sql": "text/plain;charset=utf-8;",
}


class ExportArtifact(NamedTuple):
    filename: str
    mime_type: str
    content: str


def _csv_value(value: Any) -> str:
    if isinstance(value, bool):
        return "Yes" if value else "No"
    if value is None:
        return ""
    return str(value)


def _sql_value(column: Column, value: Any) -> str:
    if column.sql_type == "BOOLEAN":
        return "true" if value else "false"
    return f"'{'' if value is None else value}'"


def to_csv(descriptor: DomainDescriptor, rows: Sequence[ResultRow], spaces: bool = True) -> str:
    lines = [",".join(column.header for column in descriptor.csv_columns)]
    for row in rows:
        lines.append(
            ",".join(_csv_value(row.cell(column.field, spaces)) for column in descriptor.csv_columns)
        )
    return "\n".join(lines) + "\n"


def to_json(rows: Sequence[ResultRow]) -> str:
    """Pretty-printed array; field names and order follow the row model."""
    return json.dumps([row.model_dump() for row in rows], indent=2, ensure_ascii=False)


def to_sql(descriptor: DomainDescriptor, rows: Sequence[ResultRow]) -> str:
    columns = descriptor.sql_columns
    names = ", ".join(column.sql_column for column in columns)
    definitions = ", ".join(f"{column.sql_column} {column.sql_type}" for column in columns)
    lines = [f"CREATE TABLE IF NOT EXISTS {descriptor.table} ({definitions});"]
    for row in rows:
        values = ", ".join(_sql_value(column, getattr(row, column.field)) for column in columns)
        lines.append(f"INSERT INTO {descriptor.table} ({names}) VALUES ({values});")
    return "\n".join(lines) + "\n"


def export(
    descriptor: DomainDescriptor,
    rows: Sequence[ResultRow],
    fmt: ExportFormat,
    spaces: bool = True,
) -> ExportArtifact:
    """Build the downloadable artifact (`<stem>.<fmt>`) for a snapshot."""
    if fmt == "csv":
        content = to_csv(descriptor, rows, spaces)
    elif fmt == "json":
        content = to_json(rows)
    elif fmt == "sql":
        content = to_sql(descriptor, rows)
    else:
        raise ValueError(f"Unknown export format '{fmt}'. Available: {', '.join(MIME_TYPES)}")
    return ExportArtifact(f"{descriptor.stem}.{fmt}", MIME_TYPES[fmt], content)


def copy_all_text(rows: Sequence[ResultRow], spaces: bool = True) -> str:
    return "\n".join(row.display(spaces) for row in rows)


__all__ = [
    "ExportArtifact",
    "ExportFormat",
    "MIME_TYPES",
    "to_csv",
    "to_json",
    "to_sql",
    "export",
    "copy_all_text",
]
