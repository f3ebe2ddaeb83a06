"""
Schema-description CSV generator.

Each row describes one field (name, types, constraints, documentation);
the CSV documents the schema itself, not table contents. Every cell is
quoted with embedded quotes doubled (RFC 4180).
"""

import csv
import io
from typing import Iterable, List, Optional, Sequence

from ...core.generator import ArtifactGenerator
from ...core.schema import Field, Schema, Table
from ...core.types import map_type
from ..sql.dialects import get_dialect_spec

HEADERS = [
    "Field name",
    "General type",
    "SQL type",
    "Required",
    "Unique",
    "Primary key",
    "Foreign key",
    "Description",
    "Example",
    "Category",
    "Notes",
]


def write_csv(rows: Iterable[Sequence[str]], line_ending: str = "\n") -> str:
    """Serialize rows with every cell quoted."""
    buffer = io.StringIO()
    writer = csv.writer(buffer, quoting=csv.QUOTE_ALL, lineterminator=line_ending)
    writer.writerows(rows)
    return buffer.getvalue()


def yes_no(value: bool) -> str:
    return "Yes" if value else "No"


def field_row(field: Field, sql_type: Optional[str] = None) -> List[str]:
    return [
        field.name,
        field.type_general.value,
        sql_type or field.type_sql,
        yes_no(field.required),
        yes_no(field.unique),
        yes_no(field.primary_key),
        field.foreign_key.render("dotted") if field.foreign_key else "",
        field.description,
        field.example_value,
        field.category,
        field.notes,
    ]


class CSVGenerator(ArtifactGenerator):
    """Generator for schema-description CSV files."""

    def __init__(self, config=None):
        super().__init__(config)
        self.sql_target = get_dialect_spec(self.config.dialect).type_target

    @property
    def artifact_kind(self) -> str:
        return "csv"

    @property
    def file_extension(self) -> str:
        return ".csv"

    @property
    def mime_type(self) -> str:
        return "text/csv"

    def row(self, field: Field) -> List[str]:
        return field_row(field, field.type_sql or map_type(field.type_general, self.sql_target))

    def generate_table(self, table: Table) -> str:
        rows = [HEADERS] + [self.row(f) for f in table.fields]
        return write_csv(rows, self.config.line_ending)

    def generate_schema(self, schema: Schema) -> str:
        """One file for all tables, with a leading ``Table`` column."""
        rows = [["Table"] + HEADERS]
        for table in schema.tables:
            rows.extend([table.name] + self.row(f) for f in table.fields)
        return write_csv(rows, self.config.line_ending)

    def format_code(self, code: str) -> str:
        # Quoted cells may hold trailing blanks and blank lines; keep them
        return code
