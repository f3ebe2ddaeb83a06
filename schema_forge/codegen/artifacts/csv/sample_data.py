"""
Synthetic sample-data generation.

Produces N rows of placeholder content for a table: one column per field,
``example_value`` when the field has one, otherwise a deterministic
placeholder for the field's general type. UUIDs come from an injectable
factory so runs can be made reproducible.
"""

import json
import random
import uuid
from datetime import datetime, timedelta
from typing import Any, Callable, Dict, List, Optional

import dateparser

from ...core.generator import ArtifactGenerator, GeneratorError
from ...core.schema import Field, FieldType, Schema, Table
from ....logging_config import get_logger
from .generator import write_csv

logger = get_logger(__name__)

UUIDFactory = Callable[[], str]

DATETIME_FORMAT = "%Y-%m-%d %H:%M:%S"
BASE_DATETIME = datetime(2024, 1, 1, 9, 0, 0)

Row = Dict[str, Any]


def random_uuid_factory() -> UUIDFactory:
    """Factory backed by uuid4 (not reproducible)."""
    return lambda: str(uuid.uuid4())


def seeded_uuid_factory(seed: int) -> UUIDFactory:
    """
    Factory producing the same version-4 UUID sequence for the same seed.

    Args:
        seed: Seed for the private random generator

    Returns:
        Callable returning UUID strings
    """
    rng = random.Random(seed)

    def factory() -> str:
        return str(uuid.UUID(int=rng.getrandbits(128), version=4))

    return factory


def normalize_datetime(value: str) -> str:
    """Render a human date ("March 3rd 2024", "2024-03-03T10:00") uniformly."""
    parsed = dateparser.parse(value, settings={"RELATIVE_BASE": BASE_DATETIME})
    if parsed is None:
        return value
    return parsed.strftime(DATETIME_FORMAT)


def format_cell(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float):
        return f"{value:.2f}"
    return str(value)


def rows_to_csv(table: Table, rows: List[Row], line_ending: str = "\n") -> str:
    """
    Render rows keyed by field name as CSV, columns in field order.

    Rows may come from an external collaborator: unknown keys are ignored
    and missing keys become empty cells.
    """
    names = [f.name for f in table.fields]
    body = [[format_cell(row.get(name)) for name in names] for row in rows]
    return write_csv([names] + body, line_ending)


def rows_to_json(table: Table, rows: List[Row]) -> List[Row]:
    """Project rows onto the table's fields, in field order."""
    names = [f.name for f in table.fields]
    return [{name: row.get(name) for name in names} for row in rows]


class SampleDataGenerator(ArtifactGenerator):
    """Generator for synthetic sample rows (CSV or JSON)."""

    def __init__(self, config=None, uuid_factory: Optional[UUIDFactory] = None):
        super().__init__(config)

        self.output_format = self.config.custom.get("output_format", "csv")
        if self.output_format not in ("csv", "json"):
            raise GeneratorError(
                f"Unsupported sample data format: {self.output_format}"
            )

        self.uuid_factory = uuid_factory

    def new_uuid_factory(self) -> UUIDFactory:
        """UUID source for one generation call; seeded runs restart the sequence."""
        if self.uuid_factory is not None:
            return self.uuid_factory
        if self.config.sample_seed is not None:
            return seeded_uuid_factory(self.config.sample_seed)
        return random_uuid_factory()

    @property
    def artifact_kind(self) -> str:
        return "sample_data"

    @property
    def file_extension(self) -> str:
        return ".json" if self.output_format == "json" else ".csv"

    @property
    def mime_type(self) -> str:
        return "application/json" if self.output_format == "json" else "text/csv"

    def suggested_filename(self, name: str) -> str:
        return f"{name}_sample{self.file_extension}"

    def placeholder(
        self, table: Table, field: Field, row: int, uuid_factory: UUIDFactory
    ) -> Any:
        """Placeholder for the 1-based ``row`` when the field has no example."""
        kind = field.type_general

        if kind == FieldType.INT:
            return row
        if kind == FieldType.FLOAT:
            return round(row * 10.5, 2)
        if kind == FieldType.UUID:
            return uuid_factory()
        if kind == FieldType.BOOL:
            return row % 2 == 1
        if kind == FieldType.DATETIME:
            return (BASE_DATETIME + timedelta(days=row - 1)).strftime(DATETIME_FORMAT)
        if kind == FieldType.ENUM and field.enum_values:
            return field.enum_values[(row - 1) % len(field.enum_values)]
        if kind == FieldType.RELATION:
            return str(row)
        if kind == FieldType.IMAGE:
            return f"https://example.com/images/{table.name}-{row}.jpg"
        if kind == FieldType.JSON:
            return json.dumps({"id": row})
        return f"{field.name} {row}"

    def value_for(
        self, table: Table, field: Field, row: int, uuid_factory: UUIDFactory
    ) -> Any:
        if field.example_value:
            if field.type_general == FieldType.DATETIME:
                return normalize_datetime(field.example_value)
            return field.example_value
        return self.placeholder(table, field, row, uuid_factory)

    def generate_rows(
        self,
        table: Table,
        count: Optional[int] = None,
        uuid_factory: Optional[UUIDFactory] = None,
    ) -> List[Row]:
        """
        Generate sample rows for a table.

        Args:
            table: Table whose fields become columns
            count: Number of rows (defaults to ``config.sample_rows``)
            uuid_factory: UUID source (defaults to new_uuid_factory())

        Returns:
            List of rows keyed by field name, columns in field order
        """
        if count is None:
            count = self.config.sample_rows
        if count < 0:
            logger.warning("Negative sample row count %d; generating none", count)
            count = 0

        if uuid_factory is None:
            uuid_factory = self.new_uuid_factory()

        return [
            {f.name: self.value_for(table, f, row, uuid_factory) for f in table.fields}
            for row in range(1, count + 1)
        ]

    def generate_table(self, table: Table) -> str:
        rows = self.generate_rows(table)
        if self.output_format == "json":
            return self._dump(rows)
        return rows_to_csv(table, rows, self.config.line_ending)

    def generate_schema(self, schema: Schema) -> str:
        """JSON: object keyed by table name. CSV: one block per table."""
        factory = self.new_uuid_factory()
        if self.output_format == "json":
            return self._dump(
                {t.name: self.generate_rows(t, uuid_factory=factory) for t in schema.tables}
            )

        blocks = [
            rows_to_csv(t, self.generate_rows(t, uuid_factory=factory), self.config.line_ending)
            for t in schema.tables
        ]
        return self.config.line_ending.join(blocks)

    def export_rows(self, table: Table, rows: List[Row]) -> str:
        """Render externally supplied rows (keyed by field name) in the output format."""
        if self.output_format == "json":
            return self._dump(rows_to_json(table, rows))
        return rows_to_csv(table, rows, self.config.line_ending)

    def _dump(self, data: Any) -> str:
        return json.dumps(data, indent=self.config.indent_size or None, ensure_ascii=False) + "\n"

    def format_code(self, code: str) -> str:
        return code
