"""
SQL DDL generator implementation.

Generates CREATE TABLE scripts with comments, indexes, foreign keys and
row-level security policies for postgres, sqlite and mysql.
"""

from typing import Dict, List, Optional

from ...core.escaping import quote_identifier, sql_comment, sql_string
from ...core.generator import ArtifactGenerator
from ...core.schema import Field, Schema, Table
from ...core.types import map_type
from ....logging_config import get_logger
from .dialects import Dialect, DialectSpec, get_dialect_spec

logger = get_logger(__name__)


class SQLGenerator(ArtifactGenerator):
    """Generator for SQL DDL scripts."""

    def __init__(self, config=None):
        """Initialize SQL generator; an unknown dialect fails immediately."""
        super().__init__(config)
        self.spec: DialectSpec = get_dialect_spec(self.config.dialect)
        self.dialect = self.spec.dialect

    @property
    def artifact_kind(self) -> str:
        return "sql"

    @property
    def file_extension(self) -> str:
        return ".sql"

    @property
    def mime_type(self) -> str:
        return "application/sql"

    def suggested_filename(self, name: str) -> str:
        return f"{name}_{self.dialect.value}{self.file_extension}"

    # Building blocks

    def ident(self, name: str) -> str:
        """Identifier as the dialect writes it."""
        if self.spec.identifier_quote:
            return quote_identifier(name, self.spec.identifier_quote)
        return name

    def column_type(self, field: Field) -> str:
        """Explicit ``type_sql`` wins; otherwise derive from the mapping table."""
        if field.type_sql:
            return field.type_sql
        return map_type(field.type_general, self.spec.type_target)

    def column_definition(self, field: Field) -> str:
        """Column line: PRIMARY KEY / NOT NULL / UNIQUE / DEFAULT, in that order."""
        parts = [self.ident(field.name), self.column_type(field)]

        if field.primary_key:
            # PRIMARY KEY already implies NOT NULL and UNIQUE
            parts.append("PRIMARY KEY")
        else:
            if field.required:
                parts.append("NOT NULL")
            if field.unique:
                parts.append("UNIQUE")

        if field.default_sql:
            parts.append(f"DEFAULT {field.default_sql}")

        return " ".join(parts)

    def foreign_key_constraint(self, field: Field) -> str:
        fk = field.foreign_key
        return (
            f"FOREIGN KEY ({self.ident(field.name)}) "
            f"REFERENCES {self.ident(fk.table)}({self.ident(fk.column)})"
        )

    def header_lines(self, table: Table) -> List[str]:
        lines = [f"-- Table: {sql_comment(table.name)}"]
        if table.description:
            lines.append(f"-- Description: {sql_comment(table.description)}")
        return lines

    def create_table(self, table: Table) -> str:
        create = "CREATE TABLE"
        if self.spec.create_if_not_exists or self.config.if_not_exists:
            create += " IF NOT EXISTS"

        indent = self.config.indent
        definitions = [indent + self.column_definition(f) for f in table.fields]

        if self.spec.inline_foreign_keys:
            definitions.extend(
                indent + self.foreign_key_constraint(f)
                for f in table.fields
                if f.foreign_key
            )

        body = ",\n".join(definitions)
        if body:
            return f"{create} {self.ident(table.name)} (\n{body}\n);"
        return f"{create} {self.ident(table.name)} (\n);"

    def column_comments(self, table: Table) -> List[str]:
        if not self.spec.column_comments:
            return []
        return [
            f"COMMENT ON COLUMN {self.ident(table.name)}.{self.ident(f.name)} "
            f"IS {sql_string(f.description)};"
            for f in table.fields
            if f.description
        ]

    def create_indexes(self, table: Table) -> List[str]:
        statements = []
        for field in table.fields:
            if not field.index:
                continue

            index_name = self.ident(f"idx_{table.name}_{field.name}")
            create = "CREATE INDEX"
            if self.spec.index_if_not_exists:
                create += " IF NOT EXISTS"

            method = self.spec.index_method(field.index)
            table_ident = self.ident(table.name)
            column = self.ident(field.name)

            if method and self.dialect == Dialect.POSTGRES:
                statements.append(
                    f"{create} {index_name} ON {table_ident} USING {method} ({column});"
                )
            elif method:
                statements.append(
                    f"{create} {index_name} ON {table_ident} ({column}) USING {method};"
                )
            else:
                statements.append(f"{create} {index_name} ON {table_ident} ({column});")
        return statements

    def alter_foreign_keys(self, table: Table) -> List[str]:
        """ALTER TABLE foreign keys (dialects without inline constraints)."""
        if self.spec.inline_foreign_keys:
            return []
        return [
            f"ALTER TABLE {self.ident(table.name)} "
            f"ADD CONSTRAINT {self.ident(f'fk_{table.name}_{f.name}')} "
            f"{self.foreign_key_constraint(f)};"
            for f in table.fields
            if f.foreign_key
        ]

    def row_level_security(self, table: Table) -> List[str]:
        if not self.spec.row_level_security:
            return []

        policy_fields = [f for f in table.fields if f.supabase_policy]
        if not policy_fields:
            return []

        table_ident = self.ident(table.name)
        statements = [
            "-- Row Level Security",
            f"ALTER TABLE {table_ident} ENABLE ROW LEVEL SECURITY;",
        ]
        for field in policy_fields:
            policy_name = self.ident(f"{table.name}_{field.name}_policy")
            statements.append(
                f"CREATE POLICY {policy_name} ON {table_ident}\n"
                f"  FOR ALL USING ({field.supabase_policy});"
            )
        return statements

    def drop_table(self, table: Table) -> str:
        statement = f"DROP TABLE IF EXISTS {self.ident(table.name)}"
        if self.spec.drop_cascade:
            statement += " CASCADE"
        return statement + ";"

    # Assembly

    def _table_sections(self, table: Table, include_foreign_keys: bool) -> List[str]:
        sections = ["\n".join(self.header_lines(table) + [self.create_table(table)])]

        for statements in (
            self.column_comments(table),
            self.create_indexes(table),
            self.alter_foreign_keys(table) if include_foreign_keys else [],
            self.row_level_security(table),
        ):
            if statements:
                sections.append("\n".join(statements))

        return sections

    def format_code(self, code: str) -> str:
        # COMMENT ON literals and policies carry user text verbatim
        return self.apply_line_ending(code.rstrip("\n") + "\n")

    def generate_table(self, table: Table) -> str:
        """Generate the DDL script for a single table."""
        return "\n\n".join(self._table_sections(table, include_foreign_keys=True)) + "\n"

    def generate_schema(self, schema: Schema) -> str:
        """
        Generate the DDL script for a whole schema.

        Tables are created in foreign-key dependency order and ALTER TABLE
        foreign keys are deferred until every table exists.
        """
        header = [
            f"-- Schema: {sql_comment(schema.name)}",
            f"-- Version: {sql_comment(schema.version)}",
            f"-- Dialect: {self.dialect.value.upper()}",
        ]
        if schema.description:
            header.append(f"-- {sql_comment(schema.description)}")

        blocks = ["\n".join(header)]

        if self.config.drop_tables and schema.tables:
            blocks.append("\n".join(self.drop_table(t) for t in schema.tables))

        ordered = order_tables_by_dependency(schema)
        for table in ordered:
            blocks.extend(self._table_sections(table, include_foreign_keys=False))

        deferred = [stmt for t in ordered for stmt in self.alter_foreign_keys(t)]
        if deferred:
            blocks.append("\n".join(["-- Foreign keys"] + deferred))

        return "\n\n".join(blocks) + "\n"


def order_tables_by_dependency(schema: Schema) -> List[Table]:
    """
    Order tables so referenced tables come before the tables referencing them.

    Stable: schema order is kept wherever dependencies allow. References to
    tables outside the schema and self-references are ignored; on a cycle
    the first remaining table in schema order is emitted.
    """
    names = {t.name for t in schema.tables}
    dependencies: Dict[str, set] = {}
    for table in schema.tables:
        dependencies[table.name] = {
            f.foreign_key.table
            for f in table.fields
            if f.foreign_key
            and f.foreign_key.table in names
            and f.foreign_key.table != table.name
        }

    remaining = list(schema.tables)
    emitted: set = set()
    ordered: List[Table] = []

    while remaining:
        ready: Optional[Table] = next(
            (t for t in remaining if dependencies[t.name] <= emitted), None
        )
        if ready is None:
            ready = remaining[0]
            logger.warning(
                "Foreign-key cycle involving table %r; keeping schema order",
                ready.name,
            )
        remaining.remove(ready)
        emitted.add(ready.name)
        ordered.append(ready)

    return ordered
