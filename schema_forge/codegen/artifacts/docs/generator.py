"""
Markdown documentation generator.

Renders a field reference for a table: statistics, the field table and
optional Enums / Relations / Example sections, each omitted when no
field qualifies. A whole schema gets an overview and a table of contents.
"""

import re
from pathlib import Path
from typing import Any, Dict, List

from ...core.escaping import md_cell
from ...core.generator import ArtifactGenerator
from ...core.schema import Field, FieldType, Schema, Table
from ...core.types import map_type
from ..sql.dialects import get_dialect_spec


def markdown_anchor(heading: str) -> str:
    """GitHub-style anchor for a heading."""
    anchor = re.sub(r"[^\w\- ]", "", heading.strip().lower())
    return anchor.replace(" ", "-")


def field_stats(table: Table) -> Dict[str, int]:
    return {
        "total": len(table.fields),
        "required": sum(1 for f in table.fields if f.required),
        "unique": sum(1 for f in table.fields if f.unique),
        "relations": sum(1 for f in table.fields if f.type_general == FieldType.RELATION),
        "enums": sum(1 for f in table.fields if f.type_general == FieldType.ENUM),
    }


def constraints(field: Field) -> List[str]:
    items = []
    if field.primary_key:
        items.append("Primary key")
    if field.required:
        items.append("Required")
    if field.unique:
        items.append("Unique")
    if field.foreign_key:
        items.append(f"FK: {field.foreign_key.render('dotted')}")
    if field.index:
        items.append(f"Index ({field.index.value})")
    return items


class DocumentationGenerator(ArtifactGenerator):
    """Generator for Markdown documentation."""

    def __init__(self, config=None):
        super().__init__(config)
        self.sql_target = get_dialect_spec(self.config.dialect).type_target

    @property
    def artifact_kind(self) -> str:
        return "documentation"

    @property
    def file_extension(self) -> str:
        return ".md"

    @property
    def mime_type(self) -> str:
        return "text/markdown"

    def get_template_directory(self) -> Path:
        return Path(__file__).parent / "templates"

    def sql_type(self, field: Field) -> str:
        return field.type_sql or map_type(field.type_general, self.sql_target)

    def build_context(self, table: Table, level: int = 1, title: str = "") -> Dict[str, Any]:
        rows = [
            {
                "name": md_cell(f.name),
                "type": f.type_general.value,
                "sql": md_cell(self.sql_type(f)).replace("`", "'"),
                "description": md_cell(f.description),
                "constraints": md_cell(", ".join(constraints(f))),
            }
            for f in table.fields
        ]

        relation_fields = [
            {
                "name": f.name,
                "target": f.foreign_key.render("dotted"),
                "cardinality": (
                    f.relation_cardinality.value if f.relation_cardinality else "unspecified"
                ),
            }
            for f in table.fields
            if f.foreign_key
        ]

        return {
            "level": level,
            "title": title or f"Documentation: {table.name}",
            "table": table,
            "stats": field_stats(table),
            "rows": rows,
            "enum_fields": [f for f in table.fields if f.type_general == FieldType.ENUM],
            "relation_fields": relation_fields,
            "examples": [
                {"name": f.name, "value": f.example_value}
                for f in table.fields
                if f.example_value
            ],
        }

    def format_code(self, code: str) -> str:
        # Descriptions and notes may use trailing-space line breaks and blank lines
        return self.apply_line_ending(code.rstrip("\n") + "\n")

    def generate_table(self, table: Table) -> str:
        return self.render_template("table.md.j2", self.build_context(table))

    def generate_schema(self, schema: Schema) -> str:
        sections = [
            self.render_template(
                "table.md.j2", self.build_context(t, level=2, title=t.name)
            ).strip("\n")
            for t in schema.tables
        ]
        toc = [
            {
                "name": t.name,
                "anchor": markdown_anchor(t.name),
                "field_count": len(t.fields),
            }
            for t in schema.tables
        ]
        return self.render_template(
            "schema.md.j2", {"schema": schema, "toc": toc, "sections": sections}
        )
