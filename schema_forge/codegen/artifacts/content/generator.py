"""
Content-collection config generator implementation.

Generates an Astro ``src/content/config.ts`` module whose collection
schemas are zod expressions derived from the type mapping table.
"""

import re
from pathlib import Path
from typing import Any, Dict, List

from ...core.escaping import js_string
from ...core.generator import ArtifactGenerator
from ...core.naming import NamingCase, create_typescript_sanitizer
from ...core.schema import Field, FieldType, Schema, Table
from ...core.types import VALIDATION_SCHEMA, map_type

_JS_IDENTIFIER = re.compile(r"^[A-Za-z_$][A-Za-z0-9_$]*$")


def object_key(name: str) -> str:
    """Object literal key, quoted when it is not a bare identifier."""
    return name if _JS_IDENTIFIER.match(name) else js_string(name)


def zod_expression(field: Field) -> str:
    """Validation expression for one field."""
    if field.type_general == FieldType.ENUM and field.enum_values:
        values = ", ".join(js_string(v) for v in field.enum_values)
        expression = f"z.enum([{values}])"
    else:
        expression = map_type(field.type_general, VALIDATION_SCHEMA)

    if not field.required:
        expression += ".optional()"

    return expression


class ContentConfigGenerator(ArtifactGenerator):
    """Generator for content-collection configuration modules."""

    @property
    def artifact_kind(self) -> str:
        return "content_config"

    @property
    def file_extension(self) -> str:
        return ".ts"

    @property
    def mime_type(self) -> str:
        return "text/typescript"

    def get_template_directory(self) -> Path:
        return Path(__file__).parent / "templates"

    def suggested_filename(self, name: str) -> str:
        return "config.ts"

    def generate_table(self, table: Table) -> str:
        return self._render(title="", tables=[table])

    def generate_schema(self, schema: Schema) -> str:
        return self._render(title=schema.name, tables=schema.tables)

    def _render(self, title: str, tables: List[Table]) -> str:
        sanitizer = create_typescript_sanitizer()
        collections = [self._collection_data(t, sanitizer) for t in tables]
        return self.render_template(
            "content_config.ts.j2", {"title": title, "collections": collections}
        )

    def _collection_data(self, table: Table, sanitizer) -> Dict[str, Any]:
        variable = sanitizer.sanitize_name(table.name, NamingCase.CAMEL_CASE)
        return {
            "key": object_key(table.name),
            "variable": f"{variable}Collection",
            "description": table.description if self.config.add_comments else "",
            "fields": [
                {"key": object_key(f.name), "expression": zod_expression(f)}
                for f in table.fields
            ],
        }
