"""
TypeScript interface generator.

Generates one exported interface per table; enum fields become unions of
string literals and optional fields use ``?``.
"""

from pathlib import Path
from typing import Any, Dict, List

from ...core.escaping import js_string
from ...core.generator import ArtifactGenerator
from ...core.naming import NameSanitizer, NamingCase, create_typescript_sanitizer
from ...core.schema import Field, Schema, Table
from ...core.types import TYPESCRIPT, map_type
from ..content.generator import object_key


class TypeScriptGenerator(ArtifactGenerator):
    """Generator for TypeScript interfaces."""

    @property
    def artifact_kind(self) -> str:
        return "typescript"

    @property
    def file_extension(self) -> str:
        return ".ts"

    @property
    def mime_type(self) -> str:
        return "text/typescript"

    def get_template_directory(self) -> Path:
        return Path(__file__).parent / "templates"

    def suggested_filename(self, name: str) -> str:
        return f"{name}.types.ts"

    def field_type(self, field: Field) -> str:
        if field.has_enum_values:
            return " | ".join(js_string(v) for v in field.enum_values)
        return map_type(field.type_general, TYPESCRIPT)

    def _interface_data(self, table: Table, sanitizer: NameSanitizer) -> Dict[str, Any]:
        fields = []
        for field in table.fields:
            fields.append(
                {
                    "key": object_key(field.name),
                    "type": self.field_type(field),
                    "optional": not field.required and not field.primary_key,
                    "comment": field.description if self.config.add_comments else "",
                }
            )

        return {
            "name": sanitizer.sanitize_name(table.name, NamingCase.PASCAL_CASE),
            "description": table.description if self.config.add_comments else "",
            "fields": fields,
        }

    def _render(self, title: str, tables: List[Table]) -> str:
        sanitizer = create_typescript_sanitizer()
        interfaces = [self._interface_data(t, sanitizer) for t in tables]
        return self.render_template(
            "interfaces.ts.j2", {"title": title, "interfaces": interfaces}
        )

    def generate_table(self, table: Table) -> str:
        return self._render(table.name, [table])

    def generate_schema(self, schema: Schema) -> str:
        return self._render(schema.name, schema.tables)
