"""
Prisma schema generator.

Generates a ``schema.prisma`` with one model per table. Column names that
are not valid Prisma identifiers are renamed and mapped back with
``@map``; enum fields get their own enum block.
"""

import re
from pathlib import Path
from typing import Any, Dict, List, Optional

from ...core.generator import ArtifactGenerator
from ...core.naming import (
    NameSanitizer,
    NamingCase,
    clean_identifier,
    create_prisma_sanitizer,
)
from ...core.schema import Field, Schema, Table
from ...core.types import PRISMA, map_type

_NUMBER = re.compile(r"^-?\d+(\.\d+)?$")
_QUOTED = re.compile(r"^'(.*)'(::\w+)?$", re.DOTALL)


def prisma_default(default_sql: Optional[str]) -> Optional[str]:
    """Translate a SQL DEFAULT expression into a ``@default(...)`` argument."""
    if not default_sql:
        return None

    value = default_sql.strip()
    lowered = value.lower()

    if lowered in ("gen_random_uuid()", "uuid_generate_v4()"):
        return "uuid()"
    if lowered in ("now()", "current_timestamp", "current_timestamp()"):
        return "now()"
    if lowered in ("true", "false") or _NUMBER.match(value):
        return lowered
    match = _QUOTED.match(value)
    if match:
        text = match.group(1).replace("''", "'")
        return '"' + text.replace("\\", "\\\\").replace('"', '\\"') + '"'
    return 'dbgenerated("' + value.replace('"', '\\"') + '")'


def prisma_identifier(name: str) -> str:
    return clean_identifier(name).replace("-", "_")


class PrismaGenerator(ArtifactGenerator):
    """Generator for Prisma schema files."""

    @property
    def artifact_kind(self) -> str:
        return "prisma"

    @property
    def file_extension(self) -> str:
        return ".prisma"

    def get_template_directory(self) -> Path:
        return Path(__file__).parent / "templates"

    def suggested_filename(self, name: str) -> str:
        return "schema.prisma"

    def _field_line(self, field: Field, field_type: str) -> str:
        name = prisma_identifier(field.name)
        optional = not field.required and not field.primary_key
        parts = [name, field_type + ("?" if optional else "")]

        if field.primary_key:
            parts.append("@id")
        elif field.unique:
            parts.append("@unique")

        default = prisma_default(field.default_sql)
        if default and field.has_enum_values and default.startswith('"'):
            # enum defaults are bare members
            default = prisma_identifier(default[1:-1])
        if default:
            parts.append(f"@default({default})")

        if name != field.name:
            parts.append(f'@map("{field.name}")')

        line = " ".join(parts)
        if field.foreign_key:
            line += f" // references {field.foreign_key.render('dotted')}"
        return line

    def _model_data(
        self, table: Table, sanitizer: NameSanitizer, enums: List[Dict[str, Any]]
    ) -> Dict[str, Any]:
        model_name = sanitizer.sanitize_name(table.name, NamingCase.PASCAL_CASE)

        fields = []
        for field in table.fields:
            if field.has_enum_values:
                enum_name = sanitizer.sanitize_name(
                    f"{model_name}_{field.name}", NamingCase.PASCAL_CASE
                )
                enums.append(
                    {
                        "name": enum_name,
                        "values": [prisma_identifier(v) for v in field.enum_values],
                    }
                )
                field_type = enum_name
            else:
                field_type = map_type(field.type_general, PRISMA)

            fields.append(
                {
                    "line": self._field_line(field, field_type),
                    "comment": field.description if self.config.add_comments else "",
                }
            )

        return {
            "name": model_name,
            "description": table.description if self.config.add_comments else "",
            "fields": fields,
            "map": table.name if model_name != table.name else "",
        }

    def _render(self, title: str, tables: List[Table]) -> str:
        sanitizer = create_prisma_sanitizer()
        enums: List[Dict[str, Any]] = []
        models = [self._model_data(t, sanitizer, enums) for t in tables]

        return self.render_template(
            "schema.prisma.j2",
            {
                "title": title,
                "provider": self.config.custom.get("provider", "postgresql"),
                "url_env": self.config.custom.get("url_env", "DATABASE_URL"),
                "models": models,
                "enums": enums,
            },
        )

    def generate_table(self, table: Table) -> str:
        return self._render(table.name, [table])

    def generate_schema(self, schema: Schema) -> str:
        return self._render(schema.name, schema.tables)
