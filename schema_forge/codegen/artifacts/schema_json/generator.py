"""
Schema JSON export.

Writes the project file format (see ``Schema.to_dict``), so an export can
be re-imported with ``Schema.from_json`` unchanged.
"""

import json

from ...core.generator import ArtifactGenerator
from ...core.schema import Schema, Table


class SchemaJSONGenerator(ArtifactGenerator):
    """Generator for the JSON project file format."""

    @property
    def artifact_kind(self) -> str:
        return "schema_json"

    @property
    def file_extension(self) -> str:
        return ".json"

    @property
    def mime_type(self) -> str:
        return "application/json"

    def suggested_filename(self, name: str) -> str:
        return f"{name}.schema.json"

    def generate_table(self, table: Table) -> str:
        return json.dumps(table.to_dict(), indent=2, ensure_ascii=False) + "\n"

    def generate_schema(self, schema: Schema) -> str:
        return schema.to_json(indent=2) + "\n"

    def format_code(self, code: str) -> str:
        return code
