"""
Structured-fields (ACF field group) JSON generator.

One field group per table, or a JSON array of groups for a whole schema.
Keys are derived from table and field names so re-importing the same
schema updates the existing group instead of creating a new one.
"""

import json
from typing import Any, Dict, List

from ...core.generator import ArtifactGenerator
from ...core.schema import Field, FieldType, Schema, Table
from ...core.types import ACF, map_type


def group_key(table: Table) -> str:
    return f"group_{table.name}"


def field_key(table: Table, field: Field) -> str:
    return f"field_{table.name}_{field.name}"


class ACFGenerator(ArtifactGenerator):
    """Generator for ACF-style field group exports."""

    @property
    def artifact_kind(self) -> str:
        return "acf_json"

    @property
    def file_extension(self) -> str:
        return ".json"

    @property
    def mime_type(self) -> str:
        return "application/json"

    def suggested_filename(self, name: str) -> str:
        return f"acf_{name}.json"

    def field_type(self, field: Field) -> str:
        """Explicit ``acf_field_type`` wins over the mapping table."""
        return field.acf_field_type or map_type(field.type_general, ACF)

    def build_field(self, table: Table, field: Field) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "key": field_key(table, field),
            "label": field.label,
            "name": field.name,
            "type": self.field_type(field),
            "instructions": field.notes,
            "required": 1 if field.required else 0,
            "conditional_logic": 0,
            "wrapper": {"width": "", "class": "", "id": ""},
            "default_value": field.example_value,
            "placeholder": field.example_value,
            "prepend": "",
            "append": "",
            "maxlength": 255 if field.type_general == FieldType.STRING else "",
        }

        if field.enum_values:
            data["choices"] = {value: value for value in field.enum_values}

        if field.foreign_key:
            data["post_type"] = [field.foreign_key.table]

        return data

    def build_group(self, table: Table) -> Dict[str, Any]:
        """Field group object for one table (fields in table order)."""
        return {
            "key": group_key(table),
            "title": table.description or table.name,
            "fields": [self.build_field(table, f) for f in table.fields],
            "location": [
                [
                    {
                        "param": self.config.acf_location_param,
                        "operator": "==",
                        "value": table.name,
                    }
                ]
            ],
            "menu_order": 0,
            "position": "normal",
            "style": "default",
            "label_placement": "top",
            "instruction_placement": "label",
            "hide_on_screen": "",
            "active": True,
            "description": table.notes,
        }

    def generate_table(self, table: Table) -> str:
        return self._dump(self.build_group(table))

    def generate_schema(self, schema: Schema) -> str:
        groups: List[Dict[str, Any]] = [self.build_group(t) for t in schema.tables]
        return self._dump(groups)

    def _dump(self, data: Any) -> str:
        return json.dumps(data, indent=self.config.indent_size or None, ensure_ascii=False) + "\n"

    def format_code(self, code: str) -> str:
        # JSON string values may legitimately end in spaces
        return code if code.endswith("\n") else code + "\n"
