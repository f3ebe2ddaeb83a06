"""
Templated page generator.

Generates an Astro dynamic route (``src/pages/<table>/[slug].astro``)
that renders one entry of the table's content collection.
"""

import html
from pathlib import Path
from typing import Any, Dict, List, Optional

from ...core.escaping import js_string
from ...core.generator import ArtifactGenerator
from ...core.naming import NamingCase, convert_case, clean_identifier
from ...core.schema import Field, Table
from ..content.generator import object_key

MAX_META_FIELDS = 3


def html_text(text: str) -> str:
    """Escape text for page markup, including template expression braces."""
    return html.escape(str(text)).replace("{", "&#123;").replace("}", "&#125;")


def data_expression(name: str) -> str:
    """Template expression reading one entry field."""
    key = object_key(name)
    if key == name:
        return f"{{entry.data.{name}}}"
    return f"{{entry.data[{key}]}}"


def pick_slug_field(table: Table) -> Optional[Field]:
    """The first slug-compatible field, else the first field."""
    for field in table.fields:
        if field.slug_compatible:
            return field
    return table.fields[0] if table.fields else None


class PageGenerator(ArtifactGenerator):
    """Generator for per-table page templates."""

    @property
    def artifact_kind(self) -> str:
        return "page"

    @property
    def file_extension(self) -> str:
        return ".astro"

    @property
    def mime_type(self) -> str:
        return "text/plain"

    def get_template_directory(self) -> Path:
        return Path(__file__).parent / "templates"

    def suggested_filename(self, name: str) -> str:
        return f"{name}_[slug].astro"

    def meta_fields(self, table: Table, slug_field: Optional[Field]) -> List[Field]:
        others = [f for f in table.fields if f is not slug_field]
        return others[:MAX_META_FIELDS]

    def build_context(self, table: Table) -> Dict[str, Any]:
        slug_field = pick_slug_field(table)
        variable = convert_case(clean_identifier(table.name), NamingCase.CAMEL_CASE)

        return {
            "table_name": table.name,
            "title": table.description or table.name,
            "table_label": html_text(table.name),
            "collection": js_string(table.name),
            "entries_variable": f"{variable}Entries",
            "slug_expression": data_expression(slug_field.name if slug_field else "title"),
            "description_expression": (
                f"{{entry.data.description || {js_string(table.description)}}}"
            ),
            "lang": html.escape(self.config.page_lang),
            "meta_fields": [
                {"label": html_text(f.label), "expression": data_expression(f.name)}
                for f in self.meta_fields(table, slug_field)
            ],
        }

    def generate_table(self, table: Table) -> str:
        return self.render_template("page.astro.j2", self.build_context(table))
