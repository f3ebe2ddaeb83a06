"""
Documentation generator module.

Generates Markdown reference documentation for tables and schemas.
"""

from .generator import DocumentationGenerator, field_stats, markdown_anchor

__all__ = ["DocumentationGenerator", "field_stats", "markdown_anchor"]
