"""
Structured-fields JSON generator module.

Generates ACF-style field group definitions for content-management imports.
"""

from .generator import ACFGenerator, field_key, group_key

__all__ = ["ACFGenerator", "field_key", "group_key"]
