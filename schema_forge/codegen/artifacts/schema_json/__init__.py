"""Schema JSON export module."""

from .generator import SchemaJSONGenerator

__all__ = ["SchemaJSONGenerator"]
