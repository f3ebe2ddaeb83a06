"""
TypeScript generator module.

Generates TypeScript interfaces for tables.
"""

from .generator import TypeScriptGenerator

__all__ = ["TypeScriptGenerator"]
