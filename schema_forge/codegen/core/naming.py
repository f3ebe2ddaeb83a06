"""
Naming utilities for safe artifact generation.

Handles case conversion, keyword conflicts and duplicate names for the
targets that derive identifiers from table names (TypeScript interfaces,
Prisma models, content-collection variables, field-group keys).
"""

import re
from enum import Enum
from typing import Dict, Set


class NamingCase(Enum):
    """Different naming case styles."""

    SNAKE_CASE = "snake"  # user_name
    CAMEL_CASE = "camel"  # userName
    PASCAL_CASE = "pascal"  # UserName
    KEBAB_CASE = "kebab"  # user-name


class NameSanitizer:
    """Handles name sanitization and case conversion."""

    def __init__(self, reserved_words: Set[str] = None):
        """
        Initialize name sanitizer.

        Args:
            reserved_words: Lower-cased words that need a suffix
        """
        self.reserved_words = reserved_words or set()
        self._name_cache: Dict[str, str] = {}
        self._used_names: Set[str] = set()

    def sanitize_name(
        self,
        name: str,
        target_case: NamingCase = NamingCase.SNAKE_CASE,
        suffix_on_conflict: str = "_",
    ) -> str:
        """
        Sanitize a name for safe use as an identifier.

        The same input always maps to the same output for the lifetime of
        the sanitizer; distinct inputs that collide get a numeric suffix.

        Args:
            name: Original name to sanitize
            target_case: Desired case style
            suffix_on_conflict: Suffix to add for conflicts

        Returns:
            Sanitized name safe for use
        """
        cache_key = f"{name}_{target_case.value}_{suffix_on_conflict}"
        if cache_key in self._name_cache:
            return self._name_cache[cache_key]

        cleaned = clean_identifier(name)
        converted = convert_case(cleaned, target_case)
        final_name = self._resolve_conflicts(converted, suffix_on_conflict)

        self._name_cache[cache_key] = final_name
        self._used_names.add(final_name)

        return final_name

    def _resolve_conflicts(self, name: str, suffix: str) -> str:
        """Resolve naming conflicts with reserved words and existing names."""
        if name.lower() in self.reserved_words:
            name = f"{name}{suffix}"

        original_name = name
        counter = 1
        while name in self._used_names:
            name = f"{original_name}{counter}"
            counter += 1

        return name

    def reset(self):
        """Forget every name handed out so far."""
        self._used_names.clear()
        self._name_cache.clear()


def clean_identifier(name: str) -> str:
    """Basic cleanup: invalid characters become underscores."""
    cleaned = re.sub(r"[^a-zA-Z0-9_-]", "_", str(name))
    cleaned = cleaned.strip("_-")

    if cleaned and cleaned[0].isdigit():
        cleaned = f"_{cleaned}"

    return cleaned or "field"


def convert_case(name: str, target_case: NamingCase) -> str:
    """Convert name to target case style."""
    if target_case == NamingCase.SNAKE_CASE:
        return to_snake_case(name)
    elif target_case == NamingCase.CAMEL_CASE:
        return to_camel_case(name)
    elif target_case == NamingCase.PASCAL_CASE:
        return to_pascal_case(name)
    elif target_case == NamingCase.KEBAB_CASE:
        return to_snake_case(name).replace("_", "-")
    return name


def to_snake_case(name: str) -> str:
    name = name.replace("-", "_")
    name = re.sub(r"([a-z0-9])([A-Z])", r"\1_\2", name)
    name = re.sub(r"_+", "_", name.lower())
    return name.strip("_")


def to_camel_case(name: str) -> str:
    parts = to_snake_case(name).split("_")
    if not parts:
        return name
    return parts[0].lower() + "".join(part.capitalize() for part in parts[1:])


def to_pascal_case(name: str) -> str:
    parts = to_snake_case(name).split("_")
    return "".join(part.capitalize() for part in parts if part)


def create_typescript_sanitizer() -> NameSanitizer:
    """Sanitizer for TypeScript/JavaScript identifiers."""
    reserved = {
        "break", "case", "catch", "class", "const", "continue", "debugger",
        "default", "delete", "do", "else", "enum", "export", "extends",
        "false", "finally", "for", "function", "if", "import", "in",
        "instanceof", "new", "null", "return", "super", "switch", "this",
        "throw", "true", "try", "typeof", "var", "void", "while", "with",
        "let", "static", "yield", "await", "interface", "type", "record",
        "string", "number", "boolean", "date", "object",
    }
    return NameSanitizer(reserved)


def create_prisma_sanitizer() -> NameSanitizer:
    """Sanitizer for Prisma model names."""
    reserved = {
        "string", "int", "float", "boolean", "datetime", "json", "bytes",
        "decimal", "bigint", "model", "enum", "generator", "datasource",
        "prisma", "query", "mutation", "subscription",
    }
    return NameSanitizer(reserved)
