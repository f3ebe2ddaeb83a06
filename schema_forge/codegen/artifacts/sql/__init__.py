"""
SQL DDL generator module.

Generates postgres, sqlite and mysql DDL scripts from table and schema
definitions.
"""

from .dialects import (
    DIALECT_SPECS,
    Dialect,
    DialectSpec,
    get_dialect_spec,
    resolve_dialect,
)
from .generator import SQLGenerator, order_tables_by_dependency

__all__ = [
    "SQLGenerator",
    "Dialect",
    "DialectSpec",
    "DIALECT_SPECS",
    "get_dialect_spec",
    "resolve_dialect",
    "order_tables_by_dependency",
    "create_sql_generator",
]


def create_sql_generator(dialect: str = "postgres", **options) -> SQLGenerator:
    """
    Create a SQL generator for a dialect.

    Args:
        dialect: postgres, sqlite or mysql (aliases such as postgresql work)
        **options: Other GeneratorConfig settings (drop_tables, if_not_exists...)

    Returns:
        Configured SQLGenerator instance
    """
    return SQLGenerator({"dialect": dialect, **options})
