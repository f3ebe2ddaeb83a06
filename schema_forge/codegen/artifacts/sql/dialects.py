"""
SQL dialect descriptions.

Every dialect difference the DDL generator cares about lives here, so the
generator itself has no ``if dialect == ...`` branches.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from ...core.generator import GeneratorError
from ...core.schema import IndexKind
from ...core.types import SQL_MYSQL, SQL_POSTGRES, SQL_SQLITE


class Dialect(Enum):
    """Supported SQL dialects."""

    POSTGRES = "postgres"
    SQLITE = "sqlite"
    MYSQL = "mysql"


DIALECT_ALIASES = {
    "postgresql": Dialect.POSTGRES,
    "pg": Dialect.POSTGRES,
    "supabase": Dialect.POSTGRES,
    "sqlite3": Dialect.SQLITE,
    "mariadb": Dialect.MYSQL,
}


@dataclass(frozen=True)
class DialectSpec:
    """Feature set and conventions of one dialect."""

    dialect: Dialect
    type_target: str
    identifier_quote: Optional[str] = None
    create_if_not_exists: bool = False
    column_comments: bool = False
    row_level_security: bool = False
    inline_foreign_keys: bool = False
    drop_cascade: bool = True
    index_if_not_exists: bool = False

    def index_method(self, kind: IndexKind) -> Optional[str]:
        """Access method clause for an index kind, or None when unsupported."""
        if self.dialect == Dialect.POSTGRES:
            return kind.value.lower()
        if self.dialect == Dialect.MYSQL and kind == IndexKind.BTREE:
            return "BTREE"
        return None


DIALECT_SPECS = {
    Dialect.POSTGRES: DialectSpec(
        dialect=Dialect.POSTGRES,
        type_target=SQL_POSTGRES,
        column_comments=True,
        row_level_security=True,
    ),
    Dialect.SQLITE: DialectSpec(
        dialect=Dialect.SQLITE,
        type_target=SQL_SQLITE,
        identifier_quote='"',
        create_if_not_exists=True,
        inline_foreign_keys=True,
        drop_cascade=False,
        index_if_not_exists=True,
    ),
    Dialect.MYSQL: DialectSpec(
        dialect=Dialect.MYSQL,
        type_target=SQL_MYSQL,
    ),
}


def resolve_dialect(value) -> Dialect:
    """
    Resolve a dialect tag.

    Raises:
        GeneratorError: For unrecognised tags; emitting SQL for the wrong
            dialect would hand the caller a script that fails later.
    """
    if isinstance(value, Dialect):
        return value
    if isinstance(value, str):
        key = value.strip().lower()
        try:
            return Dialect(key)
        except ValueError:
            if key in DIALECT_ALIASES:
                return DIALECT_ALIASES[key]
    supported = ", ".join(d.value for d in Dialect)
    raise GeneratorError(f"Unsupported SQL dialect: {value!r} (supported: {supported})")


def get_dialect_spec(value) -> DialectSpec:
    return DIALECT_SPECS[resolve_dialect(value)]
