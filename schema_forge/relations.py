"""Relation suggestions based on naming conventions.

Detects foreign-key candidates that the schema does not declare yet:
``<name>_id`` columns pointing at a ``<name>s``/``<name>`` table, owner
columns (``user_id``, ``author_id``, ``owner_id``) pointing at the users
table, and junction tables linking two other tables.
"""

from __future__ import annotations

import copy
from dataclasses import dataclass

from .codegen.core.schema import Cardinality, FieldType, ForeignKey, Schema, Table
from .logging_config import get_logger

logger = get_logger(__name__)

MAX_SUGGESTIONS = 6
OWNER_FIELDS = ("user_id", "author_id", "owner_id")
USER_TABLES = ("users", "user")
KEY_TYPES = (FieldType.UUID, FieldType.INT, FieldType.RELATION)


@dataclass(frozen=True)
class RelationSuggestion:
    """A proposed link from ``from_table.from_field`` to ``to_table.to_field``."""

    from_table: str
    from_field: str
    to_table: str
    to_field: str
    cardinality: Cardinality
    confidence: str
    reason: str

    @property
    def foreign_key(self) -> ForeignKey:
        return ForeignKey(self.to_table, self.to_field)


def _find_table(schema: Schema, *names: str) -> Table | None:
    for name in names:
        table = schema.get_table(name)
        if table is not None:
            return table
    return None


def _primary_key_name(table: Table) -> str | None:
    key = table.primary_key
    return key.name if key else None


def _naming_suggestions(schema: Schema) -> list[RelationSuggestion]:
    suggestions = []
    for table in schema.tables:
        for field in table.fields:
            if field.foreign_key or field.primary_key or not field.name.endswith("_id"):
                continue

            stem = field.name[: -len("_id")]
            target = None
            reason = ""

            if field.name in OWNER_FIELDS:
                target = _find_table(schema, *USER_TABLES)
                reason = "Standard owner relation to the users table"

            if target is None and field.type_general in KEY_TYPES:
                target = _find_table(schema, f"{stem}s", stem)
                reason = f'Field "{field.name}" looks like a reference to this table'

            if target is None or target is table:
                continue

            to_field = _primary_key_name(target)
            if to_field is None:
                continue

            suggestions.append(
                RelationSuggestion(
                    from_table=table.name,
                    from_field=field.name,
                    to_table=target.name,
                    to_field=to_field,
                    cardinality=Cardinality.ONE_TO_MANY,
                    confidence="high",
                    reason=reason,
                )
            )
    return suggestions


def _junction_suggestions(schema: Schema) -> list[RelationSuggestion]:
    """Tables made of a key plus two ``*_id`` columns link two other tables."""
    suggestions = []
    for table in schema.tables:
        if len(table.fields) != 3:
            continue

        links = [f for f in table.fields if f.name.endswith("_id") and not f.primary_key]
        if len(links) != 2:
            continue

        targets = []
        for link in links:
            stem = link.name[: -len("_id")]
            if link.foreign_key:
                targets.append(schema.get_table(link.foreign_key.table))
            else:
                targets.append(_find_table(schema, f"{stem}s", stem))

        left, right = targets
        if left is None or right is None or left is right:
            continue

        suggestions.append(
            RelationSuggestion(
                from_table=left.name,
                from_field=_primary_key_name(left) or "id",
                to_table=right.name,
                to_field=_primary_key_name(right) or "id",
                cardinality=Cardinality.MANY_TO_MANY,
                confidence="medium",
                reason=f'Junction table "{table.name}" detected',
            )
        )
    return suggestions


def suggest_relations(
    schema: Schema, limit: int = MAX_SUGGESTIONS
) -> list[RelationSuggestion]:
    """Suggest relations for a schema.

    Args:
        schema: Schema to inspect.
        limit: Maximum number of suggestions returned.

    Returns:
        Suggestions in discovery order, naming-convention matches first.
    """
    suggestions: list[RelationSuggestion] = []
    seen = set()
    for suggestion in _naming_suggestions(schema) + _junction_suggestions(schema):
        key = (suggestion.from_table, suggestion.from_field, suggestion.to_table)
        if key in seen:
            continue
        seen.add(key)
        suggestions.append(suggestion)

    logger.debug("Found %d relation suggestion(s)", len(suggestions))
    return suggestions[:limit]


def apply_suggestion(schema: Schema, suggestion: RelationSuggestion) -> Schema:
    """Return a copy of ``schema`` with the suggested foreign key set.

    Many-to-many suggestions link tables through a junction table and
    leave the schema unchanged.
    """
    updated = copy.deepcopy(schema)
    if suggestion.cardinality == Cardinality.MANY_TO_MANY:
        return updated

    table = updated.get_table(suggestion.from_table)
    field = table.get_field(suggestion.from_field) if table else None
    if field is None:
        logger.warning(
            "Cannot apply suggestion: %s.%s not found",
            suggestion.from_table,
            suggestion.from_field,
        )
        return updated

    field.foreign_key = suggestion.foreign_key
    field.relation_cardinality = suggestion.cardinality
    return updated
