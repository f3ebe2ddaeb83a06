"""Tests for the type mapping tables."""

import logging

import pytest

from schema_forge.codegen.core.schema import FieldType
from schema_forge.codegen.core.types import (
    FALLBACK_TYPES,
    GENERIC_TYPE,
    TYPE_MAPS,
    list_targets,
    map_type,
)


@pytest.mark.parametrize("target", sorted(TYPE_MAPS))
def test_every_target_maps_every_type(target):
    """Each mapping table is total over the closed tag set."""
    for field_type in FieldType:
        assert map_type(field_type, target)
    assert set(TYPE_MAPS[target]) == set(FieldType)


def test_known_mappings():
    assert map_type("string", "sql:postgres") == "VARCHAR(255)"
    assert map_type("uuid", "sql:postgres") == "UUID"
    assert map_type("json", "sql:postgres") == "JSONB"
    assert map_type("float", "sql:sqlite") == "REAL"
    assert map_type("uuid", "sql:mysql") == "VARCHAR(36)"
    assert map_type("int", "validation-schema") == "z.number().int()"
    assert map_type(FieldType.DATETIME, "typescript") == "Date"
    assert map_type("bool", "prisma") == "Boolean"
    assert map_type("enum", "acf") == "select"


def test_unknown_type_falls_back(caplog):
    with caplog.at_level(logging.WARNING):
        assert map_type("geometry", "sql:postgres") == FALLBACK_TYPES["sql:postgres"]
        assert map_type(None, "prisma") == "String"
    assert "geometry" in caplog.text


def test_unknown_target_returns_generic(caplog):
    with caplog.at_level(logging.WARNING):
        assert map_type("string", "sql:oracle") == GENERIC_TYPE
    assert "sql:oracle" in caplog.text


def test_list_targets():
    assert "validation-schema" in list_targets()
    assert "sql:mysql" in list_targets()
