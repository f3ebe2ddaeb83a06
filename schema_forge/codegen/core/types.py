"""
Type mapping tables.

Single source of truth translating a general field type into the type
token of each output format. Generators never switch on ``FieldType``
themselves; they call :func:`map_type`.
"""

from typing import Dict, List, Union

from .schema import FieldType
from ...logging_config import get_logger

logger = get_logger(__name__)

SQL_POSTGRES = "sql:postgres"
SQL_SQLITE = "sql:sqlite"
SQL_MYSQL = "sql:mysql"
VALIDATION_SCHEMA = "validation-schema"
TYPESCRIPT = "typescript"
PRISMA = "prisma"
ACF = "acf"

# Used when the target itself is unknown
GENERIC_TYPE = "text"

TYPE_MAPS: Dict[str, Dict[FieldType, str]] = {
    SQL_POSTGRES: {
        FieldType.STRING: "VARCHAR(255)",
        FieldType.TEXT: "TEXT",
        FieldType.INT: "INTEGER",
        FieldType.FLOAT: "DECIMAL(10,2)",
        FieldType.BOOL: "BOOLEAN",
        FieldType.DATETIME: "TIMESTAMP",
        FieldType.ENUM: "VARCHAR(50)",
        FieldType.RELATION: "UUID",
        FieldType.IMAGE: "TEXT",
        FieldType.UUID: "UUID",
        FieldType.JSON: "JSONB",
    },
    SQL_SQLITE: {
        FieldType.STRING: "TEXT",
        FieldType.TEXT: "TEXT",
        FieldType.INT: "INTEGER",
        FieldType.FLOAT: "REAL",
        FieldType.BOOL: "BOOLEAN",
        FieldType.DATETIME: "DATETIME",
        FieldType.ENUM: "TEXT",
        FieldType.RELATION: "TEXT",
        FieldType.IMAGE: "TEXT",
        FieldType.UUID: "TEXT",
        FieldType.JSON: "TEXT",
    },
    SQL_MYSQL: {
        FieldType.STRING: "VARCHAR(255)",
        FieldType.TEXT: "TEXT",
        FieldType.INT: "INT",
        FieldType.FLOAT: "DECIMAL(10,2)",
        FieldType.BOOL: "BOOLEAN",
        FieldType.DATETIME: "DATETIME",
        FieldType.ENUM: "VARCHAR(50)",
        FieldType.RELATION: "VARCHAR(36)",
        FieldType.IMAGE: "VARCHAR(255)",
        FieldType.UUID: "VARCHAR(36)",
        FieldType.JSON: "JSON",
    },
    VALIDATION_SCHEMA: {
        FieldType.STRING: "z.string()",
        FieldType.TEXT: "z.string()",
        FieldType.INT: "z.number().int()",
        FieldType.FLOAT: "z.number()",
        FieldType.BOOL: "z.boolean()",
        FieldType.DATETIME: "z.date()",
        FieldType.ENUM: "z.string()",
        FieldType.RELATION: "z.string()",
        FieldType.IMAGE: "z.string()",
        FieldType.UUID: "z.string().uuid()",
        FieldType.JSON: "z.record(z.any())",
    },
    TYPESCRIPT: {
        FieldType.STRING: "string",
        FieldType.TEXT: "string",
        FieldType.INT: "number",
        FieldType.FLOAT: "number",
        FieldType.BOOL: "boolean",
        FieldType.DATETIME: "Date",
        FieldType.ENUM: "string",
        FieldType.RELATION: "string",
        FieldType.IMAGE: "string",
        FieldType.UUID: "string",
        FieldType.JSON: "Record<string, unknown>",
    },
    PRISMA: {
        FieldType.STRING: "String",
        FieldType.TEXT: "String",
        FieldType.INT: "Int",
        FieldType.FLOAT: "Float",
        FieldType.BOOL: "Boolean",
        FieldType.DATETIME: "DateTime",
        FieldType.ENUM: "String",
        FieldType.RELATION: "String",
        FieldType.IMAGE: "String",
        FieldType.UUID: "String",
        FieldType.JSON: "Json",
    },
    ACF: {
        FieldType.STRING: "text",
        FieldType.TEXT: "textarea",
        FieldType.INT: "number",
        FieldType.FLOAT: "number",
        FieldType.BOOL: "true_false",
        FieldType.DATETIME: "date_time_picker",
        FieldType.ENUM: "select",
        FieldType.RELATION: "relationship",
        FieldType.IMAGE: "image",
        FieldType.UUID: "text",
        FieldType.JSON: "textarea",
    },
}

# Generic textual type per target, for tags outside the closed set
FALLBACK_TYPES: Dict[str, str] = {
    SQL_POSTGRES: "TEXT",
    SQL_SQLITE: "TEXT",
    SQL_MYSQL: "TEXT",
    VALIDATION_SCHEMA: "z.string()",
    TYPESCRIPT: "string",
    PRISMA: "String",
    ACF: "text",
}


def map_type(type_general: Union[FieldType, str], target: str) -> str:
    """
    Map a general field type to the type token of a target format.

    Args:
        type_general: FieldType member or raw ``type_general`` tag
        target: Target identifier (``sql:<dialect>``, ``validation-schema``,
            ``typescript``, ``prisma``, ``acf``)

    Returns:
        Target-specific type token; never raises
    """
    type_map = TYPE_MAPS.get(target)
    if type_map is None:
        logger.warning("No type mapping for target %r; using %r", target, GENERIC_TYPE)
        return GENERIC_TYPE

    field_type = FieldType.coerce(type_general)
    if field_type is None or field_type not in type_map:
        fallback = FALLBACK_TYPES[target]
        logger.warning(
            "Unmapped type %r for target %r; using %r", type_general, target, fallback
        )
        return fallback

    return type_map[field_type]


def list_targets() -> List[str]:
    """Targets with a defined mapping table."""
    return list(TYPE_MAPS.keys())
