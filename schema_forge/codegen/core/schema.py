"""
Core schema representation for artifact generation.

Holds the Field/Table/Schema value types every generator consumes, plus
the JSON (de)serialization that doubles as the project file format.
``from_dict`` is the coercion boundary for fragments supplied by external
collaborators: it never raises for data-shape problems and never lets
``None`` through into generated text.
"""

import json
import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Union

from ...logging_config import get_logger

logger = get_logger(__name__)


class FieldType(Enum):
    """General (format-independent) field types."""

    STRING = "string"
    TEXT = "text"
    INT = "int"
    FLOAT = "float"
    BOOL = "bool"
    DATETIME = "datetime"
    ENUM = "enum"
    RELATION = "relation"
    IMAGE = "image"
    UUID = "uuid"
    JSON = "json"

    @classmethod
    def coerce(cls, value: Any) -> Optional["FieldType"]:
        """Return the matching member, or None for unknown tags."""
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            try:
                return cls(value.strip().lower())
            except ValueError:
                return None
        return None


class Cardinality(Enum):
    """Relation cardinality for relation-typed fields."""

    ONE_TO_ONE = "1-1"
    ONE_TO_MANY = "1-N"
    MANY_TO_MANY = "N-N"


class IndexKind(Enum):
    """Index access methods a field can request."""

    BTREE = "BTree"
    GIN = "GIN"
    GIST = "GIST"


_FK_PARENS = re.compile(r"^\s*([^\s().]+)\s*\(\s*([^\s()]+)\s*\)\s*$")
_FK_DOTTED = re.compile(r"^\s*([^\s().]+)\.([^\s().]+)\s*$")
_FK_BARE = re.compile(r"^\s*([^\s().]+)\s*$")


@dataclass(frozen=True)
class ForeignKey:
    """Structured foreign-key reference; rendered to text only at output time."""

    table: str
    column: str = "id"

    @classmethod
    def parse(cls, value: Any) -> Optional["ForeignKey"]:
        """
        Parse a textual reference.

        Accepts ``table(column)``, ``table.column`` and a bare ``table``
        (column defaults to ``id``). Dicts with ``table``/``column`` keys
        are accepted as well.

        Returns:
            ForeignKey, or None when the value is blank or unparseable
        """
        if isinstance(value, ForeignKey):
            return value
        if isinstance(value, dict):
            table = value.get("table")
            if isinstance(table, str) and table.strip():
                column = value.get("column")
                if not isinstance(column, str) or not column.strip():
                    column = "id"
                return cls(table.strip(), column.strip())
            return None
        if not isinstance(value, str) or not value.strip():
            return None

        for pattern in (_FK_PARENS, _FK_DOTTED):
            match = pattern.match(value)
            if match:
                return cls(match.group(1), match.group(2))

        match = _FK_BARE.match(value)
        if match:
            return cls(match.group(1))

        logger.warning("Ignoring unparseable foreign key reference: %r", value)
        return None

    def render(self, style: str = "sql") -> str:
        """Render as ``table(column)`` (sql) or ``table.column`` (dotted)."""
        if style == "dotted":
            return f"{self.table}.{self.column}"
        return f"{self.table}({self.column})"

    def __str__(self) -> str:
        return self.render()


@dataclass
class Field:
    """One column/attribute definition."""

    name: str
    type_general: FieldType = FieldType.STRING
    type_sql: str = ""
    default_sql: Optional[str] = None
    required: bool = False
    unique: bool = False
    primary_key: bool = False
    foreign_key: Optional[ForeignKey] = None
    relation_cardinality: Optional[Cardinality] = None
    enum_values: List[str] = field(default_factory=list)
    description: str = ""
    example_value: str = ""
    category: str = ""
    notes: str = ""
    slug_compatible: bool = False
    acf_field_type: str = ""
    ui_component: str = "input"
    supabase_policy: Optional[str] = None
    index: Optional[IndexKind] = None

    def __post_init__(self):
        # Blank optional text means "not set", same as from_dict reads it
        if self.default_sql is not None and not self.default_sql.strip():
            self.default_sql = None
        if self.supabase_policy is not None and not self.supabase_policy.strip():
            self.supabase_policy = None
        if not self.ui_component:
            self.ui_component = "input"

    @property
    def has_enum_values(self) -> bool:
        return self.type_general == FieldType.ENUM and bool(self.enum_values)

    @property
    def label(self) -> str:
        """Human label: the description when present, else the name."""
        return self.description or self.name

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to the project file format."""
        return {
            "name": self.name,
            "type_general": self.type_general.value,
            "type_sql": self.type_sql,
            "default_sql": self.default_sql,
            "required": self.required,
            "unique": self.unique,
            "primary_key": self.primary_key,
            "foreign_key": self.foreign_key.render() if self.foreign_key else None,
            "relation_cardinality": (
                self.relation_cardinality.value if self.relation_cardinality else None
            ),
            "enum_values": list(self.enum_values),
            "description": self.description,
            "example_value": self.example_value,
            "category": self.category,
            "notes": self.notes,
            "slug_compatible": self.slug_compatible,
            "acf_field_type": self.acf_field_type,
            "ui_component": self.ui_component,
            "supabase_policy": self.supabase_policy,
            "index": self.index.value if self.index else None,
        }

    @classmethod
    def from_dict(cls, data: Any, position: int = 1) -> "Field":
        """
        Build a Field from loosely-shaped input.

        Args:
            data: Mapping from the file format or an external collaborator
            position: 1-based position, used to name anonymous fields

        Returns:
            Field with every attribute coerced to a safe value
        """
        if not isinstance(data, dict):
            logger.warning("Field #%d is not an object; using defaults", position)
            data = {}

        name = _as_str(data.get("name")).strip()
        if not name:
            name = f"field_{position}"
            logger.warning("Field #%d has no name; using %r", position, name)

        raw_type = data.get("type_general")
        type_general = FieldType.coerce(raw_type)
        if type_general is None:
            if raw_type not in (None, ""):
                logger.warning(
                    "Unknown type_general %r for field %r; using 'string'",
                    raw_type,
                    name,
                )
            type_general = FieldType.STRING

        return cls(
            name=name,
            type_general=type_general,
            type_sql=_as_str(data.get("type_sql")).strip(),
            default_sql=_as_optional_str(data.get("default_sql")),
            required=_as_bool(data.get("required")),
            unique=_as_bool(data.get("unique")),
            primary_key=_as_bool(data.get("primary_key")),
            foreign_key=ForeignKey.parse(data.get("foreign_key")),
            relation_cardinality=_as_enum(
                Cardinality, data.get("relation_cardinality")
            ),
            enum_values=_as_str_list(data.get("enum_values")),
            description=_as_str(data.get("description")),
            example_value=_as_str(data.get("example_value")),
            category=_as_str(data.get("category")),
            notes=_as_str(data.get("notes")),
            slug_compatible=_as_bool(data.get("slug_compatible")),
            acf_field_type=_as_str(data.get("acf_field_type")).strip(),
            ui_component=_as_str(data.get("ui_component"), "input") or "input",
            supabase_policy=_as_optional_str(data.get("supabase_policy")),
            index=_as_enum(IndexKind, data.get("index")),
        )


@dataclass
class Table:
    """A named, ordered collection of fields."""

    name: str
    fields: List[Field] = field(default_factory=list)
    id: str = ""
    description: str = ""
    category: str = ""
    notes: str = ""

    def __post_init__(self):
        if not self.id:
            self.id = self.name

    @property
    def primary_keys(self) -> List[Field]:
        return [f for f in self.fields if f.primary_key]

    @property
    def primary_key(self) -> Optional[Field]:
        """The first primary-key field, if any."""
        keys = self.primary_keys
        return keys[0] if keys else None

    def get_field(self, name: str) -> Optional[Field]:
        """Get field by name."""
        for f in self.fields:
            if f.name == name:
                return f
        return None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "category": self.category,
            "notes": self.notes,
            "fields": [f.to_dict() for f in self.fields],
        }

    @classmethod
    def from_dict(cls, data: Any, position: int = 1) -> "Table":
        """Build a Table from loosely-shaped input (see Field.from_dict)."""
        if not isinstance(data, dict):
            logger.warning("Table #%d is not an object; using defaults", position)
            data = {}

        name = _as_str(data.get("name")).strip()
        if not name:
            name = f"table_{position}"
            logger.warning("Table #%d has no name; using %r", position, name)

        raw_fields = data.get("fields")
        if raw_fields is None:
            raw_fields = []
        elif not isinstance(raw_fields, list):
            logger.warning("Table %r has a non-list 'fields' value; ignoring", name)
            raw_fields = []

        return cls(
            name=name,
            id=_as_str(data.get("id")).strip(),
            description=_as_str(data.get("description")),
            category=_as_str(data.get("category")),
            notes=_as_str(data.get("notes")),
            fields=[
                Field.from_dict(item, index)
                for index, item in enumerate(raw_fields, start=1)
            ],
        )


@dataclass
class Schema:
    """A named collection of tables; table order drives emission order."""

    name: str
    tables: List[Table] = field(default_factory=list)
    description: str = ""
    version: str = "1.0.0"

    def get_table(self, key: str) -> Optional[Table]:
        """Get a table by name, falling back to its id."""
        for table in self.tables:
            if table.name == key:
                return table
        for table in self.tables:
            if table.id == key:
                return table
        return None

    @property
    def field_count(self) -> int:
        return sum(len(t.fields) for t in self.tables)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "description": self.description,
            "version": self.version,
            "tables": [t.to_dict() for t in self.tables],
        }

    def to_json(self, indent: int = 2) -> str:
        """Serialize to the JSON project file format."""
        return json.dumps(self.to_dict(), indent=indent, ensure_ascii=False)

    @classmethod
    def from_dict(cls, data: Any) -> "Schema":
        """Build a Schema from loosely-shaped input."""
        if not isinstance(data, dict):
            logger.warning("Schema document is not an object; using defaults")
            data = {}

        raw_tables = data.get("tables")
        if not isinstance(raw_tables, list):
            if raw_tables is not None:
                logger.warning("Schema has a non-list 'tables' value; ignoring")
            raw_tables = []

        return cls(
            name=_as_str(data.get("name")).strip() or "schema",
            description=_as_str(data.get("description")),
            version=_as_str(data.get("version")).strip() or "1.0.0",
            tables=[
                Table.from_dict(item, index)
                for index, item in enumerate(raw_tables, start=1)
            ],
        )

    @classmethod
    def from_json(cls, text: str) -> "Schema":
        """Parse the JSON project file format (raises json.JSONDecodeError)."""
        return cls.from_dict(json.loads(text))


# Coercion helpers


def _as_str(value: Any, default: str = "") -> str:
    if value is None:
        return default
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float)):
        return str(value)
    if isinstance(value, (list, dict)):
        return json.dumps(value, ensure_ascii=False)
    return default


def _as_optional_str(value: Any) -> Optional[str]:
    text = _as_str(value).strip()
    return text or None


def _as_bool(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)):
        return value != 0
    if isinstance(value, str):
        return value.strip().lower() in {"true", "1", "yes", "y", "on"}
    return False


def _as_str_list(value: Any) -> List[str]:
    if isinstance(value, str):
        return [part.strip() for part in value.split(",") if part.strip()]
    if not isinstance(value, (list, tuple)):
        return []
    return [_as_str(item) for item in value if item is not None]


def _as_enum(enum_cls, value: Any):
    if isinstance(value, enum_cls):
        return value
    if not isinstance(value, str) or not value.strip():
        return None
    wanted = value.strip()
    for member in enum_cls:
        if member.value.lower() == wanted.lower():
            return member
    logger.warning("Ignoring unknown %s value: %r", enum_cls.__name__, value)
    return None


TableOrSchema = Union[Table, Schema]
