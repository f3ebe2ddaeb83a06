"""
Core artifact generation components.

Provides the schema model, type mapping, base classes and utilities used
by all artifact generators.
"""

from .config import ConfigError, ConfigManager, GeneratorConfig, load_config
from .generator import (
    ArtifactGenerator,
    GenerationResult,
    GeneratorError,
    generate_artifact,
)
from .naming import NameSanitizer, NamingCase
from .schema import (
    Cardinality,
    Field,
    FieldType,
    ForeignKey,
    IndexKind,
    Schema,
    Table,
    TableOrSchema,
)
from .templates import TemplateEngine, TemplateError, create_template_engine
from .types import map_type

__all__ = [
    # Base generator interface
    "ArtifactGenerator",
    "GeneratorError",
    "GenerationResult",
    "generate_artifact",
    # Schema model
    "Schema",
    "Table",
    "Field",
    "FieldType",
    "ForeignKey",
    "Cardinality",
    "IndexKind",
    "TableOrSchema",
    # Type mapping
    "map_type",
    # Naming utilities
    "NameSanitizer",
    "NamingCase",
    # Configuration system
    "GeneratorConfig",
    "ConfigManager",
    "ConfigError",
    "load_config",
    # Template system
    "TemplateEngine",
    "TemplateError",
    "create_template_engine",
]
