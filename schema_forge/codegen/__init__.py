"""
Schema Forge Artifact Generation Module

Generates SQL, content configuration, structured-fields JSON, CSV, page
templates and documentation from table and schema definitions.
"""

from .aggregator import (
    ArtifactBundle,
    ArtifactKind,
    GenerationOptions,
    generate_artifacts,
)
from .core.config import ConfigError, ConfigManager, GeneratorConfig, load_config
from .core.generator import (
    ArtifactGenerator,
    GenerationResult,
    GeneratorError,
    generate_artifact,
)
from .core.schema import Field, FieldType, ForeignKey, Schema, Table
from .core.templates import TemplateError
from .core.types import map_type
from .registry import (
    ArtifactRegistry,
    RegistryError,
    get_artifact_info,
    get_generator,
    get_registry,
    list_all_artifact_info,
    list_supported_artifacts,
)


# Convenience functions
def generate_from_dict(data, artifact="sql", config=None, table=None):
    """
    Generate one artifact from a schema document.

    Args:
        data: Schema (or single table) as a dict, e.g. from an AI service
        artifact: Artifact kind name or alias
        config: Generator configuration dict or path
        table: Optional table name to restrict generation to

    Returns:
        GenerationResult with generated content
    """
    if "fields" in data and "tables" not in data:
        target = Table.from_dict(data)
    else:
        schema = Schema.from_dict(data)
        target = schema
        if table:
            target = schema.get_table(table)
            if target is None:
                raise GeneratorError(f"Table not found: {table}")

    generator = get_generator(artifact, config)
    return generate_artifact(generator, target)


def quick_generate(data, artifact="sql", **options):
    """
    Quick artifact generation from schema JSON.

    Args:
        data: Schema document (dict or JSON string)
        artifact: Artifact kind name or alias
        **options: Generator options

    Returns:
        Generated artifact string
    """
    if isinstance(data, str):
        import json

        data = json.loads(data)

    result = generate_from_dict(data, artifact, options)

    if result.success:
        return result.content
    raise GeneratorError(f"Artifact generation failed: {result.error_message}")


__all__ = [
    "ArtifactRegistry",
    "ArtifactGenerator",
    "ArtifactBundle",
    "ArtifactKind",
    "GenerationOptions",
    "GenerationResult",
    "GeneratorError",
    "RegistryError",
    "TemplateError",
    "ConfigError",
    "Schema",
    "Table",
    "Field",
    "FieldType",
    "ForeignKey",
    "GeneratorConfig",
    "ConfigManager",
    "load_config",
    "map_type",
    "generate_artifact",
    "generate_artifacts",
    "generate_from_dict",
    "quick_generate",
    "get_generator",
    "get_registry",
    "get_artifact_info",
    "list_all_artifact_info",
    "list_supported_artifacts",
]
