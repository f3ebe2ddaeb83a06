"""
Base generator interface for all artifact targets.

Defines the contract that every artifact generator must implement.
Generators are pure: they read the table/schema they are given, hold no
per-call state, and can be shared between threads.
"""

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from .config import GeneratorConfig, load_config
from .schema import FieldType, Schema, Table, TableOrSchema
from .templates import TemplateEngine, TemplateError, create_template_engine
from ...logging_config import get_logger

logger = get_logger(__name__)


class GeneratorError(Exception):
    """Raised for generation errors that indicate a programming mistake."""

    pass


class ArtifactGenerator(ABC):
    """Abstract base class for all artifact generators."""

    def __init__(
        self, config: Optional[Union[GeneratorConfig, Dict[str, Any]]] = None
    ):
        """Initialize generator with optional configuration."""
        if config is None:
            config = load_config(self.artifact_kind)
        elif isinstance(config, dict):
            config = load_config(self.artifact_kind, custom_config=config)
        elif not isinstance(config, GeneratorConfig):
            raise GeneratorError(f"Invalid config type: {type(config).__name__}")

        self.config = config
        self._template_engine = None
        self._setup_templates()

    def _setup_templates(self):
        """Setup template engine for this generator."""
        self._template_engine = create_template_engine(self.get_template_directory())

    @property
    @abstractmethod
    def artifact_kind(self) -> str:
        """Return the artifact kind name (e.g., 'sql', 'documentation')."""
        pass

    @property
    @abstractmethod
    def file_extension(self) -> str:
        """Return the file extension for generated files (e.g., '.sql')."""
        pass

    @property
    def mime_type(self) -> str:
        """MIME type handed to file/clipboard sinks."""
        return "text/plain"

    def get_template_directory(self) -> Optional[Path]:
        """
        Return the directory containing templates for this generator.

        Subclasses that render templates override this; None means the
        generator builds its output in code.
        """
        return None

    @property
    def template_engine(self) -> TemplateEngine:
        """Get the template engine for this generator."""
        if self._template_engine is None:
            self._setup_templates()
        return self._template_engine

    def generate(self, target: TableOrSchema) -> str:
        """
        Generate the artifact for a table or a whole schema.

        Args:
            target: Table or Schema to generate from

        Returns:
            Generated artifact text
        """
        if isinstance(target, Schema):
            return self.generate_schema(target)
        if isinstance(target, Table):
            return self.generate_table(target)
        raise GeneratorError(
            f"Expected a Table or Schema, got {type(target).__name__}"
        )

    @abstractmethod
    def generate_table(self, table: Table) -> str:
        """
        Generate the artifact for a single table.

        Args:
            table: Table to generate from

        Returns:
            Generated artifact text
        """
        pass

    def generate_schema(self, schema: Schema) -> str:
        """
        Generate the artifact for every table of a schema.

        The default joins per-table output in schema order; targets with a
        real whole-schema form override this.
        """
        parts = [self.generate_table(table).rstrip("\n") for table in schema.tables]
        return "\n\n".join(parts) + "\n" if parts else ""

    def validate_table(self, table: Table) -> List[str]:
        """
        Validate a table for basic structural issues.

        Generators override this to add target-specific checks.

        Returns:
            List of warning messages (empty if no issues)
        """
        warnings = []

        if not table.fields:
            warnings.append(f"Table '{table.name}' has no fields")
            return warnings

        primary_keys = table.primary_keys
        if not primary_keys:
            warnings.append(f"Table '{table.name}' has no primary key")
        elif len(primary_keys) > 1:
            names = ", ".join(f.name for f in primary_keys)
            warnings.append(f"Table '{table.name}' has several primary keys: {names}")

        for field in table.fields:
            if field.type_general == FieldType.ENUM and not field.enum_values:
                warnings.append(f"Enum field {table.name}.{field.name} has no values")
            if field.type_general == FieldType.RELATION and not field.foreign_key:
                warnings.append(
                    f"Relation field {table.name}.{field.name} has no foreign key"
                )

        return warnings

    def validate(self, target: TableOrSchema) -> List[str]:
        """Validate a table or every table of a schema."""
        if isinstance(target, Schema):
            warnings = []
            if not target.tables:
                warnings.append(f"Schema '{target.name}' has no tables")
            for table in target.tables:
                warnings.extend(self.validate_table(table))
            return warnings
        return self.validate_table(target)

    def format_code(self, code: str) -> str:
        """
        Apply target-specific formatting to generated output.

        Args:
            code: Raw generated output

        Returns:
            Formatted output
        """
        lines = code.split("\n")
        formatted_lines = []
        blank_count = 0

        for line in lines:
            stripped = line.rstrip()
            if not stripped:
                blank_count += 1
                if blank_count <= 1:  # Allow max 1 consecutive blank line
                    formatted_lines.append("")
            else:
                blank_count = 0
                formatted_lines.append(stripped)

        return self.apply_line_ending("\n".join(formatted_lines).strip("\n") + "\n")

    def apply_line_ending(self, text: str) -> str:
        """Convert ``\\n`` line breaks to the configured line ending."""
        if self.config.line_ending != "\n":
            text = text.replace("\n", self.config.line_ending)
        return text

    def suggested_filename(self, name: str) -> str:
        """File name offered to the caller's file sink."""
        return f"{name}{self.file_extension}"

    def render_template(self, template_name: str, context: Dict[str, Any]) -> str:
        """Render a template with context."""
        return self.template_engine.render_template(template_name, context)


class GenerationResult:
    """Container for generation results and metadata."""

    def __init__(
        self,
        content: str,
        warnings: List[str] = None,
        metadata: Dict[str, Any] = None,
    ):
        """
        Initialize generation result.

        Args:
            content: Generated artifact text
            warnings: Any warnings from generation
            metadata: Additional metadata about generation
        """
        self.content = content
        self.warnings = warnings or []
        self.metadata = metadata or {}
        self.success = True
        self.error_message: Optional[str] = None
        self.exception: Optional[Exception] = None

    @classmethod
    def error(cls, message: str, exception: Exception = None) -> "GenerationResult":
        """Create a failed generation result."""
        result = cls(content="")
        result.success = False
        result.error_message = message
        result.exception = exception
        return result


def generate_artifact(
    generator: ArtifactGenerator, target: TableOrSchema
) -> GenerationResult:
    """
    Generate one artifact with validation and formatting.

    Template failures become a failed result; programming errors such as
    an unsupported dialect propagate.

    Args:
        generator: Artifact generator instance
        target: Table or Schema to generate from

    Returns:
        GenerationResult with content, warnings, and metadata
    """
    warnings = generator.validate(target)
    for warning in warnings:
        logger.warning(warning)

    try:
        content = generator.format_code(generator.generate(target))
    except TemplateError as e:
        logger.error("Template rendering failed for %s: %s", generator.artifact_kind, e)
        return GenerationResult.error(f"Artifact generation failed: {e}", exception=e)

    is_schema = isinstance(target, Schema)
    metadata = {
        "artifact": generator.artifact_kind,
        "file_extension": generator.file_extension,
        "mime_type": generator.mime_type,
        "filename": generator.suggested_filename(target.name),
        "scope": "schema" if is_schema else "table",
        "table_count": len(target.tables) if is_schema else 1,
        "field_count": target.field_count if is_schema else len(target.fields),
    }

    logger.debug(
        "Generated %s for %s %r (%d chars)",
        generator.artifact_kind,
        metadata["scope"],
        target.name,
        len(content),
    )

    return GenerationResult(content, warnings, metadata)
