"""
Artifact aggregation.

``generate_artifacts`` runs every selected generator against one table or
schema and collects the results, keyed by artifact kind. Unselected kinds
are never attempted.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Dict, Iterable, List, Optional, Union

from .core.config import GeneratorConfig, load_config
from .core.generator import GenerationResult, GeneratorError, generate_artifact
from .core.schema import TableOrSchema
from .registry import get_registry
from ..logging_config import get_logger

logger = get_logger(__name__)


class ArtifactKind(Enum):
    """Artifact kinds the aggregator can produce."""

    SQL = "sql"
    CONTENT_CONFIG = "content_config"
    ACF_JSON = "acf_json"
    CSV = "csv"
    PAGE = "page"
    DOCUMENTATION = "documentation"
    TYPESCRIPT = "typescript"
    PRISMA = "prisma"
    SAMPLE_DATA = "sample_data"
    SCHEMA_JSON = "schema_json"

    @classmethod
    def core(cls) -> List["ArtifactKind"]:
        """The six kinds produced by a default 'generate all' request."""
        return [
            cls.SQL,
            cls.CONTENT_CONFIG,
            cls.ACF_JSON,
            cls.CSV,
            cls.PAGE,
            cls.DOCUMENTATION,
        ]

    @classmethod
    def parse(cls, value: Union[str, "ArtifactKind"]) -> "ArtifactKind":
        """Resolve a kind value or registry alias (``ddl``, ``md``...)."""
        if isinstance(value, cls):
            return value
        return cls(get_registry().resolve(value))


@dataclass
class GenerationOptions:
    """Which artifacts to produce and how."""

    kinds: List[ArtifactKind] = field(default_factory=ArtifactKind.core)
    dialect: str = "postgres"
    sample_rows: Optional[int] = None
    uuid_factory: Optional[Callable[[], str]] = None
    config: Dict[str, Any] = field(default_factory=dict)

    def __post_init__(self):
        self.kinds = _unique(ArtifactKind.parse(k) for k in self.kinds)

    def config_for(self, kind: ArtifactKind) -> GeneratorConfig:
        overrides = dict(self.config)
        overrides["dialect"] = self.dialect
        if self.sample_rows is not None:
            overrides["sample_rows"] = self.sample_rows
        return load_config(kind.value, custom_config=overrides)


@dataclass
class ArtifactBundle:
    """Generated artifacts keyed by kind value, plus sink metadata."""

    artifacts: Dict[str, str] = field(default_factory=dict)
    filenames: Dict[str, str] = field(default_factory=dict)
    mime_types: Dict[str, str] = field(default_factory=dict)
    warnings: Dict[str, List[str]] = field(default_factory=dict)
    errors: Dict[str, str] = field(default_factory=dict)

    def __contains__(self, kind) -> bool:
        return _kind_value(kind) in self.artifacts

    def __getitem__(self, kind) -> str:
        return self.artifacts[_kind_value(kind)]

    def get(self, kind, default: Optional[str] = None) -> Optional[str]:
        return self.artifacts.get(_kind_value(kind), default)

    @property
    def success(self) -> bool:
        return not self.errors

    def add(self, kind: ArtifactKind, result: GenerationResult):
        key = kind.value
        self.warnings[key] = list(result.warnings)
        if not result.success:
            self.errors[key] = result.error_message or "generation failed"
            return
        self.artifacts[key] = result.content
        self.filenames[key] = result.metadata.get("filename", "")
        self.mime_types[key] = result.metadata.get("mime_type", "text/plain")


def generate_artifacts(
    target: Optional[TableOrSchema], options: Optional[GenerationOptions] = None
) -> ArtifactBundle:
    """
    Generate the selected artifacts for a table or schema.

    Args:
        target: Table or Schema to generate from
        options: Artifact selection and generator settings

    Returns:
        ArtifactBundle keyed by artifact kind

    Raises:
        GeneratorError: If no target or no artifact kind is selected, or a
            generator is misconfigured (unknown dialect)
    """
    if target is None:
        raise GeneratorError("No table or schema selected")

    options = options or GenerationOptions()
    if not options.kinds:
        raise GeneratorError("No artifact kind selected")

    registry = get_registry()
    bundle = ArtifactBundle()

    for kind in options.kinds:
        extra = {}
        if kind == ArtifactKind.SAMPLE_DATA and options.uuid_factory is not None:
            extra["uuid_factory"] = options.uuid_factory

        generator = registry.create_generator(kind.value, options.config_for(kind), **extra)
        bundle.add(kind, generate_artifact(generator, target))

    logger.info(
        "Generated %d artifact(s) for %r: %s",
        len(bundle.artifacts),
        target.name,
        ", ".join(bundle.artifacts),
    )
    return bundle


def _kind_value(kind) -> str:
    return kind.value if isinstance(kind, ArtifactKind) else str(kind)


def _unique(kinds: Iterable[ArtifactKind]) -> List[ArtifactKind]:
    seen: List[ArtifactKind] = []
    for kind in kinds:
        if kind not in seen:
            seen.append(kind)
    return seen
