"""
Generator registry system for managing available artifact generators.

Provides registration, alias resolution and instantiation of generators.
"""

from pathlib import Path
from typing import Any, Dict, List, Optional, Type, Union

from .core.config import ConfigError, GeneratorConfig, load_config
from .core.generator import ArtifactGenerator


class RegistryError(Exception):
    """Exception raised for registry-related errors."""

    pass


class ArtifactRegistry:
    """Registry for managing available artifact generators."""

    def __init__(self):
        """Initialize empty registry."""
        self._generators: Dict[str, Type[ArtifactGenerator]] = {}
        self._aliases: Dict[str, str] = {}

    def register(
        self,
        kind: str,
        generator_class: Type[ArtifactGenerator],
        aliases: Optional[List[str]] = None,
        replace: bool = False,
    ):
        """
        Register a generator for an artifact kind.

        Args:
            kind: Primary artifact kind name (e.g., 'sql', 'documentation')
            generator_class: Generator class implementing ArtifactGenerator
            aliases: Alternative names for this kind
            replace: If True, replace existing registration. If False, skip if exists.

        Raises:
            RegistryError: If generator class is invalid or conflicts exist
        """
        if not isinstance(generator_class, type) or not issubclass(
            generator_class, ArtifactGenerator
        ):
            raise RegistryError("Generator class must inherit from ArtifactGenerator")

        kind_key = kind.lower()

        if kind_key in self._generators and not replace:
            return

        self._generators[kind_key] = generator_class

        for alias in aliases or []:
            alias_key = alias.lower()
            if alias_key == kind_key:
                continue

            if not replace:
                if alias_key in self._generators:
                    raise RegistryError(
                        f"Alias '{alias}' conflicts with existing artifact kind"
                    )
                if alias_key in self._aliases and self._aliases[alias_key] != kind_key:
                    raise RegistryError(
                        f"Alias '{alias}' already points to '{self._aliases[alias_key]}'"
                    )

            self._aliases[alias_key] = kind_key

    def unregister(self, kind: str):
        """Unregister a generator and its aliases."""
        kind_key = kind.lower()
        self._generators.pop(kind_key, None)

        for alias in [a for a, target in self._aliases.items() if target == kind_key]:
            del self._aliases[alias]

    def resolve(self, kind: str) -> str:
        """
        Resolve a kind name or alias to the primary kind name.

        Raises:
            RegistryError: If the kind is unknown
        """
        kind_key = kind.strip().lower()
        if kind_key in self._generators:
            return kind_key
        if kind_key in self._aliases:
            return self._aliases[kind_key]

        raise RegistryError(
            f"No generator registered for artifact kind: {kind}. "
            f"Available: {', '.join(self.list_kinds())}"
        )

    def get_generator_class(self, kind: str) -> Type[ArtifactGenerator]:
        """Get generator class for an artifact kind or alias."""
        return self._generators[self.resolve(kind)]

    def create_generator(
        self,
        kind: str,
        config: Optional[Union[GeneratorConfig, Dict[str, Any], str, Path]] = None,
        **kwargs,
    ) -> ArtifactGenerator:
        """
        Create generator instance for an artifact kind.

        Args:
            kind: Artifact kind name or alias
            config: Configuration as GeneratorConfig, dict, or JSON file path
            **kwargs: Extra constructor arguments (e.g. ``uuid_factory``)

        Returns:
            Configured generator instance

        Raises:
            RegistryError: If the kind is unknown or the configuration is invalid.
                Errors raised by the generator itself (such as an unsupported
                dialect) propagate unchanged.
        """
        primary = self.resolve(kind)
        generator_class = self._generators[primary]

        try:
            if isinstance(config, GeneratorConfig):
                final_config = config
            elif isinstance(config, (str, Path)):
                final_config = load_config(primary, config_file=config)
            elif isinstance(config, dict):
                final_config = load_config(primary, custom_config=config)
            elif config is None:
                final_config = load_config(primary)
            else:
                raise RegistryError(f"Invalid config type: {type(config).__name__}")
        except (ConfigError, TypeError) as e:
            raise RegistryError(f"Failed to configure {primary} generator: {e}") from e

        return generator_class(final_config, **kwargs)

    def list_kinds(self) -> List[str]:
        """Get list of registered primary kind names."""
        return sorted(self._generators.keys())

    def get_aliases_for_kind(self, kind: str) -> List[str]:
        kind_key = kind.lower()
        return sorted(a for a, target in self._aliases.items() if target == kind_key)

    def list_all_names(self) -> Dict[str, List[str]]:
        """
        Get all registered names including aliases.

        Returns:
            Dict mapping primary kind to list of all names (including aliases)
        """
        return {
            kind: [kind] + self.get_aliases_for_kind(kind) for kind in self._generators
        }

    def is_supported(self, kind: str) -> bool:
        kind_key = kind.strip().lower()
        return kind_key in self._generators or kind_key in self._aliases

    def get_kind_info(self, kind: str) -> Dict[str, Any]:
        """
        Get information about a registered artifact kind.

        Raises:
            RegistryError: If kind not found
        """
        primary = self.resolve(kind)
        generator = self.create_generator(primary)

        return {
            "name": generator.artifact_kind,
            "class": type(generator).__name__,
            "file_extension": generator.file_extension,
            "mime_type": generator.mime_type,
            "aliases": self.get_aliases_for_kind(primary),
            "module": type(generator).__module__,
        }


# Global registry instance - created once
_global_registry: Optional[ArtifactRegistry] = None


def get_registry() -> ArtifactRegistry:
    """Get the global artifact registry, initializing if needed."""
    global _global_registry
    if _global_registry is None:
        _global_registry = ArtifactRegistry()
        _auto_register_generators(_global_registry)
    return _global_registry


def _auto_register_generators(registry: ArtifactRegistry):
    """
    Register the built-in generators with their aliases.

    This is the single source of truth for generator registration.
    """
    from .artifacts.acf import ACFGenerator
    from .artifacts.content import ContentConfigGenerator
    from .artifacts.csv import CSVGenerator, SampleDataGenerator
    from .artifacts.docs import DocumentationGenerator
    from .artifacts.page import PageGenerator
    from .artifacts.prisma import PrismaGenerator
    from .artifacts.schema_json import SchemaJSONGenerator
    from .artifacts.sql import SQLGenerator
    from .artifacts.typescript import TypeScriptGenerator

    registry.register("sql", SQLGenerator, aliases=["ddl"])
    registry.register(
        "content_config", ContentConfigGenerator, aliases=["astro_config", "content", "zod"]
    )
    registry.register("acf_json", ACFGenerator, aliases=["acf"])
    registry.register("csv", CSVGenerator, aliases=["csv_data"])
    registry.register("page", PageGenerator, aliases=["astro_page"])
    registry.register(
        "documentation", DocumentationGenerator, aliases=["docs", "md", "markdown"]
    )
    registry.register("typescript", TypeScriptGenerator, aliases=["ts"])
    registry.register("prisma", PrismaGenerator)
    registry.register("sample_data", SampleDataGenerator, aliases=["sample", "samples"])
    registry.register("schema_json", SchemaJSONGenerator, aliases=["json", "export"])


# Public API functions using the global registry


def get_generator(
    kind: str,
    config: Optional[Union[GeneratorConfig, Dict[str, Any], str, Path]] = None,
    **kwargs,
) -> ArtifactGenerator:
    """
    Get generator instance from global registry.

    Args:
        kind: Artifact kind name or alias
        config: Configuration

    Returns:
        Generator instance
    """
    return get_registry().create_generator(kind, config, **kwargs)


def list_supported_artifacts() -> List[str]:
    """List all supported artifact kinds from global registry."""
    return get_registry().list_kinds()


def is_artifact_supported(kind: str) -> bool:
    return get_registry().is_supported(kind)


def get_artifact_info(kind: str) -> Dict[str, Any]:
    """Get information about a supported artifact kind."""
    return get_registry().get_kind_info(kind)


def list_all_artifact_info() -> Dict[str, Dict[str, Any]]:
    """Get information about all supported artifact kinds."""
    return {kind: get_artifact_info(kind) for kind in list_supported_artifacts()}
