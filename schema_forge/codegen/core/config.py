"""
Configuration management for artifact generation.

Handles loading and merging configuration from JSON files,
providing defaults and validation for generator settings.
"""

import json
from dataclasses import asdict, dataclass, field, fields
from pathlib import Path
from typing import Any, Dict, List, Optional, Union


class ConfigError(Exception):
    """Exception raised for configuration-related errors."""

    pass


SUPPORTED_DIALECTS = ("postgres", "sqlite", "mysql")


@dataclass
class GeneratorConfig:
    """Base configuration for artifact generators."""

    # SQL settings
    dialect: str = "postgres"
    if_not_exists: bool = False
    drop_tables: bool = True

    # Output style
    indent_size: int = 2
    line_ending: str = "\n"
    add_comments: bool = True

    # Sample data
    sample_rows: int = 5
    sample_seed: Optional[int] = None

    # Page / structured fields
    page_lang: str = "en"
    acf_location_param: str = "post_type"

    # Custom settings (artifact-specific)
    custom: Dict[str, Any] = field(default_factory=dict)

    @property
    def indent(self) -> str:
        return " " * self.indent_size


class ConfigManager:
    """Manages configuration loading and merging."""

    def __init__(self):
        """Initialize configuration manager."""
        self._configs: Dict[str, Dict[str, Any]] = {}
        self._load_defaults()

    def _load_defaults(self):
        """Load default configurations for artifact kinds that need them."""
        self._configs["sql"] = {
            "dialect": "postgres",
            "drop_tables": True,
            "add_comments": True,
        }
        self._configs["sample_data"] = {
            "sample_rows": 5,
            "custom": {"output_format": "csv"},
        }
        self._configs["page"] = {
            "page_lang": "en",
        }
        self._configs["prisma"] = {
            "custom": {"provider": "postgresql", "url_env": "DATABASE_URL"},
        }

    def get_config(
        self,
        artifact: Optional[str] = None,
        custom_config: Optional[Dict[str, Any]] = None,
        config_file: Optional[Union[str, Path]] = None,
    ) -> GeneratorConfig:
        """
        Get complete configuration for an artifact kind.

        Args:
            artifact: Artifact kind name (None for plain defaults)
            custom_config: Custom configuration overrides
            config_file: Path to JSON configuration file

        Returns:
            Merged configuration
        """
        base_config = _deep_copy(self._configs.get(artifact or "", {}))

        if config_file:
            _merge(base_config, self.load_config_file(config_file))

        if custom_config:
            _merge(base_config, custom_config)

        return self._dict_to_config(base_config)

    def load_config_file(self, config_path: Union[str, Path]) -> Dict[str, Any]:
        """Load configuration from JSON file."""
        path = Path(config_path)

        if not path.exists():
            raise ConfigError(f"Configuration file not found: {path}")

        if not path.suffix.lower() == ".json":
            raise ConfigError(f"Configuration file must be JSON: {path}")

        try:
            with open(path, "r", encoding="utf-8") as f:
                config = json.load(f)
        except json.JSONDecodeError as e:
            raise ConfigError(f"Invalid JSON in configuration file {path}: {e}") from e
        except OSError as e:
            raise ConfigError(f"Failed to load configuration file {path}: {e}") from e

        if not isinstance(config, dict):
            raise ConfigError(f"Configuration file must contain a JSON object: {path}")

        return config

    def _dict_to_config(self, config_dict: Dict[str, Any]) -> GeneratorConfig:
        """Convert dictionary to GeneratorConfig instance."""
        known_fields = {f.name for f in fields(GeneratorConfig)}

        config_args = {}
        custom_args = {}

        for key, value in config_dict.items():
            if key in known_fields:
                config_args[key] = value
            else:
                custom_args[key] = value

        # Unknown keys land in the custom dict
        if custom_args:
            existing_custom = dict(config_args.get("custom") or {})
            existing_custom.update(custom_args)
            config_args["custom"] = existing_custom

        return GeneratorConfig(**config_args)

    def save_config(self, config: GeneratorConfig, output_path: Union[str, Path]):
        """Save configuration to JSON file."""
        path = Path(output_path)
        config_dict = asdict(config)
        custom = config_dict.pop("custom")
        config_dict.update(custom)

        try:
            with open(path, "w", encoding="utf-8") as f:
                json.dump(config_dict, f, indent=2, ensure_ascii=False)
        except OSError as e:
            raise ConfigError(f"Failed to save configuration to {path}: {e}") from e

    def list_artifacts(self) -> List[str]:
        """Artifact kinds with dedicated defaults."""
        return list(self._configs.keys())

    def validate_config(self, config: GeneratorConfig) -> List[str]:
        """
        Validate a configuration.

        Returns:
            List of validation warnings
        """
        warnings = []

        if str(config.dialect).lower() not in SUPPORTED_DIALECTS:
            warnings.append(
                f"Invalid dialect: {config.dialect} "
                f"(expected one of {', '.join(SUPPORTED_DIALECTS)})"
            )

        if not isinstance(config.sample_rows, int) or config.sample_rows < 0:
            warnings.append(f"Invalid sample_rows: {config.sample_rows}")

        if config.indent_size < 0:
            warnings.append(f"Invalid indent_size: {config.indent_size}")

        if config.line_ending not in ("\n", "\r\n"):
            warnings.append(f"Unusual line_ending: {config.line_ending!r}")

        output_format = config.custom.get("output_format", "csv")
        if output_format not in ("csv", "json"):
            warnings.append(f"Invalid sample output_format: {output_format}")

        return warnings


def _deep_copy(config: Dict[str, Any]) -> Dict[str, Any]:
    copied = dict(config)
    if "custom" in copied:
        copied["custom"] = dict(copied["custom"])
    return copied


def _merge(base: Dict[str, Any], overrides: Dict[str, Any]):
    """Merge overrides into base; ``custom`` dicts are merged key by key."""
    for key, value in overrides.items():
        if key == "custom" and isinstance(value, dict):
            merged = dict(base.get("custom") or {})
            merged.update(value)
            base["custom"] = merged
        else:
            base[key] = value


# Global configuration manager instance
_config_manager = None


def get_config_manager() -> ConfigManager:
    """Get the global configuration manager instance."""
    global _config_manager
    if _config_manager is None:
        _config_manager = ConfigManager()
    return _config_manager


def load_config(
    artifact: Optional[str] = None,
    custom_config: Optional[Dict[str, Any]] = None,
    config_file: Optional[Union[str, Path]] = None,
) -> GeneratorConfig:
    """
    Convenience function to load configuration.

    Args:
        artifact: Artifact kind name
        custom_config: Custom configuration overrides
        config_file: Path to JSON configuration file

    Returns:
        Merged configuration for the artifact kind
    """
    manager = get_config_manager()
    return manager.get_config(artifact, custom_config, config_file)


EXAMPLE_CONFIG = {
    "dialect": "sqlite",
    "drop_tables": False,
    "sample_rows": 10,
    "sample_seed": 42,
    "page_lang": "fr",
    "output_format": "json",
}
