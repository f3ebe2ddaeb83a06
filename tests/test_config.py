"""Tests for configuration loading and validation."""

import json

import pytest

from schema_forge.codegen.core.config import (
    EXAMPLE_CONFIG,
    ConfigError,
    ConfigManager,
    GeneratorConfig,
    load_config,
)


def test_defaults():
    config = GeneratorConfig()
    assert config.dialect == "postgres"
    assert config.indent == "  "
    assert config.custom == {}


def test_artifact_defaults():
    manager = ConfigManager()
    assert manager.get_config("sample_data").custom["output_format"] == "csv"
    assert manager.get_config("prisma").custom["url_env"] == "DATABASE_URL"
    assert "sql" in manager.list_artifacts()


def test_unknown_keys_go_to_custom():
    config = load_config("sql", custom_config={"dialect": "sqlite", "flavor": "x"})
    assert config.dialect == "sqlite"
    assert config.custom["flavor"] == "x"


def test_custom_overrides_do_not_leak_between_calls():
    manager = ConfigManager()
    manager.get_config("prisma", custom_config={"custom": {"provider": "sqlite"}})
    assert manager.get_config("prisma").custom["provider"] == "postgresql"


def test_config_file_merge(tmp_path):
    path = tmp_path / "forge.json"
    path.write_text(json.dumps(EXAMPLE_CONFIG), encoding="utf-8")

    config = load_config("sample_data", config_file=path)
    assert config.dialect == "sqlite"
    assert config.sample_rows == 10
    assert config.sample_seed == 42
    assert config.custom["output_format"] == "json"


def test_config_file_errors(tmp_path):
    manager = ConfigManager()
    with pytest.raises(ConfigError):
        manager.get_config(config_file=tmp_path / "missing.json")

    bad = tmp_path / "bad.json"
    bad.write_text("{not json", encoding="utf-8")
    with pytest.raises(ConfigError):
        manager.get_config(config_file=bad)

    listing = tmp_path / "list.json"
    listing.write_text("[1, 2]", encoding="utf-8")
    with pytest.raises(ConfigError):
        manager.get_config(config_file=listing)

    yaml_file = tmp_path / "forge.yaml"
    yaml_file.write_text("dialect: sqlite", encoding="utf-8")
    with pytest.raises(ConfigError):
        manager.get_config(config_file=yaml_file)


def test_save_config_round_trip(tmp_path):
    manager = ConfigManager()
    config = manager.get_config("sql", custom_config={"dialect": "mysql", "flavor": "x"})
    path = tmp_path / "saved.json"
    manager.save_config(config, path)

    reloaded = manager.get_config(config_file=path)
    assert reloaded == config


def test_validate_config():
    manager = ConfigManager()
    assert manager.validate_config(GeneratorConfig()) == []

    warnings = manager.validate_config(
        GeneratorConfig(dialect="oracle", sample_rows=-1, custom={"output_format": "xml"})
    )
    assert len(warnings) == 3
    assert any("oracle" in w for w in warnings)
