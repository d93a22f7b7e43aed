"""
Tests for config.loader and config.schema modules.

This module tests configuration loading and validation:
- YAML loading and parsing
- Pydantic schema validation
- Relative store path resolution
- Error handling for missing, empty and invalid files
"""

from pathlib import Path

import pytest
import yaml
from pydantic import ValidationError

from settings_migrator.config.loader import load_config
from settings_migrator.config.schema import MigratorConfig
from settings_migrator.exceptions import (
    ConfigFileNotFoundError,
    ConfigurationError,
    ConfigValidationError,
)

# ============================================================================
# Fixtures
# ============================================================================


@pytest.fixture
def write_config(tmp_path):
    """Return a helper that writes a config dict to YAML and returns its path."""

    def _write(data, name="migrator.config.yaml"):
        config_file = tmp_path / name
        with config_file.open("w", encoding="utf-8") as f:
            yaml.dump(data, f)
        return config_file

    return _write


# ============================================================================
# Schema
# ============================================================================


class TestMigratorConfig:
    def test_defaults(self):
        config = MigratorConfig(store_path="settings.db")

        assert config.verbose is False
        assert config.format == "text"

    @pytest.mark.parametrize("store_path", ["", "   "])
    def test_empty_store_path_rejected(self, store_path):
        with pytest.raises(ValidationError, match="store_path cannot be empty"):
            MigratorConfig(store_path=store_path)

    def test_unknown_format_rejected(self):
        with pytest.raises(ValidationError):
            MigratorConfig(store_path="settings.db", format="xml")


# ============================================================================
# Loader
# ============================================================================


class TestLoadConfig:
    def test_load_valid_config(self, write_config, tmp_path):
        config_file = write_config(
            {"store_path": "/var/lib/app/settings.db", "verbose": True, "format": "json"}
        )

        config = load_config(config_file)

        assert config.store_path == "/var/lib/app/settings.db"
        assert config.verbose is True
        assert config.format == "json"

    def test_relative_store_path_resolved_against_config_dir(self, write_config, tmp_path):
        config_file = write_config({"store_path": "data/settings.db"})

        config = load_config(str(config_file))

        assert Path(config.store_path) == tmp_path / "data" / "settings.db"

    def test_missing_file(self, tmp_path):
        with pytest.raises(ConfigFileNotFoundError, match="not found"):
            load_config(tmp_path / "missing.yaml")

    def test_empty_file(self, tmp_path):
        config_file = tmp_path / "empty.yaml"
        config_file.write_text("", encoding="utf-8")

        with pytest.raises(ConfigValidationError, match="empty"):
            load_config(config_file)

    def test_invalid_yaml(self, tmp_path):
        config_file = tmp_path / "invalid.yaml"
        config_file.write_text("invalid: yaml: syntax: [", encoding="utf-8")

        with pytest.raises(ConfigValidationError, match="Invalid YAML syntax"):
            load_config(config_file)

    def test_validation_errors_name_the_field(self, write_config):
        config_file = write_config({"store_path": "settings.db", "format": "xml"})

        with pytest.raises(ConfigValidationError) as exc_info:
            load_config(config_file)

        assert "format" in str(exc_info.value)

    def test_missing_store_path(self, write_config):
        config_file = write_config({"verbose": True})

        with pytest.raises(ConfigValidationError, match="store_path"):
            load_config(config_file)

    def test_errors_are_configuration_errors(self, tmp_path):
        with pytest.raises(ConfigurationError):
            load_config(tmp_path / "missing.yaml")
