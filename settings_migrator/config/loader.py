"""
Configuration loader for the settings migrator.

Loads a YAML configuration file and validates it with the MigratorConfig
Pydantic model. Relative store paths are resolved against the config file's
directory so a config can travel with its store.
"""

from pathlib import Path

import yaml
from pydantic import ValidationError

from settings_migrator.exceptions import ConfigFileNotFoundError, ConfigValidationError

from .schema import MigratorConfig


def load_config(config_path: str | Path) -> MigratorConfig:
    """
    Load and validate migrator.config.yaml.

    Args:
        config_path: Path to the YAML file (relative or absolute)

    Returns:
        MigratorConfig with store_path resolved

    Raises:
        ConfigFileNotFoundError: If the file doesn't exist
        ConfigValidationError: If the YAML is invalid or fails validation

    Example:
        >>> config = load_config("migrator.config.yaml")
        >>> config.format
        'text'
    """
    config_path = Path(config_path)

    if not config_path.exists():
        raise ConfigFileNotFoundError(f"Configuration file not found: {config_path}")

    try:
        with config_path.open(encoding="utf-8") as f:
            raw_config = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigValidationError(f"Invalid YAML syntax in {config_path}: {e}") from e
    except OSError as e:
        raise ConfigValidationError(
            f"Failed to read configuration file {config_path}: {e}"
        ) from e

    if raw_config is None:
        raise ConfigValidationError(f"Configuration file is empty: {config_path}")

    try:
        config = MigratorConfig.model_validate(raw_config)
    except ValidationError as e:
        error_messages = []
        for error in e.errors():
            loc = ".".join(str(x) for x in error["loc"])
            msg = error["msg"]
            error_messages.append(f"  - {loc}: {msg}")

        raise ConfigValidationError(
            f"Configuration validation failed in {config_path}:\n"
            + "\n".join(error_messages)
        ) from e

    store_path = Path(config.store_path)
    if not store_path.is_absolute():
        store_path = config_path.parent / store_path
    return config.model_copy(update={"store_path": str(store_path)})
