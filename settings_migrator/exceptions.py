"""
Custom exceptions for the settings migrator.

This module provides a hierarchy of exceptions that enable type-safe error
handling throughout the migration pipeline. All exceptions inherit from the
base SettingsMigratorError for consistent catching.

Exception Hierarchy:
    SettingsMigratorError (base)
    ├── ConfigurationError
    │   ├── ConfigFileNotFoundError
    │   └── ConfigValidationError
    ├── StoreError
    └── MigrationError
        ├── InvalidSectionsError
        ├── HotkeyMigrationError
        ├── ControlItemMigrationError
        ├── AppearanceMigrationError
        │   └── MissingConfigurationError
        └── CombinedMigrationError

Usage:
    from settings_migrator.exceptions import CombinedMigrationError

    try:
        perform_all(steps)
    except CombinedMigrationError as e:
        logger.error(f"Migration failed with error: {e}")
"""

from typing import Any


class SettingsMigratorError(Exception):
    """
    Base exception for all settings migrator errors.

    All custom exceptions in this application should inherit from this class.
    This enables catching all application-specific errors with a single except clause.
    """

    pass


# ============================================================================
# Configuration Errors
# ============================================================================


class ConfigurationError(SettingsMigratorError):
    """
    Base class for configuration-related errors.

    Raised when the migrator config file cannot be loaded or validated.
    Should be caught and result in exit code 1 (configuration error).
    """

    pass


class ConfigFileNotFoundError(ConfigurationError):
    """
    Configuration file does not exist at the specified path.

    Example:
        raise ConfigFileNotFoundError("/path/to/migrator.config.yaml")
    """

    pass


class ConfigValidationError(ConfigurationError):
    """
    Configuration file is invalid (schema validation failed).

    Example:
        raise ConfigValidationError("Field 'store_path' cannot be empty")
    """

    pass


# ============================================================================
# Store Errors
# ============================================================================


class StoreError(SettingsMigratorError):
    """
    The persisted key-value store could not be opened, read, or written.

    Should be caught at the CLI boundary and result in exit code 2.

    Example:
        raise StoreError("Failed to write key 'Sections': disk I/O error")
    """

    pass


# ============================================================================
# Migration Errors
# ============================================================================


class MigrationError(SettingsMigratorError):
    """
    Base class for errors raised by individual migration steps.

    Migration errors never terminate the host process. They are logged and
    the owning migration flag stays unset so the step is retried next launch.
    """

    pass


class InvalidSectionsError(MigrationError):
    """
    The persisted menu bar sections blob is present but is not a JSON array
    of objects.

    Attributes:
        value: The decoded object that failed the structural check
    """

    def __init__(self, value: Any):
        super().__init__(f"Invalid menu bar sections JSON object: {value!r}")
        self.value = value


class _WrappingMigrationError(MigrationError):
    """Migration error that carries the underlying cause."""

    prefix = "Error during migration"

    def __init__(self, error: BaseException):
        super().__init__(f"{self.prefix}: {error}")
        self.error = error
        self.__cause__ = error


class HotkeyMigrationError(_WrappingMigrationError):
    """Reading the legacy sections failed while migrating hotkeys."""

    prefix = "Error migrating hotkeys"


class ControlItemMigrationError(_WrappingMigrationError):
    """Reading or rewriting the legacy sections failed while migrating control items."""

    prefix = "Error migrating control items"


class AppearanceMigrationError(MigrationError):
    """
    The menu bar appearance configuration could not be upgraded.

    Raised (or returned inside a Failure outcome) when the V1 blob fails to
    decode or the V2 record fails to encode.
    """

    def __init__(self, error: BaseException | str):
        super().__init__(
            f"Error migrating menu bar appearance configuration: {error}"
        )
        self.error = error
        if isinstance(error, BaseException):
            self.__cause__ = error


class MissingConfigurationError(AppearanceMigrationError):
    """
    The appearance upgrade was triggered but no V1 configuration is stored.

    Distinct from a decode failure: there is nothing to upgrade, and the
    upgrade has no meaningful no-op path.
    """

    def __init__(self):
        super().__init__("Missing menu bar appearance configuration")


class CombinedMigrationError(MigrationError):
    """
    One or more steps of a migration group failed.

    Wraps every individual error in the order the steps ran. The string form
    lists each wrapped error so a single log record carries all of them.

    Attributes:
        errors: list[Exception] - Individual step errors in original order
    """

    def __init__(self, errors: list[Exception]):
        self.errors = list(errors)
        details = "; ".join(
            f"[{index}] {type(error).__name__}: {error}"
            for index, error in enumerate(self.errors, start=1)
        )
        super().__init__(f"The following errors occurred: {details}")
