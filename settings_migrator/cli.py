"""
CLI entrypoint for the settings migrator.

Stands in for the host application's launch hook: opens the persisted
settings store, runs every pending migration, and presents any notices.

Commands:
    migrate: Run pending migrations against a store
    status: Show which migration flags are set

Exit codes:
    0: Success (including runs where some migrations failed; failures are
       logged and retried on the next run)
    1: Configuration error (invalid YAML, missing --store/--config)
    2: Store error (cannot open or read the SQLite store)

Examples:
    # Human-friendly output
    settings-migrator migrate --store ./settings.db

    # Agent-friendly JSON output
    settings-migrator migrate --config migrator.config.yaml --format json

    # Inspect flags
    settings-migrator status --store ./settings.db
"""

from pathlib import Path

import typer

from settings_migrator.config.constants import MIGRATION_FLAGS
from settings_migrator.config.loader import load_config
from settings_migrator.exceptions import ConfigurationError, StoreError
from settings_migrator.migration import migrate_all
from settings_migrator.storage.store import SqliteKeyedStore
from settings_migrator.utils.console import (
    error,
    info,
    output_mode,
    print_flag_table,
    print_notice,
    success,
    warning,
)
from settings_migrator.utils.logging import get_logger, setup_logging

logger = get_logger("settings_migrator.cli")

# Exit codes
EXIT_SUCCESS = 0
EXIT_CONFIG_ERROR = 1
EXIT_STORE_ERROR = 2

app = typer.Typer(
    name="settings-migrator",
    help="Upgrade a persisted settings store to the current schema",
    add_completion=False,
)


def _resolve_store_path(
    store: Path | None, config: Path | None, format: str, verbose: bool
) -> tuple[Path, str, bool]:
    """
    Work out the store path and output settings from flags and config.

    Command-line flags win over the config file for format and verbosity
    only when they differ from their defaults.

    Raises:
        ConfigurationError: If neither or both of --store/--config are given,
            or the config file is invalid
    """
    if (store is None) == (config is None):
        raise ConfigurationError("Exactly one of --store or --config is required")

    if store is not None:
        return store, format, verbose

    migrator_config = load_config(config)
    return (
        Path(migrator_config.store_path),
        format if format != "text" else migrator_config.format,
        verbose or migrator_config.verbose,
    )


@app.command()
def migrate(
    store: Path | None = typer.Option(
        None,
        "--store",
        "-s",
        help="Path to the SQLite settings store",
        dir_okay=False,
    ),
    config: Path | None = typer.Option(
        None,
        "--config",
        "-c",
        help="Path to YAML configuration file",
        dir_okay=False,
    ),
    format: str = typer.Option(
        "text",
        "--format",
        "-f",
        help="Output format: 'text' (human-friendly) or 'json' (machine-readable)",
    ),
    quiet: bool = typer.Option(
        False,
        "--quiet",
        "-q",
        help="Minimal output",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Enable debug logging",
    ),
):
    """
    Run every pending settings migration.

    Completed migrations are skipped, so this is safe to run on every launch.
    Failed migrations are logged and retried next time; they do not change
    the exit code.

    Examples:
      settings-migrator migrate --store ./settings.db
      settings-migrator migrate --config migrator.config.yaml --format json
    """
    try:
        store_path, format, verbose = _resolve_store_path(store, config, format, verbose)
    except ConfigurationError as e:
        output_mode.format = "json" if format == "json" else "text"
        error(str(e))
        output_mode.flush_json()
        raise typer.Exit(EXIT_CONFIG_ERROR)

    output_mode.format = format
    output_mode.quiet = quiet
    setup_logging(verbose=verbose, quiet_logs=output_mode.is_human())

    try:
        with SqliteKeyedStore(store_path) as settings_store:
            report = migrate_all(settings_store, present_notice=print_notice)
    except StoreError as e:
        logger.error(f"Failed to open settings store {store_path}: {e}")
        error(f"Failed to open settings store: {e}")
        output_mode.flush_json()
        raise typer.Exit(EXIT_STORE_ERROR)

    if report.completed:
        success(f"Migrated settings: {', '.join(report.completed)}")
    else:
        info("No migrations were applied")

    for migration_error in report.errors:
        warning(f"Migration failed and will be retried: {migration_error}")

    if output_mode.is_agent():
        output_mode.add_json("completed", report.completed)
        output_mode.add_json("errors", [str(e) for e in report.errors])
        output_mode.flush_json()

    raise typer.Exit(EXIT_SUCCESS)


@app.command()
def status(
    store: Path = typer.Option(
        ...,
        "--store",
        "-s",
        help="Path to the SQLite settings store",
        dir_okay=False,
    ),
    format: str = typer.Option(
        "text",
        "--format",
        "-f",
        help="Output format: 'text' or 'json'",
    ),
    quiet: bool = typer.Option(
        False,
        "--quiet",
        "-q",
        help="Tab-separated output",
    ),
):
    """
    Show which migrations have completed.

    Examples:
      settings-migrator status --store ./settings.db
      settings-migrator status --store ./settings.db --format json
    """
    output_mode.format = format
    output_mode.quiet = quiet

    try:
        with SqliteKeyedStore(store) as settings_store:
            flags = {flag: settings_store.get_bool(flag) for flag in MIGRATION_FLAGS}
    except StoreError as e:
        error(f"Failed to read settings store: {e}")
        output_mode.flush_json()
        raise typer.Exit(EXIT_STORE_ERROR)

    print_flag_table(flags)
    output_mode.flush_json()
    raise typer.Exit(EXIT_SUCCESS)


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    version: bool = typer.Option(
        False,
        "--version",
        "-V",
        help="Show version and exit",
    ),
):
    """
    Settings migrator - upgrade persisted settings to the current schema.

    Use 'settings-migrator COMMAND --help' for detailed command documentation.
    """
    if version:
        from settings_migrator import __version__

        typer.echo(f"settings-migrator version {__version__}")
        raise typer.Exit(EXIT_SUCCESS)

    if ctx.invoked_subcommand is None:
        typer.echo("Use --help to see available commands")


if __name__ == "__main__":
    app()
