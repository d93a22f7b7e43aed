"""
Entry point for running the settings migrator as a module.

Enables execution via:
    python -m settings_migrator [command] [options]

Examples:
    python -m settings_migrator migrate --store ./settings.db
    python -m settings_migrator status --store ./settings.db --format json
"""

from settings_migrator.cli import app

if __name__ == "__main__":
    app()
