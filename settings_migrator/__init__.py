"""
Settings migrator: upgrades a persisted settings store to the current schema.

Run once per application launch, before anything reads the affected keys:

    >>> from settings_migrator import SqliteKeyedStore, migrate_all
    >>> with SqliteKeyedStore("settings.db") as store:
    ...     report = migrate_all(store)
"""

from settings_migrator.migration import migrate_all
from settings_migrator.storage.store import SqliteKeyedStore

__version__ = "0.11.10"

__all__ = ["SqliteKeyedStore", "__version__", "migrate_all"]
