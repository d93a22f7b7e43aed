"""
SQLite-backed keyed store for the host application's persisted settings.

Migration steps only see the narrow KeyedStore protocol (booleans, blobs and
scoped entries by string key); this module provides the concrete adapter that
keeps those values in a single SQLite file.

Table layout (store schema v1):
    defaults(key TEXT PRIMARY KEY, value BLOB NOT NULL, updated_at TEXT NOT NULL)

Value encodings:
- Booleans: b"true" / b"false" (missing key reads as False)
- Blobs: stored verbatim (None clears the key)
- Scoped entries: JSON under "NSStatusItem <Label> <scope>" (None clears)

Example usage:
    >>> from settings_migrator.storage.store import SqliteKeyedStore
    >>> with SqliteKeyedStore("./settings.db") as store:
    ...     store.set_bool("hasMigrated:0.8.0", True)
    ...     store.get_bool("hasMigrated:0.8.0")
    True

Security:
    - ALL queries use parameterized statements to prevent SQL injection
"""

import json
import logging
import sqlite3
from pathlib import Path
from typing import Any, Protocol

from ..exceptions import StoreError
from ..utils.time import utc_timestamp

logger = logging.getLogger(__name__)

# Current store table schema version - increment when table migrations are added
CURRENT_STORE_SCHEMA_VERSION = 1

_TRUE = b"true"
_FALSE = b"false"

# Display labels used by the host for per-status-item keys
_SCOPED_KEY_LABELS = {
    "preferredPosition": "Preferred Position",
    "visible": "Visible",
}


class KeyedStore(Protocol):
    """Read/write contract the migration steps depend on."""

    def get_bool(self, key: str) -> bool: ...

    def set_bool(self, key: str, value: bool) -> None: ...

    def get_blob(self, key: str) -> bytes | None: ...

    def set_blob(self, key: str, data: bytes | None) -> None: ...

    def get_scoped(self, key: str, scope: str) -> Any | None: ...

    def set_scoped(self, key: str, scope: str, value: Any | None) -> None: ...


def scoped_key(key: str, scope: str) -> str:
    """
    Build the flat store key for a scoped entry.

    Args:
        key: Semantic key (e.g., "preferredPosition")
        scope: Scoping identifier (e.g., a control item identifier)

    Returns:
        str: Flat key, e.g. "NSStatusItem Preferred Position HItem"
    """
    label = _SCOPED_KEY_LABELS.get(str(key), str(key))
    return f"NSStatusItem {label} {scope}"


def init_store_if_needed(conn: sqlite3.Connection) -> None:
    """
    Initialize the store tables with schema versioning.

    Idempotent - safe to call on every open. Applies any missing table
    migrations in order.

    Args:
        conn: Active SQLite connection

    Raises:
        sqlite3.Error: If table creation or migration fails
        ValueError: If the file was written by a newer store schema
    """
    conn.execute("""
        CREATE TABLE IF NOT EXISTS schema_version (
            version INTEGER PRIMARY KEY,
            applied_at TEXT NOT NULL
        )
    """)
    conn.commit()

    current_version = get_store_schema_version(conn)

    if current_version < CURRENT_STORE_SCHEMA_VERSION:
        logger.info(
            f"Store schema upgrade needed: "
            f"v{current_version} -> v{CURRENT_STORE_SCHEMA_VERSION}"
        )
        apply_store_migrations(conn, current_version, CURRENT_STORE_SCHEMA_VERSION)
    elif current_version > CURRENT_STORE_SCHEMA_VERSION:
        raise ValueError(
            f"Store schema version {current_version} is newer than "
            f"expected {CURRENT_STORE_SCHEMA_VERSION}. Update your software or "
            f"use a different store file."
        )


def get_store_schema_version(conn: sqlite3.Connection) -> int:
    """Return the applied store schema version (0 for a fresh file)."""
    cursor = conn.execute("SELECT MAX(version) FROM schema_version")
    result = cursor.fetchone()[0]

    # MAX() returns None if table is empty
    return result if result is not None else 0


def apply_store_migrations(
    conn: sqlite3.Connection, from_version: int, to_version: int
) -> None:
    """
    Apply store table migrations from one version to another.

    Each migration runs in its own transaction and is recorded in the
    schema_version table after it commits.

    Raises:
        sqlite3.Error: If any migration SQL fails (transaction rolled back)
        ValueError: If from_version > to_version (downgrades not supported)
    """
    if from_version > to_version:
        raise ValueError(
            f"Cannot downgrade store schema from v{from_version} to v{to_version}."
        )

    for target_version in range(from_version + 1, to_version + 1):
        try:
            conn.execute("BEGIN")

            if target_version == 1:
                _migrate_store_to_v1(conn)
            else:
                raise ValueError(f"No store migration defined for version {target_version}")

            conn.execute(
                "INSERT INTO schema_version (version, applied_at) VALUES (?, ?)",
                (target_version, utc_timestamp()),
            )
            conn.commit()
            logger.debug(f"Store schema migrated to v{target_version}")

        except Exception as e:
            conn.rollback()
            logger.error(
                f"Store migration to version {target_version} failed: {e}",
                exc_info=True,
            )
            raise sqlite3.Error(
                f"Failed to migrate store to version {target_version}: {e}"
            ) from e


def _migrate_store_to_v1(conn: sqlite3.Connection) -> None:
    """Create the defaults table holding every persisted setting."""
    conn.execute("""
        CREATE TABLE IF NOT EXISTS defaults (
            key TEXT PRIMARY KEY,
            value BLOB NOT NULL,
            updated_at TEXT NOT NULL
        )
    """)


class SqliteKeyedStore:
    """
    KeyedStore implementation over a single SQLite file.

    Every write commits immediately; there is no batching across migration
    steps, so a step that fails midway leaves earlier writes in place.

    Args:
        db_path: Filesystem path to the store file, or ":memory:"

    Raises:
        StoreError: If the file cannot be opened or initialized
    """

    def __init__(self, db_path: str | Path):
        self.db_path = str(db_path)
        try:
            if self.db_path != ":memory:":
                Path(self.db_path).parent.mkdir(parents=True, exist_ok=True)
            self._conn = sqlite3.connect(self.db_path)
            self._closed = False
            init_store_if_needed(self._conn)
        except (sqlite3.Error, OSError, ValueError) as e:
            raise StoreError(f"Failed to open store {self.db_path}: {e}") from e

    def __enter__(self) -> "SqliteKeyedStore":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def close(self) -> None:
        self._conn.close()
        self._closed = True

    def _check_open(self) -> None:
        if self._closed:
            raise StoreError(f"Store {self.db_path} is closed")

    # ------------------------------------------------------------------
    # Raw access
    # ------------------------------------------------------------------

    def _read(self, key: str) -> bytes | None:
        self._check_open()
        try:
            row = self._conn.execute(
                "SELECT value FROM defaults WHERE key = ?", (key,)
            ).fetchone()
        except sqlite3.Error as e:
            raise StoreError(f"Failed to read key '{key}': {e}") from e
        return bytes(row[0]) if row is not None else None

    def _write(self, key: str, value: bytes | None) -> None:
        self._check_open()
        try:
            if value is None:
                self._conn.execute("DELETE FROM defaults WHERE key = ?", (key,))
            else:
                self._conn.execute(
                    """
                    INSERT INTO defaults (key, value, updated_at) VALUES (?, ?, ?)
                    ON CONFLICT(key) DO UPDATE SET
                        value = excluded.value,
                        updated_at = excluded.updated_at
                    """,
                    (key, value, utc_timestamp()),
                )
            self._conn.commit()
        except sqlite3.Error as e:
            self._conn.rollback()
            raise StoreError(f"Failed to write key '{key}': {e}") from e

    def keys(self) -> list[str]:
        """Return every stored key, sorted."""
        self._check_open()
        try:
            rows = self._conn.execute("SELECT key FROM defaults ORDER BY key").fetchall()
        except sqlite3.Error as e:
            raise StoreError(f"Failed to list keys: {e}") from e
        return [row[0] for row in rows]

    def updated_at(self, key: str) -> str | None:
        """Return the ISO 8601 timestamp of the last write to ``key``."""
        self._check_open()
        try:
            row = self._conn.execute(
                "SELECT updated_at FROM defaults WHERE key = ?", (key,)
            ).fetchone()
        except sqlite3.Error as e:
            raise StoreError(f"Failed to read key '{key}': {e}") from e
        return row[0] if row is not None else None

    # ------------------------------------------------------------------
    # KeyedStore protocol
    # ------------------------------------------------------------------

    def get_bool(self, key: str) -> bool:
        return self._read(key) == _TRUE

    def set_bool(self, key: str, value: bool) -> None:
        self._write(key, _TRUE if value else _FALSE)

    def get_blob(self, key: str) -> bytes | None:
        return self._read(key)

    def set_blob(self, key: str, data: bytes | None) -> None:
        self._write(key, data)

    def get_scoped(self, key: str, scope: str) -> Any | None:
        raw = self._read(scoped_key(key, scope))
        if raw is None:
            return None
        try:
            return json.loads(raw)
        except json.JSONDecodeError as e:
            raise StoreError(
                f"Corrupted value for {scoped_key(key, scope)!r}: {e}"
            ) from e

    def set_scoped(self, key: str, scope: str, value: Any | None) -> None:
        data = None if value is None else json.dumps(value).encode("utf-8")
        self._write(scoped_key(key, scope), data)
