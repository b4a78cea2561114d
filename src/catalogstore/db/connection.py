# ABOUTME: SQLite connection management for the catalogstore relational backend.
# ABOUTME: Opens or creates the database, applies schema, and configures each connection.

import sqlite3
from pathlib import Path

from catalogstore.db.schema import MIGRATIONS, SCHEMA_V1

DEFAULT_DB_PATH = Path.home() / ".catalogstore" / "catalog.db"

# Seconds a writer waits on SQLite's lock before failing with "database is locked".
BUSY_TIMEOUT = 30.0


def _casefold(value: str | None) -> str | None:
    return value.casefold() if value is not None else None


def _schema_exists(conn: sqlite3.Connection) -> bool:
    """Check if the schema has already been applied."""
    cursor = conn.execute(
        "SELECT name FROM sqlite_master WHERE type='table' AND name='schema_version'"
    )
    return cursor.fetchone() is not None


def _apply_schema(conn: sqlite3.Connection) -> None:
    """Execute the DDL under a write lock so racing openers apply it once."""
    conn.executescript(f"BEGIN IMMEDIATE;\n{SCHEMA_V1}\nCOMMIT;")


def _get_schema_version(conn: sqlite3.Connection) -> int:
    """Read the current schema version from the database."""
    cursor = conn.execute("SELECT version FROM schema_version ORDER BY version DESC LIMIT 1")
    row = cursor.fetchone()
    return row[0] if row else 0


def _apply_migrations(conn: sqlite3.Connection) -> None:
    """Apply pending schema migrations sequentially.

    No-op if the database is already at the latest version.
    """
    current = _get_schema_version(conn)
    for version, sql in MIGRATIONS:
        if version > current:
            conn.executescript(sql)


def open_catalog(path: Path | None = None) -> sqlite3.Connection:
    """Open or create the catalog database.

    Creates the database file and parent directories if they don't exist.
    Applies the schema on first creation. The connection runs in autocommit
    mode so callers control transactions explicitly with BEGIN IMMEDIATE.
    WAL journal mode lets readers proceed while a writer holds the lock.

    Args:
        path: Path to the database file. Defaults to ~/.catalogstore/catalog.db.

    Returns:
        A configured sqlite3.Connection with sqlite3.Row as row factory.
    """
    db_path = path or DEFAULT_DB_PATH
    db_path.parent.mkdir(parents=True, exist_ok=True)

    conn = sqlite3.connect(
        str(db_path),
        timeout=BUSY_TIMEOUT,
        isolation_level=None,
        check_same_thread=False,
    )
    conn.row_factory = sqlite3.Row
    conn.execute("PRAGMA journal_mode=WAL")
    conn.execute("PRAGMA foreign_keys=ON")
    conn.create_function("casefold", 1, _casefold, deterministic=True)

    if not _schema_exists(conn):
        _apply_schema(conn)

    _apply_migrations(conn)

    return conn
