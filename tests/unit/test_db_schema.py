# ABOUTME: Unit tests for database schema creation and connection management.
# ABOUTME: Validates tables, constraints, WAL mode, foreign keys, and default paths.

import sqlite3
from pathlib import Path

import pytest

from catalogstore.db.connection import DEFAULT_DB_PATH, open_catalog


@pytest.fixture()
def db_path(tmp_path: Path) -> Path:
    """Provide a temporary database path."""
    return tmp_path / "test_catalog.db"


class TestOpenCatalog:
    """Tests for open_catalog() connection factory."""

    def test_creates_parent_directories(self, tmp_path: Path) -> None:
        """Creates parent directories if they don't exist."""
        nested = tmp_path / "deep" / "nested" / "catalog.db"
        conn = open_catalog(nested)
        conn.close()
        assert nested.exists()

    def test_creates_tables(self, db_path: Path) -> None:
        """categories and items exist with the expected columns."""
        conn = open_catalog(db_path)
        categories = {row[1] for row in conn.execute("PRAGMA table_info(categories)")}
        items = {row[1] for row in conn.execute("PRAGMA table_info(items)")}
        conn.close()

        assert categories == {"id", "name"}
        assert items == {"id", "name", "category_id", "image_name"}

    def test_category_name_is_unique(self, db_path: Path) -> None:
        """A second category with the same name violates the UNIQUE constraint."""
        conn = open_catalog(db_path)
        conn.execute("INSERT INTO categories (name) VALUES ('Clothing')")
        with pytest.raises(sqlite3.IntegrityError):
            conn.execute("INSERT INTO categories (name) VALUES ('Clothing')")
        conn.close()

    def test_category_name_is_case_sensitive(self, db_path: Path) -> None:
        """Names differing only by case are distinct categories."""
        conn = open_catalog(db_path)
        conn.execute("INSERT INTO categories (name) VALUES ('Clothing')")
        conn.execute("INSERT INTO categories (name) VALUES ('clothing')")
        count = conn.execute("SELECT COUNT(*) FROM categories").fetchone()[0]
        conn.close()
        assert count == 2

    def test_foreign_keys_enforced(self, db_path: Path) -> None:
        """An item cannot reference a category that does not exist."""
        conn = open_catalog(db_path)
        with pytest.raises(sqlite3.IntegrityError):
            conn.execute(
                "INSERT INTO items (name, category_id, image_name) VALUES ('x', 42, 'a.jpg')"
            )
        conn.close()

    def test_schema_version_written_once(self, db_path: Path) -> None:
        """Reopening does not re-insert the schema version."""
        open_catalog(db_path).close()
        conn = open_catalog(db_path)
        count = conn.execute("SELECT COUNT(*) FROM schema_version").fetchone()[0]
        version = conn.execute("SELECT MAX(version) FROM schema_version").fetchone()[0]
        conn.close()
        assert count == 1
        assert version == 1

    def test_reopen_existing_database(self, db_path: Path) -> None:
        """Opening an existing DB does not recreate or destroy data."""
        conn = open_catalog(db_path)
        conn.execute("INSERT INTO categories (name) VALUES ('Books')")
        conn.close()

        conn2 = open_catalog(db_path)
        row = conn2.execute("SELECT name FROM categories").fetchone()
        conn2.close()
        assert row["name"] == "Books"

    def test_connection_is_wal_mode(self, db_path: Path) -> None:
        """WAL journal mode lets readers run alongside a writer."""
        conn = open_catalog(db_path)
        mode = conn.execute("PRAGMA journal_mode").fetchone()[0]
        conn.close()
        assert mode == "wal"

    def test_connection_has_row_factory(self, db_path: Path) -> None:
        """Connection uses sqlite3.Row factory for dict-like access."""
        conn = open_catalog(db_path)
        assert conn.row_factory == sqlite3.Row
        conn.close()

    def test_casefold_function_registered(self, db_path: Path) -> None:
        """The casefold SQL function folds non-ASCII text."""
        conn = open_catalog(db_path)
        value = conn.execute("SELECT casefold('STRAßE')").fetchone()[0]
        conn.close()
        assert value == "strasse"

    def test_default_path(self) -> None:
        """Default path resolves to ~/.catalogstore/catalog.db."""
        assert Path.home() / ".catalogstore" / "catalog.db" == DEFAULT_DB_PATH
