# ABOUTME: SQLite backend for the catalog: category index, item table, and sessions.
# ABOUTME: Each thread gets its own connection; writes run inside BEGIN IMMEDIATE transactions.

import logging
import sqlite3
import threading
import weakref
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path

from catalogstore.db.connection import DEFAULT_DB_PATH, open_catalog
from catalogstore.db.mapping import CategoryRecord, ItemRecord, row_to_category, row_to_item
from catalogstore.errors import ConflictError, NotFoundError, StorageError, ValidationError
from catalogstore.storage.backend import CatalogSession

logger = logging.getLogger(__name__)

# A lost insert race is followed by a lookup that must find the winner's row;
# more than a couple of rounds means something other than a race is wrong.
_MAX_CONFLICT_RETRIES = 3

_ITEM_SELECT = (
    "SELECT items.id, items.name, items.category_id, "
    "categories.name AS category, items.image_name "
    "FROM items JOIN categories ON items.category_id = categories.id"
)


class _ThreadConnection:
    """One thread's connection, stored in thread-local state."""

    def __init__(self, conn: sqlite3.Connection) -> None:
        self.conn = conn


def _release_connection(
    lock: threading.Lock,
    connections: list[sqlite3.Connection],
    conn: sqlite3.Connection,
) -> None:
    with lock:
        if conn in connections:
            connections.remove(conn)
    conn.close()


class SqliteCategoryIndex:
    """Category lookups and upserts against the categories table."""

    def __init__(self, conn: sqlite3.Connection) -> None:
        self._conn = conn

    def get_by_name(self, name: str) -> CategoryRecord | None:
        """Retrieve a category by its exact (case-sensitive) name."""
        cursor = self._conn.execute(
            "SELECT id, name FROM categories WHERE name = ?", (name,)
        )
        row = cursor.fetchone()
        return row_to_category(row) if row else None

    def list_all(self) -> list[CategoryRecord]:
        """Return all categories in id order."""
        cursor = self._conn.execute("SELECT id, name FROM categories ORDER BY id")
        return [row_to_category(row) for row in cursor.fetchall()]

    def resolve_or_create(self, name: str) -> int:
        """Return the id for ``name``, inserting the category on first use.

        A concurrent writer may create the same name between our lookup and
        insert. The UNIQUE constraint rejects the second insert, which is
        retried as a lookup so exactly one row survives.

        Raises:
            ValidationError: If ``name`` is empty after trimming.
        """
        name = (name or "").strip()
        if not name:
            raise ValidationError("category")

        for attempt in range(1, _MAX_CONFLICT_RETRIES + 1):
            existing = self.get_by_name(name)
            if existing is not None:
                return existing.id
            try:
                return self._insert(name)
            except ConflictError:
                logger.warning(
                    "Category %r created concurrently, retrying as lookup (attempt %d/%d)",
                    name,
                    attempt,
                    _MAX_CONFLICT_RETRIES,
                )

        raise StorageError(f"Could not resolve category {name!r} after repeated conflicts")

    def _insert(self, name: str) -> int:
        try:
            cursor = self._conn.execute("INSERT INTO categories (name) VALUES (?)", (name,))
        except sqlite3.IntegrityError as exc:
            if "UNIQUE constraint failed: categories.name" in str(exc):
                raise ConflictError(f"Category {name!r} already exists") from exc
            raise
        logger.info("Created category %r (id=%d)", name, cursor.lastrowid)
        return cursor.lastrowid  # type: ignore[return-value]


class SqliteItemTable:
    """Typed CRUD for the items table, always joined with category names."""

    def __init__(self, conn: sqlite3.Connection) -> None:
        self._conn = conn

    def insert(self, name: str, category_id: int, image_name: str) -> int:
        """Append an item row and return its new id.

        The foreign key on category_id is enforced by SQLite; a dangling
        reference surfaces as sqlite3.IntegrityError and aborts the transaction.
        """
        cursor = self._conn.execute(
            "INSERT INTO items (name, category_id, image_name) VALUES (?, ?, ?)",
            (name, category_id, image_name),
        )
        return cursor.lastrowid  # type: ignore[return-value]

    def get_by_id(self, item_id: int) -> ItemRecord:
        """Retrieve an item by id.

        Raises:
            NotFoundError: If no item has this id.
        """
        cursor = self._conn.execute(f"{_ITEM_SELECT} WHERE items.id = ?", (item_id,))
        row = cursor.fetchone()
        if row is None:
            raise NotFoundError("Item", item_id)
        return row_to_item(row)

    def list_all(self) -> list[ItemRecord]:
        """Return all items in insertion (primary key) order."""
        cursor = self._conn.execute(f"{_ITEM_SELECT} ORDER BY items.id")
        return [row_to_item(row) for row in cursor.fetchall()]

    def search(self, keyword: str) -> list[ItemRecord]:
        """Case-insensitive substring match on item name, in insertion order.

        Uses the connection's ``casefold`` function rather than LIKE so that
        wildcard characters in the keyword match literally and non-ASCII
        names fold correctly.

        Raises:
            ValidationError: If ``keyword`` is empty after trimming.
        """
        keyword = (keyword or "").strip()
        if not keyword:
            raise ValidationError("keyword", "Missing keyword parameter")
        cursor = self._conn.execute(
            f"{_ITEM_SELECT} WHERE instr(casefold(items.name), ?) > 0 ORDER BY items.id",
            (keyword.casefold(),),
        )
        return [row_to_item(row) for row in cursor.fetchall()]

    def delete(self, item_id: int) -> ItemRecord:
        """Delete an item and return the record as it was.

        Raises:
            NotFoundError: If no item has this id.
        """
        record = self.get_by_id(item_id)
        self._conn.execute("DELETE FROM items WHERE id = ?", (item_id,))
        return record

    def count_references(self, image_name: str) -> int:
        """Number of items pointing at a blob key."""
        cursor = self._conn.execute(
            "SELECT COUNT(*) FROM items WHERE image_name = ?", (image_name,)
        )
        return cursor.fetchone()[0]


class SqliteBackend:
    """Relational backing for the catalog store.

    Owns the database path and opens one connection per calling thread, all
    sharing the same WAL-mode file. Reads run without an explicit transaction;
    writes take SQLite's write lock up front with BEGIN IMMEDIATE so the
    lookup-then-insert in category resolution sees committed state.
    """

    def __init__(self, path: Path | None = None) -> None:
        self._path = path or DEFAULT_DB_PATH
        self._local = threading.local()
        self._lock = threading.Lock()
        self._connections: list[sqlite3.Connection] = []
        self._closed = False
        # Open eagerly so the schema exists before worker threads connect.
        self._connection()

    @property
    def name(self) -> str:
        return "sqlite"

    @property
    def path(self) -> Path:
        return self._path

    def _connection(self) -> sqlite3.Connection:
        if self._closed:
            raise StorageError(f"Catalog database {self._path} is closed")
        holder = getattr(self._local, "holder", None)
        if holder is None:
            try:
                conn = open_catalog(self._path)
            except (sqlite3.Error, OSError) as exc:
                raise StorageError(f"Cannot open catalog database {self._path}: {exc}") from exc
            holder = _ThreadConnection(conn)
            self._local.holder = holder
            with self._lock:
                self._connections.append(conn)
            # The thread-local holder dies with its thread; close the connection then.
            weakref.finalize(holder, _release_connection, self._lock, self._connections, conn)
        return holder.conn

    @property
    def open_connections(self) -> int:
        """Number of connections currently held by live threads."""
        with self._lock:
            return len(self._connections)

    @contextmanager
    def transaction(self) -> Iterator[CatalogSession]:
        """Run the block in one write transaction, rolled back if it raises."""
        conn = self._connection()
        try:
            conn.execute("BEGIN IMMEDIATE")
        except sqlite3.Error as exc:
            raise StorageError(f"Cannot begin transaction: {exc}") from exc

        try:
            yield CatalogSession(SqliteCategoryIndex(conn), SqliteItemTable(conn))
        except sqlite3.Error as exc:
            conn.execute("ROLLBACK")
            raise StorageError(f"Database error: {exc}") from exc
        except BaseException:
            conn.execute("ROLLBACK")
            raise

        try:
            conn.execute("COMMIT")
        except sqlite3.Error as exc:
            if conn.in_transaction:
                conn.execute("ROLLBACK")
            raise StorageError(f"Commit failed: {exc}") from exc

    @contextmanager
    def read(self) -> Iterator[CatalogSession]:
        """Query outside any transaction; each statement sees committed data."""
        conn = self._connection()
        try:
            yield CatalogSession(SqliteCategoryIndex(conn), SqliteItemTable(conn))
        except sqlite3.Error as exc:
            raise StorageError(f"Database error: {exc}") from exc

    def close(self) -> None:
        """Close every connection handed out to any thread."""
        with self._lock:
            self._closed = True
            connections = list(self._connections)
            self._connections.clear()
        for conn in connections:
            conn.close()
