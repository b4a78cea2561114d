# ABOUTME: Public API for the catalogstore relational layer.
# ABOUTME: Exports connection management, the SQLite backend, records, and hashing.

from catalogstore.db.catalog import SqliteBackend, SqliteCategoryIndex, SqliteItemTable
from catalogstore.db.connection import DEFAULT_DB_PATH, open_catalog
from catalogstore.db.hashing import compute_bytes_hash, compute_file_hash
from catalogstore.db.mapping import CategoryRecord, ItemRecord

__all__ = [
    "DEFAULT_DB_PATH",
    "CategoryRecord",
    "ItemRecord",
    "SqliteBackend",
    "SqliteCategoryIndex",
    "SqliteItemTable",
    "compute_bytes_hash",
    "compute_file_hash",
    "open_catalog",
]
