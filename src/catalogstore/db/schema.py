# ABOUTME: SQL DDL statements for the catalogstore relational backend.
# ABOUTME: Defines categories, items, their indexes, and schema versioning.

SCHEMA_V1 = """
-- Normalized categories; name uniqueness guards concurrent first use
CREATE TABLE IF NOT EXISTS categories (
    id    INTEGER PRIMARY KEY AUTOINCREMENT,
    name  TEXT NOT NULL UNIQUE
);

-- Items, append-only ids (AUTOINCREMENT never reuses a deleted id)
CREATE TABLE IF NOT EXISTS items (
    id           INTEGER PRIMARY KEY AUTOINCREMENT,
    name         TEXT NOT NULL,
    category_id  INTEGER NOT NULL REFERENCES categories(id),
    image_name   TEXT NOT NULL
);

CREATE INDEX IF NOT EXISTS idx_items_category_id ON items(category_id);
CREATE INDEX IF NOT EXISTS idx_items_image_name ON items(image_name);

-- Schema versioning for future migrations
CREATE TABLE IF NOT EXISTS schema_version (
    version    INTEGER NOT NULL,
    applied_at TEXT NOT NULL DEFAULT (strftime('%Y-%m-%dT%H:%M:%S', 'now'))
);

INSERT INTO schema_version (version)
SELECT 1 WHERE NOT EXISTS (SELECT 1 FROM schema_version);
"""

# (version, sql) pairs applied in order by open_catalog when the stored
# version is lower. Each script must insert its own schema_version row.
MIGRATIONS: list[tuple[int, str]] = []
