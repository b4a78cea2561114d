# ABOUTME: Record types for cataloged items and categories.
# ABOUTME: Converts between records, SQLite rows, and JSON document entries.

from dataclasses import asdict, dataclass
from typing import Any


@dataclass(frozen=True)
class CategoryRecord:
    """A normalized category: stable id plus its unique, case-sensitive name."""

    id: int
    name: str


@dataclass(frozen=True)
class ItemRecord:
    """A cataloged item with its category name joined in."""

    id: int
    name: str
    category_id: int
    category: str
    image_name: str


def row_to_item(row: Any) -> ItemRecord:
    """Convert an items-join-categories row (dict-like) to an ItemRecord."""
    return ItemRecord(
        id=row["id"],
        name=row["name"],
        category_id=row["category_id"],
        category=row["category"],
        image_name=row["image_name"],
    )


def row_to_category(row: Any) -> CategoryRecord:
    """Convert a categories row to a CategoryRecord."""
    return CategoryRecord(id=row["id"], name=row["name"])


def item_to_entry(item: ItemRecord) -> dict[str, Any]:
    """Serialize an ItemRecord as a JSON document entry."""
    return asdict(item)


def entry_to_item(entry: dict[str, Any]) -> ItemRecord:
    """Deserialize a JSON document entry written by item_to_entry."""
    return ItemRecord(
        id=int(entry["id"]),
        name=entry["name"],
        category_id=int(entry["category_id"]),
        category=entry["category"],
        image_name=entry["image_name"],
    )
