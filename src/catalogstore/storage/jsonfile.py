# ABOUTME: Flat JSON document backend for the catalog, rewritten wholesale on each change.
# ABOUTME: An exclusive lock spans every read-modify-write so concurrent uploads never lose updates.

import json
import logging
import threading
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path, PurePath
from typing import Any

from catalogstore.db.mapping import CategoryRecord, ItemRecord, entry_to_item, item_to_entry
from catalogstore.errors import NotFoundError, StorageError, ValidationError
from catalogstore.storage.atomic import atomic_write_bytes
from catalogstore.storage.backend import CatalogSession

logger = logging.getLogger(__name__)

DEFAULT_JSON_PATH = Path.home() / ".catalogstore" / "items.json"


def _empty_document() -> dict[str, Any]:
    return {"next_id": 1, "next_category_id": 1, "categories": [], "items": []}


_ITEM_FIELDS = ("id", "name", "category_id", "category", "image_name")
_CATEGORY_FIELDS = ("id", "name")


def _entries_have(entries: Any, fields: tuple[str, ...]) -> bool:
    return isinstance(entries, list) and all(
        isinstance(entry, dict)
        and all(f in entry for f in fields)
        and isinstance(entry["id"], int)
        and isinstance(entry.get("category_id", 0), int)
        for entry in entries
    )


def _is_current_layout(data: Any) -> bool:
    """True for an object document whose items and categories are well formed."""
    return (
        isinstance(data, dict)
        and _entries_have(data.get("items"), _ITEM_FIELDS)
        and _entries_have(data.get("categories", []), _CATEGORY_FIELDS)
    )


def upgrade_legacy_document(entries: list[dict[str, Any]]) -> dict[str, Any]:
    """Convert a bare array of ``{name, category, image_path}`` records.

    Items get ids by position and categories are derived in order of first
    appearance. ``image_path`` is reduced to its file name, which is the blob
    key when the image was stored content-addressed.
    """
    doc = _empty_document()
    categories = JsonCategoryIndex(doc)
    for position, entry in enumerate(entries, start=1):
        category = str(entry.get("category") or "").strip() or "uncategorized"
        category_id = categories.resolve_or_create(category)
        image_path = str(entry.get("image_path") or entry.get("image_name") or "")
        doc["items"].append({
            "id": position,
            "name": entry.get("name") or "",
            "category_id": category_id,
            "category": category,
            "image_name": PurePath(image_path).name,
        })
    doc["next_id"] = len(entries) + 1
    return doc


class JsonCategoryIndex:
    """Category index over the in-memory document of one session."""

    def __init__(self, doc: dict[str, Any]) -> None:
        self._doc = doc

    def get_by_name(self, name: str) -> CategoryRecord | None:
        for entry in self._doc["categories"]:
            if entry["name"] == name:
                return CategoryRecord(id=entry["id"], name=entry["name"])
        return None

    def list_all(self) -> list[CategoryRecord]:
        return [CategoryRecord(id=e["id"], name=e["name"]) for e in self._doc["categories"]]

    def resolve_or_create(self, name: str) -> int:
        """Return the id for ``name``, appending a new category on first use.

        Raises:
            ValidationError: If ``name`` is empty after trimming.
        """
        name = (name or "").strip()
        if not name:
            raise ValidationError("category")

        existing = self.get_by_name(name)
        if existing is not None:
            return existing.id

        category_id = self._doc["next_category_id"]
        self._doc["categories"].append({"id": category_id, "name": name})
        self._doc["next_category_id"] = category_id + 1
        logger.info("Created category %r (id=%d)", name, category_id)
        return category_id


class JsonItemTable:
    """Item table over the in-memory document of one session."""

    def __init__(self, doc: dict[str, Any]) -> None:
        self._doc = doc

    def _category_name(self, category_id: int) -> str:
        for entry in self._doc["categories"]:
            if entry["id"] == category_id:
                return entry["name"]
        raise StorageError(f"Category {category_id} does not exist")

    def insert(self, name: str, category_id: int, image_name: str) -> int:
        """Append an item and return its id. ``next_id`` only ever grows."""
        item_id = self._doc["next_id"]
        record = ItemRecord(
            id=item_id,
            name=name,
            category_id=category_id,
            category=self._category_name(category_id),
            image_name=image_name,
        )
        self._doc["items"].append(item_to_entry(record))
        self._doc["next_id"] = item_id + 1
        return item_id

    def get_by_id(self, item_id: int) -> ItemRecord:
        for entry in self._doc["items"]:
            if entry["id"] == item_id:
                return entry_to_item(entry)
        raise NotFoundError("Item", item_id)

    def list_all(self) -> list[ItemRecord]:
        return [entry_to_item(entry) for entry in self._doc["items"]]

    def search(self, keyword: str) -> list[ItemRecord]:
        """Case-insensitive substring match on item name, in document order.

        Raises:
            ValidationError: If ``keyword`` is empty after trimming.
        """
        keyword = (keyword or "").strip()
        if not keyword:
            raise ValidationError("keyword", "Missing keyword parameter")
        needle = keyword.casefold()
        return [
            entry_to_item(entry)
            for entry in self._doc["items"]
            if needle in entry["name"].casefold()
        ]

    def delete(self, item_id: int) -> ItemRecord:
        items = self._doc["items"]
        for index, entry in enumerate(items):
            if entry["id"] == item_id:
                del items[index]
                return entry_to_item(entry)
        raise NotFoundError("Item", item_id)

    def count_references(self, image_name: str) -> int:
        return sum(1 for entry in self._doc["items"] if entry["image_name"] == image_name)


class JsonFileBackend:
    """File-backed catalog: one JSON document holding categories and items.

    Every session loads the whole document under a process-wide lock. A
    transaction writes the document back (atomically, via temp file and
    rename) only if its block completes; if the block raises, the file is
    left exactly as it was.
    """

    def __init__(self, path: Path | None = None) -> None:
        self._path = path or DEFAULT_JSON_PATH
        self._lock = threading.Lock()

    @property
    def name(self) -> str:
        return "json"

    @property
    def path(self) -> Path:
        return self._path

    def _load(self) -> dict[str, Any]:
        try:
            raw = self._path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return _empty_document()
        except OSError as exc:
            raise StorageError(f"Cannot read {self._path}: {exc}") from exc

        if not raw.strip():
            return _empty_document()

        try:
            data = json.loads(raw)
        except json.JSONDecodeError as exc:
            raise StorageError(f"Corrupt catalog document {self._path}: {exc}") from exc

        if isinstance(data, list) and all(isinstance(entry, dict) for entry in data):
            logger.info("Upgrading legacy item array in %s", self._path)
            return upgrade_legacy_document(data)
        if _is_current_layout(data):
            return self._normalize(data)
        raise StorageError(f"Unrecognized catalog document layout in {self._path}")

    @staticmethod
    def _normalize(data: dict[str, Any]) -> dict[str, Any]:
        items = data["items"]
        categories = data.get("categories", [])
        data.setdefault("categories", categories)
        data.setdefault("next_id", max((e["id"] for e in items), default=0) + 1)
        data.setdefault(
            "next_category_id", max((e["id"] for e in categories), default=0) + 1
        )
        return data

    def _save(self, doc: dict[str, Any]) -> None:
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise StorageError(f"Cannot create {self._path.parent}: {exc}") from exc
        payload = json.dumps(doc, indent=2, ensure_ascii=False).encode("utf-8")
        atomic_write_bytes(self._path, payload)

    @contextmanager
    def transaction(self) -> Iterator[CatalogSession]:
        """Hold the lock across load, mutate, and write-back."""
        with self._lock:
            doc = self._load()
            yield CatalogSession(JsonCategoryIndex(doc), JsonItemTable(doc))
            self._save(doc)

    @contextmanager
    def read(self) -> Iterator[CatalogSession]:
        with self._lock:
            doc = self._load()
            yield CatalogSession(JsonCategoryIndex(doc), JsonItemTable(doc))

    def close(self) -> None:
        """Nothing to release; the file is opened per operation."""
