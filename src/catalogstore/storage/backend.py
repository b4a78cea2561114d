# ABOUTME: Protocols every catalog backend implements (SQLite and JSON file).
# ABOUTME: A backend hands out sessions that bundle a category index and item table.

from contextlib import AbstractContextManager
from dataclasses import dataclass
from typing import Protocol, runtime_checkable

from catalogstore.db.mapping import CategoryRecord, ItemRecord


@runtime_checkable
class CategoryIndex(Protocol):
    """Name-to-id mapping with upsert-on-first-use semantics."""

    def resolve_or_create(self, name: str) -> int: ...

    def get_by_name(self, name: str) -> CategoryRecord | None: ...

    def list_all(self) -> list[CategoryRecord]: ...


@runtime_checkable
class ItemTable(Protocol):
    """Append-only, insertion-ordered collection of items."""

    def insert(self, name: str, category_id: int, image_name: str) -> int: ...

    def get_by_id(self, item_id: int) -> ItemRecord: ...

    def list_all(self) -> list[ItemRecord]: ...

    def search(self, keyword: str) -> list[ItemRecord]: ...

    def delete(self, item_id: int) -> ItemRecord: ...

    def count_references(self, image_name: str) -> int: ...


@dataclass(frozen=True)
class CatalogSession:
    """Category index and item table bound to one read or one transaction."""

    categories: CategoryIndex
    items: ItemTable


@runtime_checkable
class CatalogBackend(Protocol):
    """Storage capability selected once at startup.

    ``transaction()`` commits everything done through the session when the
    block exits normally and discards it when the block raises. ``read()``
    gives a consistent view for queries.
    """

    @property
    def name(self) -> str: ...

    def transaction(self) -> AbstractContextManager[CatalogSession]: ...

    def read(self) -> AbstractContextManager[CatalogSession]: ...

    def close(self) -> None: ...
