# ABOUTME: CatalogStore facade composing the blob store, category index, and item table.
# ABOUTME: Validates input, writes the blob, then resolves category and inserts the item atomically.

import logging
import threading
from pathlib import Path

from catalogstore.config import BACKENDS, CatalogConfig
from catalogstore.db.catalog import SqliteBackend
from catalogstore.db.mapping import CategoryRecord, ItemRecord
from catalogstore.errors import CatalogError, OperationCancelled, ValidationError
from catalogstore.storage.backend import CatalogBackend
from catalogstore.storage.blobs import BlobStore
from catalogstore.storage.jsonfile import JsonFileBackend

logger = logging.getLogger(__name__)


def _require_text(value: str | None, field: str) -> str:
    """Return ``value`` unchanged, or raise ValidationError naming ``field`` if blank."""
    if value is None or not str(value).strip():
        raise ValidationError(field)
    return str(value)


def _check_cancel(cancel: threading.Event | None) -> None:
    if cancel is not None and cancel.is_set():
        raise OperationCancelled("Operation cancelled by caller")


class CatalogStore:
    """Durable item catalog with normalized categories and deduplicated images.

    The backend and blob store are owned by the catalog once injected;
    ``close()`` releases them. All methods are safe to call concurrently from
    multiple threads. Each accepts an optional ``cancel`` event that aborts
    the operation before its next storage step.
    """

    def __init__(self, backend: CatalogBackend, blobs: BlobStore) -> None:
        self._backend = backend
        self._blobs = blobs

    @property
    def backend(self) -> CatalogBackend:
        return self._backend

    @property
    def blobs(self) -> BlobStore:
        return self._blobs

    def add_item(
        self,
        name: str,
        category: str,
        image: bytes,
        *,
        cancel: threading.Event | None = None,
    ) -> ItemRecord:
        """Persist a new item and return it.

        The blob is written first. Category resolution and the item insert
        then run in one backend transaction, so either both land or neither
        does. The blob is checked again inside that transaction in case a
        concurrent delete removed it. A failure after the blob write can leave an unreferenced blob,
        which is harmless because blobs are content-addressed.

        Raises:
            ValidationError: If name, category, or image is missing.
            StorageError: If the blob or the database/document write fails.
            OperationCancelled: If ``cancel`` is set before the commit.
        """
        name = _require_text(name, "name")
        category = _require_text(category, "category")
        if not image:
            raise ValidationError("image")

        _check_cancel(cancel)
        image_name = self._blobs.put(image, cancel=cancel)

        _check_cancel(cancel)
        with self._backend.transaction() as session:
            # A delete committed since the put may have removed a shared blob.
            if not self._blobs.exists(image_name):
                logger.debug("Blob %s removed concurrently, storing again", image_name)
                self._blobs.put(image, cancel=cancel)
            category_id = session.categories.resolve_or_create(category)
            _check_cancel(cancel)
            item_id = session.items.insert(name, category_id, image_name)
            record = session.items.get_by_id(item_id)

        logger.info(
            "Added item %d %r in category %r (image %s)",
            record.id, record.name, record.category, record.image_name,
        )
        return record

    def upload_image(self, image: bytes, *, cancel: threading.Event | None = None) -> str:
        """Store an image without cataloging an item; returns its blob key."""
        if not image:
            raise ValidationError("image")
        _check_cancel(cancel)
        return self._blobs.put(image, cancel=cancel)

    def list_items(self) -> list[ItemRecord]:
        """All items in the order they were added."""
        with self._backend.read() as session:
            return session.items.list_all()

    def get_item(self, item_id: int) -> ItemRecord:
        """Raises NotFoundError for an unknown id."""
        with self._backend.read() as session:
            return session.items.get_by_id(item_id)

    def search_items(self, keyword: str) -> list[ItemRecord]:
        """Items whose name contains ``keyword``, ignoring case.

        Raises:
            ValidationError: If ``keyword`` is empty; matching everything is
                not supported.
        """
        keyword = _require_text(keyword, "keyword")
        with self._backend.read() as session:
            return session.items.search(keyword)

    def list_categories(self) -> list[CategoryRecord]:
        with self._backend.read() as session:
            return session.categories.list_all()

    def delete_item(
        self, item_id: int, *, cancel: threading.Event | None = None
    ) -> ItemRecord:
        """Delete an item, then remove its blob if nothing else references it.

        The blob is removed inside the write transaction, so a concurrent
        ``add_item`` of the same bytes either commits first (and the blob is
        kept) or re-checks the blob after this commit and stores it again.
        Blob removal is best-effort: a failure is logged and the deletion
        still succeeds.

        Raises:
            NotFoundError: If no item has this id.
        """
        _check_cancel(cancel)
        with self._backend.transaction() as session:
            record = session.items.delete(item_id)
            if session.items.count_references(record.image_name) == 0:
                try:
                    self._blobs.remove(record.image_name)
                except CatalogError as exc:
                    logger.warning("Could not remove blob %s: %s", record.image_name, exc)

        logger.info("Deleted item %d %r", record.id, record.name)
        return record

    def blob_path(self, item: ItemRecord) -> Path:
        """Filesystem location of an item's image (which may be missing)."""
        return self._blobs.root / item.image_name

    def close(self) -> None:
        self._backend.close()

    def __enter__(self) -> "CatalogStore":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()


def open_store(config: CatalogConfig | None = None) -> CatalogStore:
    """Build a CatalogStore for the configured backend.

    Raises:
        ValidationError: If the backend name is not recognized.
        StorageError: If the backend cannot be opened.
    """
    config = config or CatalogConfig()
    if config.backend == "sqlite":
        backend: CatalogBackend = SqliteBackend(config.db_path)
    elif config.backend == "json":
        backend = JsonFileBackend(config.json_path)
    else:
        raise ValidationError(
            "backend", f"Unknown backend {config.backend!r} (expected one of {', '.join(BACKENDS)})"
        )
    logger.debug("Opened %s backend with images in %s", backend.name, config.images_dir)
    return CatalogStore(backend, BlobStore(config.images_dir))
