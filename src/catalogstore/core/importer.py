# ABOUTME: Batch import of image files into the catalog.
# ABOUTME: Each file becomes an item named after its stem, all in one category.

import logging
from dataclasses import dataclass, field
from pathlib import Path

from catalogstore.core.store import CatalogStore
from catalogstore.db.mapping import ItemRecord
from catalogstore.errors import CatalogError

logger = logging.getLogger(__name__)

IMAGE_EXTENSIONS: frozenset[str] = frozenset({".jpg", ".jpeg", ".png", ".gif", ".webp"})


@dataclass
class ImportResult:
    """Summary of an import operation."""

    added: list[ItemRecord] = field(default_factory=list)
    errors: int = 0
    error_details: list[tuple[Path, str]] = field(default_factory=list)


def find_images(directory: Path) -> list[Path]:
    """Recursively find image files in a directory, sorted by path."""
    return sorted(
        p for p in directory.rglob("*")
        if p.is_file() and p.suffix.lower() in IMAGE_EXTENSIONS
    )


def import_images(paths: list[Path], store: CatalogStore, category: str) -> ImportResult:
    """Catalog image files as items in ``category``.

    Unreadable files and per-file catalog errors are recorded and the batch
    continues. Duplicate images are not skipped: each file becomes its own
    item and identical bytes share one stored blob.
    """
    result = ImportResult()

    for image_path in paths:
        try:
            data = image_path.read_bytes()
        except OSError as exc:
            result.errors += 1
            result.error_details.append((image_path, str(exc)))
            continue

        try:
            item = store.add_item(image_path.stem, category, data)
        except CatalogError as exc:
            logger.warning("Import of %s failed: %s", image_path, exc)
            result.errors += 1
            result.error_details.append((image_path, str(exc)))
            continue

        result.added.append(item)

    return result
