# ABOUTME: Catalog integrity verification.
# ABOUTME: Checks that every item's image blob exists and optionally re-hashes it.

from dataclasses import dataclass, field

from catalogstore.core.store import CatalogStore
from catalogstore.db.hashing import compute_file_hash
from catalogstore.db.mapping import ItemRecord
from catalogstore.storage.blobs import BLOB_EXTENSION


@dataclass
class VerifyResult:
    """Aggregated results from a catalog verification run."""

    ok: int = 0
    missing_blob: list[ItemRecord] = field(default_factory=list)
    hash_mismatch: list[ItemRecord] = field(default_factory=list)

    @property
    def total_issues(self) -> int:
        """Total number of issues found across all categories."""
        return len(self.missing_blob) + len(self.hash_mismatch)


def verify_catalog(store: CatalogStore, *, check_hash: bool = False) -> VerifyResult:
    """Verify that every cataloged item can resolve its image.

    For each item:
    1. Check the blob file exists.
    2. If check_hash is True and the blob exists, re-hash it and compare the
       digest with the key the item references.

    A missing blob is reported, never raised: items stay readable without
    their image.
    """
    result = VerifyResult()

    for item in store.list_items():
        blob_path = store.blob_path(item)
        if not blob_path.is_file():
            result.missing_blob.append(item)
            continue

        if check_hash:
            expected = item.image_name.removesuffix(BLOB_EXTENSION)
            if compute_file_hash(blob_path) != expected:
                result.hash_mismatch.append(item)
                continue

        result.ok += 1

    return result
