# ABOUTME: Content-addressable image storage keyed by SHA-256 digest.
# ABOUTME: Identical uploads share one immutable file; writes are atomic and idempotent.

import logging
import re
import threading
from pathlib import Path

from catalogstore.db.hashing import compute_bytes_hash
from catalogstore.errors import StorageError, ValidationError
from catalogstore.storage.atomic import atomic_write_bytes

logger = logging.getLogger(__name__)

DEFAULT_IMAGES_DIR = Path.home() / ".catalogstore" / "images"
BLOB_EXTENSION = ".jpg"

_REF_PATTERN = re.compile(r"[0-9a-f]{64}" + re.escape(BLOB_EXTENSION))


class BlobStore:
    """Stores raw image bytes under ``<sha256-hex>.jpg`` in a root directory.

    A blob is never rewritten once published. Concurrent puts of the same
    bytes converge on the same file because the key is derived from content
    and each write is published with an atomic rename.
    """

    def __init__(self, root: Path | None = None) -> None:
        self._root = root or DEFAULT_IMAGES_DIR

    @property
    def root(self) -> Path:
        return self._root

    @staticmethod
    def ref_for(data: bytes) -> str:
        """Return the key ``put`` would store ``data`` under."""
        return compute_bytes_hash(data) + BLOB_EXTENSION

    def path_for(self, ref: str) -> Path:
        """Resolve a blob key to its file path.

        Raises:
            ValidationError: If ``ref`` is not a well-formed blob key.
        """
        if not _REF_PATTERN.fullmatch(ref):
            raise ValidationError("image_name", f"Invalid blob reference: {ref!r}")
        return self._root / ref

    def exists(self, ref: str) -> bool:
        try:
            return self.path_for(ref).is_file()
        except ValidationError:
            return False

    def put(self, data: bytes, *, cancel: threading.Event | None = None) -> str:
        """Store ``data`` and return its key, skipping the write if already present.

        Raises:
            StorageError: If the directory or file cannot be written.
            OperationCancelled: If ``cancel`` is set before the file is published.
        """
        ref = self.ref_for(data)
        target = self._root / ref
        if target.is_file():
            logger.debug("Blob %s already stored, reusing", ref)
            return ref

        try:
            self._root.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise StorageError(f"Cannot create blob directory {self._root}: {exc}") from exc

        atomic_write_bytes(target, data, cancel=cancel)
        logger.debug("Stored blob %s (%d bytes)", ref, len(data))
        return ref

    def remove(self, ref: str) -> None:
        """Delete a blob by key. A missing blob is not an error.

        Raises:
            StorageError: If the file exists but cannot be deleted.
        """
        path = self.path_for(ref)
        try:
            path.unlink(missing_ok=True)
        except OSError as exc:
            raise StorageError(f"Failed to remove blob {ref}: {exc}") from exc
