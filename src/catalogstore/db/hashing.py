# ABOUTME: SHA-256 content hashing for image deduplication.
# ABOUTME: Hashes in-memory uploads and re-hashes stored blobs in chunks.

import hashlib
from pathlib import Path

_CHUNK_SIZE = 65536  # 64 KB


def compute_bytes_hash(data: bytes) -> str:
    """Compute the SHA-256 hex digest of an in-memory payload."""
    return hashlib.sha256(data).hexdigest()


def compute_file_hash(path: Path) -> str:
    """Compute the SHA-256 hash of a file.

    Reads the file in 64KB chunks so large images are never loaded
    entirely into memory.

    Args:
        path: Path to the file to hash.

    Returns:
        Lowercase hex digest string (64 characters).

    Raises:
        FileNotFoundError: If the file does not exist.
    """
    hasher = hashlib.sha256()
    with open(path, "rb") as f:
        while True:
            chunk = f.read(_CHUNK_SIZE)
            if not chunk:
                break
            hasher.update(chunk)
    return hasher.hexdigest()
