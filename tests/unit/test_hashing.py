# ABOUTME: Unit tests for SHA-256 hashing used in image deduplication.
# ABOUTME: Validates determinism, uniqueness, hex format, and error handling.

import hashlib
import re
from pathlib import Path

import pytest

from catalogstore.db.hashing import compute_bytes_hash, compute_file_hash


class TestComputeBytesHash:
    """Tests for compute_bytes_hash."""

    def test_returns_hex_string(self) -> None:
        """Result is a 64-character lowercase hex string."""
        assert re.fullmatch(r"[0-9a-f]{64}", compute_bytes_hash(b"image"))

    def test_matches_hashlib(self) -> None:
        """Digest agrees with hashlib's SHA-256."""
        assert compute_bytes_hash(b"abc") == hashlib.sha256(b"abc").hexdigest()

    def test_different_content_different_hash(self) -> None:
        """Two payloads that differ by one byte hash differently."""
        assert compute_bytes_hash(b"image-1") != compute_bytes_hash(b"image-2")


class TestComputeFileHash:
    """Tests for compute_file_hash."""

    def test_agrees_with_bytes_hash(self, tmp_path: Path) -> None:
        """Hashing a file equals hashing its bytes in memory."""
        data = b"x" * 200_000  # spans several read chunks
        path = tmp_path / "big.jpg"
        path.write_bytes(data)
        assert compute_file_hash(path) == compute_bytes_hash(data)

    def test_nonexistent_file_raises(self, tmp_path: Path) -> None:
        """Hashing a nonexistent file raises FileNotFoundError."""
        with pytest.raises(FileNotFoundError):
            compute_file_hash(tmp_path / "nonexistent.jpg")
