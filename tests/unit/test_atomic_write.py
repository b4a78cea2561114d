# ABOUTME: Unit tests for temp-file-then-rename publishing.
# ABOUTME: Validates content, overwrite, cleanup on failure, and cancellation.

import threading
from pathlib import Path
from unittest.mock import patch

import pytest

from catalogstore.errors import OperationCancelled, StorageError
from catalogstore.storage.atomic import TEMP_PREFIX, atomic_write_bytes


def _temp_files(directory: Path) -> list[Path]:
    return [p for p in directory.iterdir() if p.name.startswith(TEMP_PREFIX)]


class TestAtomicWriteBytes:
    """Tests for atomic_write_bytes."""

    def test_writes_content(self, tmp_path: Path) -> None:
        """Target holds exactly the written bytes and no temp file remains."""
        target = tmp_path / "doc.json"
        atomic_write_bytes(target, b"payload")
        assert target.read_bytes() == b"payload"
        assert _temp_files(tmp_path) == []

    def test_replaces_existing_file(self, tmp_path: Path) -> None:
        """An existing target is replaced wholesale."""
        target = tmp_path / "doc.json"
        target.write_bytes(b"old content that is longer")
        atomic_write_bytes(target, b"new")
        assert target.read_bytes() == b"new"

    def test_rename_failure_keeps_old_file_and_cleans_up(self, tmp_path: Path) -> None:
        """If the rename fails, the old file survives and the temp file is removed."""
        target = tmp_path / "doc.json"
        target.write_bytes(b"old")

        with patch("catalogstore.storage.atomic.os.replace", side_effect=OSError("EXDEV")):
            with pytest.raises(StorageError):
                atomic_write_bytes(target, b"new")

        assert target.read_bytes() == b"old"
        assert _temp_files(tmp_path) == []

    def test_missing_directory_raises_storage_error(self, tmp_path: Path) -> None:
        """A target in a nonexistent directory fails as StorageError."""
        with pytest.raises(StorageError):
            atomic_write_bytes(tmp_path / "nope" / "doc.json", b"data")

    def test_cancelled_write_leaves_nothing(self, tmp_path: Path) -> None:
        """A set cancel event aborts before publish and removes the temp file."""
        target = tmp_path / "blob.jpg"
        cancel = threading.Event()
        cancel.set()

        with pytest.raises(OperationCancelled):
            atomic_write_bytes(target, b"data", cancel=cancel)

        assert not target.exists()
        assert _temp_files(tmp_path) == []
