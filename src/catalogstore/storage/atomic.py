# ABOUTME: Crash-safe file publishing: write a temp file, fsync, then rename into place.
# ABOUTME: Readers see either the previous file or the complete new one, never a partial write.

import os
import tempfile
import threading
from pathlib import Path

from catalogstore.errors import OperationCancelled, StorageError

TEMP_PREFIX = ".tmp-"


def atomic_write_bytes(
    target: Path,
    data: bytes,
    *,
    cancel: threading.Event | None = None,
) -> None:
    """Publish ``data`` at ``target`` atomically.

    The temporary file lives in the target's directory so the final
    ``os.replace`` never crosses a filesystem boundary. The temporary file is
    removed on every failure path, including cancellation.

    Raises:
        StorageError: If writing, syncing, or renaming fails.
        OperationCancelled: If ``cancel`` is set before the rename.
    """
    try:
        fd, tmp_name = tempfile.mkstemp(
            dir=target.parent, prefix=TEMP_PREFIX, suffix=target.suffix,
        )
    except OSError as exc:
        raise StorageError(f"Cannot create temporary file for {target}: {exc}") from exc

    tmp_path = Path(tmp_name)
    try:
        with os.fdopen(fd, "wb") as f:
            f.write(data)
            f.flush()
            os.fsync(f.fileno())
        if cancel is not None and cancel.is_set():
            raise OperationCancelled(f"Write of {target.name} cancelled")
        os.replace(tmp_path, target)
    except OSError as exc:
        tmp_path.unlink(missing_ok=True)
        raise StorageError(f"Failed to write {target}: {exc}") from exc
    except BaseException:
        tmp_path.unlink(missing_ok=True)
        raise
