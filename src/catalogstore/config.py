# ABOUTME: Deployment configuration for the catalog store.
# ABOUTME: Chooses the backend and its paths once at startup.

from dataclasses import dataclass, field
from pathlib import Path

from catalogstore.db.connection import DEFAULT_DB_PATH
from catalogstore.storage.blobs import DEFAULT_IMAGES_DIR
from catalogstore.storage.jsonfile import DEFAULT_JSON_PATH

BACKENDS = ("sqlite", "json")
DEFAULT_BACKEND = "sqlite"


@dataclass
class CatalogConfig:
    """Where and how the catalog persists its state.

    ``db_path`` is used by the sqlite backend and ``json_path`` by the json
    backend; both share ``images_dir`` for blobs.
    """

    backend: str = DEFAULT_BACKEND
    db_path: Path = field(default=DEFAULT_DB_PATH)
    json_path: Path = field(default=DEFAULT_JSON_PATH)
    images_dir: Path = field(default=DEFAULT_IMAGES_DIR)
