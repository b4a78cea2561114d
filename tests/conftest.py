# ABOUTME: Shared pytest fixtures for catalogstore tests.
# ABOUTME: Provides sample image bytes and stores for each backend, all under tmp_path.

from collections.abc import Iterator
from pathlib import Path

import pytest

from catalogstore.config import CatalogConfig
from catalogstore.core.store import CatalogStore, open_store


@pytest.fixture
def image_a() -> bytes:
    """Bytes standing in for an uploaded JPEG."""
    return b"\xff\xd8\xff\xe0" + b"red shirt photo" * 8


@pytest.fixture
def image_b() -> bytes:
    """A second, different image."""
    return b"\xff\xd8\xff\xe0" + b"blue mug photo" * 8


def make_config(tmp_path: Path, backend: str) -> CatalogConfig:
    """A CatalogConfig with every path inside tmp_path."""
    return CatalogConfig(
        backend=backend,
        db_path=tmp_path / "catalog.db",
        json_path=tmp_path / "items.json",
        images_dir=tmp_path / "images",
    )


@pytest.fixture(params=["sqlite", "json"])
def config(request: pytest.FixtureRequest, tmp_path: Path) -> CatalogConfig:
    """Configuration for each backend in turn."""
    return make_config(tmp_path, request.param)


@pytest.fixture
def store(config: CatalogConfig) -> Iterator[CatalogStore]:
    """A CatalogStore for each backend in turn, closed after the test."""
    catalog = open_store(config)
    yield catalog
    catalog.close()


@pytest.fixture
def sqlite_store(tmp_path: Path) -> Iterator[CatalogStore]:
    """A CatalogStore backed by SQLite only."""
    catalog = open_store(make_config(tmp_path, "sqlite"))
    yield catalog
    catalog.close()


@pytest.fixture
def json_store(tmp_path: Path) -> Iterator[CatalogStore]:
    """A CatalogStore backed by the JSON document only."""
    catalog = open_store(make_config(tmp_path, "json"))
    yield catalog
    catalog.close()


@pytest.fixture
def image_dir(tmp_path: Path, image_a: bytes, image_b: bytes) -> Path:
    """A directory of images plus a non-image file.

    Layout:
        photos/
            red-shirt.jpg
            mugs/
                blue-mug.png
            notes.txt
    """
    root = tmp_path / "photos"
    (root / "mugs").mkdir(parents=True)
    (root / "red-shirt.jpg").write_bytes(image_a)
    (root / "mugs" / "blue-mug.png").write_bytes(image_b)
    (root / "notes.txt").write_text("not an image")
    return root
