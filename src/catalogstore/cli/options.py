# ABOUTME: Shared Click options and store helpers for catalogstore CLI commands.
# ABOUTME: Every storage setting can also come from a CATALOG_* environment variable.

import logging
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from pathlib import Path
from typing import Any

import click
from rich.console import Console

from catalogstore.config import BACKENDS, DEFAULT_BACKEND, CatalogConfig
from catalogstore.core.store import CatalogStore, open_store
from catalogstore.db.connection import DEFAULT_DB_PATH
from catalogstore.errors import NotFoundError, StorageError, ValidationError
from catalogstore.storage.blobs import DEFAULT_IMAGES_DIR
from catalogstore.storage.jsonfile import DEFAULT_JSON_PATH

logger = logging.getLogger(__name__)

backend_option = click.option(
    "--backend",
    type=click.Choice(BACKENDS),
    default=DEFAULT_BACKEND,
    envvar="CATALOG_BACKEND",
    show_default=True,
    help="Storage backend.",
)

db_option = click.option(
    "--db",
    "db_path",
    type=click.Path(path_type=Path),
    default=None,
    envvar="CATALOG_DB",
    help=f"Path to catalog database (default: {DEFAULT_DB_PATH})",
)

json_option = click.option(
    "--json-file",
    "json_path",
    type=click.Path(path_type=Path),
    default=None,
    envvar="CATALOG_JSON",
    help=f"Path to JSON catalog document (default: {DEFAULT_JSON_PATH})",
)

images_option = click.option(
    "--images",
    "images_dir",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    envvar="CATALOG_IMAGES",
    help=f"Directory for stored images (default: {DEFAULT_IMAGES_DIR})",
)


def store_options(func: Callable[..., Any]) -> Callable[..., Any]:
    """Apply all storage options to a command."""
    for option in (images_option, json_option, db_option, backend_option):
        func = option(func)
    return func


def build_config(
    backend: str,
    db_path: Path | None,
    json_path: Path | None,
    images_dir: Path | None,
) -> CatalogConfig:
    """Turn raw option values into a CatalogConfig, filling in defaults."""
    return CatalogConfig(
        backend=backend,
        db_path=db_path or DEFAULT_DB_PATH,
        json_path=json_path or DEFAULT_JSON_PATH,
        images_dir=images_dir or DEFAULT_IMAGES_DIR,
    )


@contextmanager
def cli_store(console: Console, config: CatalogConfig) -> Iterator[CatalogStore]:
    """Open the store and translate catalog errors into messages and exit code 1.

    Storage failures are reported opaquely; details go to the debug log.
    """
    try:
        with open_store(config) as store:
            yield store
    except (ValidationError, NotFoundError) as exc:
        console.print(f"[red]{exc}[/red]")
        raise SystemExit(1) from exc
    except StorageError as exc:
        logger.debug("Storage failure: %s", exc, exc_info=True)
        console.print("[red]Internal storage failure.[/red]")
        raise SystemExit(1) from exc
