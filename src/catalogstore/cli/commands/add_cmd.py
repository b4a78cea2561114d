# ABOUTME: The `catalog add` command for cataloging a single item.
# ABOUTME: Reads the image file, stores it content-addressed, and records the item.

from pathlib import Path

import click
from rich.console import Console

from catalogstore.cli.options import build_config, cli_store, store_options

console = Console()


@click.command("add")
@click.argument("name")
@click.argument("category")
@click.argument(
    "image_file",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
)
@store_options
def add(
    name: str,
    category: str,
    image_file: Path,
    backend: str,
    db_path: Path | None,
    json_path: Path | None,
    images_dir: Path | None,
) -> None:
    """Add an item with NAME in CATEGORY using IMAGE_FILE as its picture."""
    data = image_file.read_bytes()
    config = build_config(backend, db_path, json_path, images_dir)

    with cli_store(console, config) as store:
        item = store.add_item(name, category, data)

    console.print(
        f"Added item [bold]{item.id}[/bold]: {item.name} "
        f"([cyan]{item.category}[/cyan]) -> {item.image_name}"
    )
