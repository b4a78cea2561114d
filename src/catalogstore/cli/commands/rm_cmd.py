# ABOUTME: The `catalog rm` command for deleting an item.
# ABOUTME: Removes the item row and, if unshared, its stored image.

from pathlib import Path

import click
from rich.console import Console

from catalogstore.cli.options import build_config, cli_store, store_options

console = Console()


@click.command("rm")
@click.argument("item_id", type=int)
@store_options
def rm(
    item_id: int,
    backend: str,
    db_path: Path | None,
    json_path: Path | None,
    images_dir: Path | None,
) -> None:
    """Delete an item by ID."""
    config = build_config(backend, db_path, json_path, images_dir)
    with cli_store(console, config) as store:
        item = store.delete_item(item_id)

    console.print(f"Deleted item {item.id}: [bold]{item.name}[/bold].")
