# ABOUTME: The `catalog info` command for displaying one item in detail.
# ABOUTME: Shows all fields for a cataloged item by ID, including where its image lives.

from pathlib import Path

import click
from rich.console import Console
from rich.table import Table

from catalogstore.cli.options import build_config, cli_store, store_options

console = Console()


@click.command("info")
@click.argument("item_id", type=int)
@store_options
def info(
    item_id: int,
    backend: str,
    db_path: Path | None,
    json_path: Path | None,
    images_dir: Path | None,
) -> None:
    """Show details for an item by ID."""
    config = build_config(backend, db_path, json_path, images_dir)
    with cli_store(console, config) as store:
        item = store.get_item(item_id)
        blob_path = store.blob_path(item)

    table = Table(show_header=False, box=None, pad_edge=False)
    table.add_column("Field", style="bold", width=12)
    table.add_column("Value")

    table.add_row("ID", str(item.id))
    table.add_row("Name", item.name)
    table.add_row("Category", f"{item.category} (id {item.category_id})")
    table.add_row("Image", item.image_name)
    if blob_path.is_file():
        table.add_row("Path", str(blob_path))
    else:
        table.add_row("Path", f"[red]{blob_path} (missing)[/red]")

    console.print(table)
