# ABOUTME: The `catalog categories` command for listing known categories.

from pathlib import Path

import click
from rich.console import Console
from rich.table import Table

from catalogstore.cli.options import build_config, cli_store, store_options

console = Console()


@click.command("categories")
@store_options
def categories(
    backend: str,
    db_path: Path | None,
    json_path: Path | None,
    images_dir: Path | None,
) -> None:
    """List all categories with their item counts."""
    config = build_config(backend, db_path, json_path, images_dir)
    with cli_store(console, config) as store:
        records = store.list_categories()
        items = store.list_items()

    if not records:
        console.print("[yellow]No categories in the catalog.[/yellow]")
        return

    counts: dict[int, int] = {}
    for item in items:
        counts[item.category_id] = counts.get(item.category_id, 0) + 1

    table = Table()
    table.add_column("ID", style="dim", width=4)
    table.add_column("Category", style="cyan")
    table.add_column("Items", style="dim", justify="right")

    for record in records:
        table.add_row(str(record.id), record.name, str(counts.get(record.id, 0)))

    console.print(table)
