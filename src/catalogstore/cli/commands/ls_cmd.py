# ABOUTME: The `catalog ls` command for listing cataloged items.
# ABOUTME: Displays a Rich table of all items in insertion order.

from pathlib import Path

import click
from rich.console import Console

from catalogstore.cli.options import build_config, cli_store, store_options
from catalogstore.cli.tables import items_table

console = Console()


@click.command("ls")
@store_options
@click.option(
    "--category",
    "category_filter",
    default=None,
    help="Only show items in this category (exact, case-sensitive).",
)
def ls(
    backend: str,
    db_path: Path | None,
    json_path: Path | None,
    images_dir: Path | None,
    category_filter: str | None,
) -> None:
    """List all items in the catalog."""
    config = build_config(backend, db_path, json_path, images_dir)
    with cli_store(console, config) as store:
        records = store.list_items()

    if category_filter:
        records = [r for r in records if r.category == category_filter]

    if not records:
        console.print("[yellow]No items in the catalog.[/yellow]")
        return

    console.print(items_table(records))
    console.print(f"\n[dim]{len(records)} item(s)[/dim]")
