# ABOUTME: The `catalog search` command for keyword search of item names.
# ABOUTME: Case-insensitive substring match; an empty keyword is rejected.

from pathlib import Path

import click
from rich.console import Console

from catalogstore.cli.options import build_config, cli_store, store_options
from catalogstore.cli.tables import items_table

console = Console()


@click.command("search")
@click.argument("keyword")
@store_options
def search(
    keyword: str,
    backend: str,
    db_path: Path | None,
    json_path: Path | None,
    images_dir: Path | None,
) -> None:
    """Search the catalog for items whose name contains KEYWORD."""
    config = build_config(backend, db_path, json_path, images_dir)
    with cli_store(console, config) as store:
        results = store.search_items(keyword)

    if not results:
        console.print("[yellow]No results found.[/yellow]")
        return

    console.print(items_table(results))
    console.print(f"\n[dim]{len(results)} result(s)[/dim]")
