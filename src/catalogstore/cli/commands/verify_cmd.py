# ABOUTME: The `catalog verify` command for checking catalog integrity.
# ABOUTME: Detects items whose image is missing and, optionally, corrupted blobs.

from pathlib import Path

import click
from rich.console import Console
from rich.table import Table

from catalogstore.cli.options import build_config, cli_store, store_options
from catalogstore.core.verifier import verify_catalog

console = Console()


@click.command("verify")
@store_options
@click.option(
    "--check-hash",
    is_flag=True,
    default=False,
    help="Re-hash stored images and compare against their keys.",
)
def verify(
    backend: str,
    db_path: Path | None,
    json_path: Path | None,
    images_dir: Path | None,
    check_hash: bool,
) -> None:
    """Verify catalog integrity: check for missing or changed images."""
    config = build_config(backend, db_path, json_path, images_dir)
    with cli_store(console, config) as store:
        result = verify_catalog(store, check_hash=check_hash)

    if result.total_issues > 0:
        table = Table()
        table.add_column("ID", style="dim", width=4)
        table.add_column("Name", style="bold")
        table.add_column("Issue", style="red")

        for item in result.missing_blob:
            table.add_row(str(item.id), item.name, "Missing image")

        for item in result.hash_mismatch:
            table.add_row(str(item.id), item.name, "Hash mismatch")

        console.print(table)
        console.print(
            f"\n[red]{result.total_issues} issue(s) found, {result.ok} item(s) verified.[/red]"
        )
        raise SystemExit(1)

    console.print(f"[green]All {result.ok} item(s) verified.[/green]")
