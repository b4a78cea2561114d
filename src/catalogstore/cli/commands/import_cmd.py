# ABOUTME: The `catalog import` command for cataloging a directory of images.
# ABOUTME: Walks a directory and adds each image as an item named after its file.

from pathlib import Path

import click
from rich.console import Console

from catalogstore.cli.options import build_config, cli_store, store_options
from catalogstore.core.importer import find_images, import_images

console = Console()


@click.command("import")
@click.argument(
    "directory",
    type=click.Path(exists=True, file_okay=False, path_type=Path),
)
@click.option(
    "-c", "--category",
    required=True,
    help="Category for every imported item.",
)
@store_options
def import_command(
    directory: Path,
    category: str,
    backend: str,
    db_path: Path | None,
    json_path: Path | None,
    images_dir: Path | None,
) -> None:
    """Scan DIRECTORY for images and catalog each one."""
    image_files = find_images(directory)

    if not image_files:
        console.print(f"[yellow]No image files found in {directory}[/yellow]")
        return

    console.print(f"Found [bold]{len(image_files)}[/bold] image file(s)\n")

    config = build_config(backend, db_path, json_path, images_dir)
    with cli_store(console, config) as store:
        result = import_images(image_files, store, category)

    for item in result.added:
        console.print(f"  [dim]{item.id}[/dim] {item.name}")

    parts = [f"[green]{len(result.added)} added[/green]"]
    if result.errors:
        parts.append(f"[red]{result.errors} error(s)[/red]")
    console.print(", ".join(parts))

    if result.error_details:
        console.print(f"\n[yellow]{result.errors} file(s) could not be imported:[/yellow]")
        for path, msg in result.error_details:
            console.print(f"  [dim]{path.name}:[/dim] {msg}")
