# ABOUTME: CLI package for catalogstore, built on Click.
# ABOUTME: Defines the root command group, logging setup, and registers subcommands.

import logging

import click
from rich.logging import RichHandler

from catalogstore.cli.commands import (
    add_cmd,
    categories_cmd,
    import_cmd,
    info_cmd,
    ls_cmd,
    rm_cmd,
    search_cmd,
    verify_cmd,
)


@click.group()
@click.version_option(package_name="catalogstore")
@click.option("-v", "--verbose", is_flag=True, default=False, help="Show debug logging.")
def cli(verbose: bool) -> None:
    """catalogstore - an item catalog with deduplicated images."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(show_path=False)],
    )


cli.add_command(add_cmd.add)
cli.add_command(ls_cmd.ls)
cli.add_command(search_cmd.search)
cli.add_command(info_cmd.info)
cli.add_command(rm_cmd.rm)
cli.add_command(categories_cmd.categories)
cli.add_command(import_cmd.import_command)
cli.add_command(verify_cmd.verify)
