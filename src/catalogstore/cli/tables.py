# ABOUTME: Rich table builders shared by the listing commands.

from rich.table import Table

from catalogstore.db.mapping import ItemRecord


def items_table(records: list[ItemRecord]) -> Table:
    """Build the standard ID / Name / Category / Image table."""
    table = Table()
    table.add_column("ID", style="dim", width=4)
    table.add_column("Name", style="bold")
    table.add_column("Category", style="cyan")
    table.add_column("Image", style="dim", overflow="ellipsis", max_width=20)

    for record in records:
        table.add_row(str(record.id), record.name, record.category, record.image_name)
    return table
