"""
Category Commands.

List, create, rename/recolor and delete categories.
"""

import asyncio
from typing import Optional

import typer
from rich.markup import escape
from rich.table import Table

from notepad.cli.commands._common import call_api, console, short_timestamp

app = typer.Typer(help="Category commands")


@app.command("list")
def list_categories() -> None:
    """
    List categories with their note counts.

    Examples:
        cli.py categories list
    """
    categories = asyncio.run(call_api(lambda client: client.list_categories()))

    if not categories:
        console.print("[yellow]No categories[/yellow]")
        return

    table = Table(title="Categories", show_header=True)
    table.add_column("ID", style="dim")
    table.add_column("Name", style="cyan")
    table.add_column("Color")
    table.add_column("Notes", justify="right")
    table.add_column("Created")

    for category in categories:
        table.add_row(
            escape(category["id"]),
            escape(category["name"]),
            escape(category.get("color", "")),
            str(category.get("noteCount", 0)),
            short_timestamp(category.get("createdAt")),
        )

    console.print(table)


@app.command()
def create(
    name: str = typer.Argument(..., help="Category name"),
    color: Optional[str] = typer.Option(None, "--color", "-c", help="Display color, e.g. #10b981"),
) -> None:
    """
    Create a category.

    Examples:
        cli.py categories create "Reading List" --color "#f59e0b"
    """
    category = asyncio.run(call_api(lambda client: client.create_category(name, color)))
    console.print(f"[green]✓ Created category[/green] {escape(category['name'])} [dim]({escape(category['id'])})[/dim]")


@app.command()
def update(
    category_id: str = typer.Argument(..., help="Category ID"),
    name: Optional[str] = typer.Option(None, "--name", "-n", help="New name"),
    color: Optional[str] = typer.Option(None, "--color", "-c", help="New color"),
) -> None:
    """
    Rename or recolor a category.

    Examples:
        cli.py categories update <id> --name "Work"
    """
    if name is None and color is None:
        console.print("[yellow]Nothing to update; pass --name and/or --color[/yellow]")
        raise typer.Exit(1)

    category = asyncio.run(
        call_api(lambda client: client.update_category(category_id, name=name, color=color))
    )
    console.print(f"[green]✓ Updated category[/green] {escape(category['name'])} [dim]({escape(category['color'])})[/dim]")


@app.command()
def delete(
    category_id: str = typer.Argument(..., help="Category ID"),
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip confirmation"),
) -> None:
    """
    Delete a category and every note in it.

    Examples:
        cli.py categories delete <id> --yes
    """
    if not yes:
        typer.confirm("Delete this category and all of its notes?", abort=True)

    asyncio.run(call_api(lambda client: client.delete_category(category_id)))
    console.print("[green]✓ Category deleted[/green]")
