"""
Note Commands.

Browse, search, show and edit notes.
"""

import asyncio
import html
import re
from typing import Optional

import typer
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from notepad.cli.commands._common import call_api, console, short_timestamp

app = typer.Typer(help="Note commands")

UNTITLED = "Untitled"

_TAG_RE = re.compile(r"<[^>]+>")
_BLOCK_END_RE = re.compile(r"</(p|div|li|h[1-6])>|<br\s*/?>", re.IGNORECASE)


def html_to_text(content: str) -> str:
    """Strip markup from note content for terminal display."""
    text = _BLOCK_END_RE.sub("\n", content)
    text = _TAG_RE.sub("", text)
    return html.unescape(text).strip()


def _display_title(note: dict) -> str:
    return escape(note["title"]) if note["title"] else UNTITLED


def _display_tags(note: dict) -> str:
    return escape(", ".join(note.get("tags", []))) or "-"


def _split_tags(tags: Optional[str]) -> Optional[list[str]]:
    if tags is None:
        return None
    return [tag.strip() for tag in tags.split(",") if tag.strip()]


@app.command("list")
def list_notes(
    category_id: Optional[str] = typer.Option(None, "--category", "-c", help="Only notes in this category"),
    search: Optional[str] = typer.Option(None, "--search", "-s", help="Case-insensitive text search"),
) -> None:
    """
    List notes, most recently updated first.

    Examples:
        cli.py notes list
        cli.py notes list --category <id> --search meeting
    """
    notes = asyncio.run(call_api(lambda client: client.list_notes(category_id, search)))

    if not notes:
        console.print("[yellow]No notes found[/yellow]")
        return

    table = Table(title=f"Notes ({len(notes)})", show_header=True)
    table.add_column("ID", style="dim")
    table.add_column("Title", style="cyan")
    table.add_column("Tags")
    table.add_column("Updated")

    for note in notes:
        table.add_row(
            escape(note["id"]),
            _display_title(note),
            _display_tags(note),
            short_timestamp(note.get("updatedAt")),
        )

    console.print(table)


@app.command()
def show(
    note_id: str = typer.Argument(..., help="Note ID"),
) -> None:
    """
    Show a single note.

    Examples:
        cli.py notes show <id>
    """
    note = asyncio.run(call_api(lambda client: client.get_note(note_id)))

    body = escape(html_to_text(note.get("content", ""))) or "[dim](empty)[/dim]"
    console.print(Panel(
        f"{body}\n\n"
        f"[dim]Tags: {_display_tags(note)}[/dim]\n"
        f"[dim]Category: {escape(note['categoryId'])}[/dim]\n"
        f"[dim]Created: {short_timestamp(note.get('createdAt'))}  "
        f"Updated: {short_timestamp(note.get('updatedAt'))}[/dim]",
        title=_display_title(note),
    ))


@app.command()
def create(
    category_id: str = typer.Option(..., "--category", "-c", help="Owning category ID"),
    title: str = typer.Option("", "--title", "-t", help="Note title"),
    content: Optional[str] = typer.Option(None, "--content", help="Note body (HTML)"),
    tags: Optional[str] = typer.Option(None, "--tags", help="Comma-separated tags"),
) -> None:
    """
    Create a note.

    Examples:
        cli.py notes create --category <id> --title "Standup" --tags daily,team
    """
    note = asyncio.run(
        call_api(
            lambda client: client.create_note(
                title=title,
                category_id=category_id,
                content=content,
                tags=_split_tags(tags),
            )
        )
    )
    console.print(f"[green]✓ Created note[/green] {_display_title(note)} [dim]({escape(note['id'])})[/dim]")


@app.command()
def update(
    note_id: str = typer.Argument(..., help="Note ID"),
    title: Optional[str] = typer.Option(None, "--title", "-t", help="New title"),
    content: Optional[str] = typer.Option(None, "--content", help="New body (HTML)"),
    category_id: Optional[str] = typer.Option(None, "--category", "-c", help="Move to category"),
    tags: Optional[str] = typer.Option(None, "--tags", help="Replacement comma-separated tags"),
) -> None:
    """
    Update only the given fields of a note.

    Examples:
        cli.py notes update <id> --title "Renamed"
    """
    if title is None and content is None and category_id is None and tags is None:
        console.print("[yellow]Nothing to update; pass at least one field option[/yellow]")
        raise typer.Exit(1)

    note = asyncio.run(
        call_api(
            lambda client: client.update_note(
                note_id,
                title=title,
                content=content,
                category_id=category_id,
                tags=_split_tags(tags),
            )
        )
    )
    console.print(f"[green]✓ Updated note[/green] {_display_title(note)}")


@app.command()
def delete(
    note_id: str = typer.Argument(..., help="Note ID"),
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip confirmation"),
) -> None:
    """
    Delete a note.

    Examples:
        cli.py notes delete <id> --yes
    """
    if not yes:
        typer.confirm("Delete this note?", abort=True)

    asyncio.run(call_api(lambda client: client.delete_note(note_id)))
    console.print("[green]✓ Note deleted[/green]")
