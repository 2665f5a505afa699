#!/usr/bin/env python3
"""
Notepad CLI Client.

Command-line client for the notepad API.
Built with Typer for type-safe commands and Rich for formatted output.
Requires a running server (python run.py --action server).

Usage:
    python cli.py --help                                  # Show help

    # Categories
    python cli.py categories list                         # Categories with note counts
    python cli.py categories create "Reading" -c "#f59e0b"
    python cli.py categories update <id> --name "Work"
    python cli.py categories delete <id> --yes            # Also deletes its notes

    # Notes
    python cli.py notes list --category <id> --search foo
    python cli.py notes show <id>
    python cli.py notes create --category <id> --title "Standup" --tags daily,team
    python cli.py notes update <id> --title "Renamed"
    python cli.py notes delete <id> --yes

    # Health checks
    python cli.py health status                           # Readiness (database reachable)
    python cli.py health ping                             # Liveness

Options:
    --verbose, -v     Enable verbose output
    --debug, -d       Enable debug mode (detailed logging)
    --help            Show help message
"""

import sys
from pathlib import Path

import typer
from rich.console import Console

# Add project root to path for absolute imports
project_root = Path(__file__).resolve().parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))

from notepad.backend.core.logging import setup_logging
from notepad.cli.commands import categories_app, health_app, notes_app

app = typer.Typer(
    name="cli",
    help="Notepad CLI - browse and edit categories and notes.",
    no_args_is_help=True,
    rich_markup_mode="rich",
)

console = Console()

app.add_typer(categories_app, name="categories")
app.add_typer(notes_app, name="notes")
app.add_typer(health_app, name="health")


@app.callback()
def main(
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Enable verbose output (INFO level logging)",
    ),
    debug: bool = typer.Option(
        False,
        "--debug",
        "-d",
        help="Enable debug mode (DEBUG level logging)",
    ),
) -> None:
    """
    Notepad CLI.

    Categories, notes and health checks over the REST API.
    """
    if debug:
        setup_logging(level="DEBUG", format_type="console")
        console.print("[dim]Debug mode enabled[/dim]")
    elif verbose:
        setup_logging(level="INFO", format_type="console")
    else:
        setup_logging(level="WARNING", format_type="console")


if __name__ == "__main__":
    app()
