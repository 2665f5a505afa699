"""
Shared helpers for CLI commands.
"""

from collections.abc import Awaitable, Callable
from typing import Any, TypeVar

import httpx
import typer
from rich.console import Console
from rich.markup import escape

from notepad.cli.client import APIClient, APIError, get_api_client

T = TypeVar("T")

console = Console()


async def call_api(operation: Callable[[APIClient], Awaitable[T]]) -> T:
    """
    Run one client operation and turn failures into a CLI exit.

    API errors print the server message; connection errors print a hint
    to start the server. Both exit with status 1.
    """
    client = get_api_client()
    try:
        return await operation(client)
    except APIError as e:
        console.print(f"[red]Error ({e.status_code}): {escape(e.message)}[/red]")
        raise typer.Exit(1)
    except httpx.ConnectError:
        console.print("[red]Error: Cannot connect to backend[/red]")
        console.print("[dim]Is the server running? Start with: python run.py --action server[/dim]")
        raise typer.Exit(1)
    finally:
        await client.close()


def short_timestamp(value: Any) -> str:
    """Render an ISO timestamp from the API as 'YYYY-MM-DD HH:MM:SS'."""
    if not value:
        return "-"
    return str(value).replace("T", " ")[:19]
