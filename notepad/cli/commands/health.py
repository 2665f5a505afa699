"""
Health Check Commands.

Commands for checking backend health and status.
"""

import asyncio

import httpx
import typer
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from notepad.cli.client import APIError, get_api_client
from notepad.cli.commands._common import console

app = typer.Typer(help="Health check commands")


@app.command()
def status() -> None:
    """
    Check backend readiness (requires running server).

    Examples:
        cli.py health status
    """
    asyncio.run(_status())


async def _status() -> None:
    """Async implementation of status command."""
    client = get_api_client()

    try:
        data = await client.readiness()
        _display_health(data)
    except APIError as e:
        detail = e.payload.get("detail") if isinstance(e.payload, dict) else None
        if isinstance(detail, dict):
            _display_health(detail)
        else:
            console.print(Panel("[red]UNHEALTHY[/red]", title="Backend Status"))
            console.print(f"[dim]{escape(e.message)}[/dim]")
        raise typer.Exit(1)
    except httpx.ConnectError:
        console.print("[red]Error: Cannot connect to backend[/red]")
        console.print("[dim]Is the server running? Start with: python run.py --action server[/dim]")
        raise typer.Exit(1)
    finally:
        await client.close()


def _display_health(data: dict) -> None:
    """Display health check results."""
    status = data.get("status", "unknown")
    status_color = "green" if status == "healthy" else "red" if status == "unhealthy" else "yellow"

    console.print(Panel(
        f"[{status_color}]{status.upper()}[/{status_color}]",
        title="Backend Status",
    ))

    checks = data.get("checks", {})
    if not checks:
        return

    table = Table(show_header=True)
    table.add_column("Component", style="cyan")
    table.add_column("Status")
    table.add_column("Details")

    for component, check_data in checks.items():
        check_status = check_data.get("status", "unknown")
        color = "green" if check_status == "healthy" else "red"

        details = []
        if "latency_ms" in check_data:
            details.append(f"latency: {check_data['latency_ms']}ms")
        for counted in ("categories", "notes"):
            if counted in check_data:
                details.append(f"{counted}: {check_data[counted]}")
        if "error" in check_data:
            details.append(f"error: {check_data['error']}")

        table.add_row(
            escape(component),
            f"[{color}]{check_status}[/{color}]",
            escape(", ".join(details)) if details else "-",
        )

    console.print(table)


@app.command()
def ping() -> None:
    """
    Simple ping to check if backend is reachable.

    Examples:
        cli.py health ping
    """
    asyncio.run(_ping())


async def _ping() -> None:
    """Async implementation of ping command."""
    client = get_api_client()

    try:
        await client.health()
        console.print("[green]✓ Backend is reachable[/green]")
    except APIError as e:
        console.print(f"[yellow]Backend responded with status {e.status_code}[/yellow]")
        raise typer.Exit(1)
    except httpx.ConnectError:
        console.print("[red]✗ Backend is not reachable[/red]")
        raise typer.Exit(1)
    finally:
        await client.close()
