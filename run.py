#!/usr/bin/env python3
"""
Notepad operations script.

Starts the API server and handles the chores around it: creating and
seeding the SQLite file, sanity-checking an install, printing the
effective configuration, running the test suite.

Usage:
    python run.py --help
    python run.py --action server --reload -v
    python run.py --action init-db
    python run.py --action health
    python run.py --action config
    python run.py --action test --test-type integration --coverage
"""

import asyncio
import subprocess
import sys
from pathlib import Path

import click

PROJECT_ROOT = Path(__file__).parent
sys.path.insert(0, str(PROJECT_ROOT))

from notepad.backend.core.logging import get_logger, setup_logging

logger = get_logger(__name__)

ACTIONS = {
    "server": "Run the API server (uvicorn)",
    "init-db": "Create tables and seed the default categories",
    "health": "Check config, database file and app wiring without a server",
    "config": "Print the effective configuration",
    "test": "Run the pytest suite",
    "info": "Show this overview",
}

TEST_PATHS = {
    "all": "tests/",
    "unit": "tests/unit",
    "integration": "tests/integration",
}


def validate_project_root() -> Path:
    """Exit unless the .project_root marker sits next to this script."""
    if not (PROJECT_ROOT / ".project_root").exists():
        click.secho("Error: .project_root not found. Run from project root.", fg="red", err=True)
        sys.exit(1)
    return PROJECT_ROOT


@click.command()
@click.option("--action", type=click.Choice(list(ACTIONS)), default="info", help="What to do.")
@click.option("--verbose", "-v", is_flag=True, help="Log at INFO.")
@click.option("--debug", "-d", is_flag=True, help="Log at DEBUG.")
@click.option("--host", default=None, help="Bind address for --action server (default: application.yaml).")
@click.option("--port", default=None, type=int, help="Port for --action server (default: application.yaml).")
@click.option("--reload", is_flag=True, help="Restart the server on code changes.")
@click.option(
    "--test-type",
    type=click.Choice(list(TEST_PATHS)),
    default="all",
    help="Which tests --action test runs.",
)
@click.option("--coverage", is_flag=True, help="Collect coverage for --action test.")
def main(
    action: str,
    verbose: bool,
    debug: bool,
    host: str | None,
    port: int | None,
    reload: bool,
    test_type: str,
    coverage: bool,
) -> None:
    """
    Notepad Application Entry Point.

    Runs the categories/notes API and its maintenance tasks.
    """
    validate_project_root()

    level = "DEBUG" if debug else "INFO" if verbose else "WARNING"
    setup_logging(level=level, format_type="console")
    logger.debug("run.py invoked", extra={"action": action, "log_level": level})

    if action == "server":
        run_server(host, port, reload)
    elif action == "init-db":
        init_database()
    elif action == "health":
        check_health()
    elif action == "config":
        show_config()
    elif action == "test":
        run_tests(test_type, coverage)
    else:
        show_info()


def run_server(host: str | None, port: int | None, reload: bool) -> None:
    """Serve notepad.backend.main:app with uvicorn."""
    from notepad.backend.core.config import get_app_config

    server = get_app_config().application.server
    host = host or server.host
    port = port or server.port

    cmd = [sys.executable, "-m", "uvicorn", "notepad.backend.main:app", "--host", host, "--port", str(port)]
    if reload:
        cmd.append("--reload")

    logger.info("Starting server", extra={"host": host, "port": port, "reload": reload})
    click.echo(f"Notepad API on http://{host}:{port} (Ctrl+C to stop)")

    try:
        subprocess.run(cmd, check=True)
    except KeyboardInterrupt:
        logger.info("Server stopped")
    except subprocess.CalledProcessError as e:
        logger.error("Server exited with an error", extra={"exit_code": e.returncode})
        sys.exit(e.returncode)


def init_database() -> None:
    """Create missing tables and seed the default categories."""
    from notepad.backend.core.config import get_app_config, get_database_url
    from notepad.backend.core.database import Database

    async def _init() -> int:
        database = Database(get_database_url(), echo=get_app_config().database.echo)
        try:
            await database.open(seed_defaults=False)
            return await database.seed()
        finally:
            await database.close()

    try:
        inserted = asyncio.run(_init())
    except Exception as e:
        logger.error("Database initialization failed", extra={"error": str(e)})
        click.secho(f"Database initialization failed: {e}", fg="red")
        sys.exit(1)

    click.secho("Database ready.", fg="green")
    if inserted:
        click.echo(f"Seeded {inserted} default categories.")
    else:
        click.echo("Categories already present; nothing seeded.")


async def _count_rows(url: str) -> tuple[int, int]:
    from notepad.backend.core.database import Database
    from notepad.backend.repositories.category import CategoryRepository
    from notepad.backend.repositories.note import NoteRepository

    database = Database(url)
    try:
        await database.open(seed_defaults=False)
        async with database.session() as session:
            return await CategoryRepository(session).count(), await NoteRepository(session).count()
    finally:
        await database.close()


def _probe(label: str, probe) -> tuple[str, bool, str]:
    try:
        return label, True, probe()
    except Exception as e:
        logger.error("Health probe failed", extra={"probe": label, "error": str(e)})
        return label, False, str(e)


def check_health() -> None:
    """Exercise configuration, the SQLite file and app construction in-process."""
    from notepad.backend.core.config import get_app_config, get_database_url
    from notepad.backend.main import get_app
    from notepad.backend.models import Base

    def database_probe() -> str:
        categories, notes = asyncio.run(_count_rows(get_database_url()))
        return f"{categories} categories, {notes} notes"

    results = [
        _probe("YAML configuration", lambda: f"App: {get_app_config().application.name}"),
        _probe("Database URL", get_database_url),
        _probe("Database models", lambda: "Tables: " + ", ".join(sorted(Base.metadata.tables))),
        _probe("Database file", database_probe),
        _probe("FastAPI application", lambda: f"Routes: {len(get_app().routes)}"),
    ]

    click.echo("Health Check Results:")
    click.echo("-" * 50)
    for label, passed, detail in results:
        mark = click.style("✓ PASS", fg="green") if passed else click.style("✗ FAIL", fg="red")
        click.echo(f"  {mark}  {label} ({detail})")
    click.echo("-" * 50)

    if all(passed for _, passed, _ in results):
        click.secho("All checks passed.", fg="green")
    else:
        click.secho("Some checks failed.", fg="yellow")
        sys.exit(1)


def show_config() -> None:
    """Print every YAML section plus the database URL actually in effect."""
    from notepad.backend.core.config import get_app_config, get_database_url

    try:
        config = get_app_config()
        sections = {
            "Application Settings": config.application.model_dump(),
            "Database Settings": {**config.database.model_dump(), "effective_url": get_database_url()},
            "Logging Settings": config.logging.model_dump(),
            "Feature Flags": config.features.model_dump(),
        }
    except Exception as e:
        logger.error("Failed to load configuration", extra={"error": str(e)})
        click.secho(f"Error loading configuration: {e}", fg="red")
        sys.exit(1)

    for title, values in sections.items():
        click.echo(title)
        click.echo("-" * len(title))
        _echo_mapping(values, indent=2)
        click.echo()


def _echo_mapping(values: dict, indent: int) -> None:
    for key, value in values.items():
        if isinstance(value, dict):
            click.echo(f"{' ' * indent}{key}:")
            _echo_mapping(value, indent + 2)
        else:
            click.echo(f"{' ' * indent}{key}: {value}")


def run_tests(test_type: str, coverage: bool) -> None:
    """Run pytest on the selected test tree and exit with its status."""
    cmd = [sys.executable, "-m", "pytest", TEST_PATHS[test_type], "-v"]
    if coverage:
        cmd += ["--cov=notepad", "--cov-report=term-missing"]

    logger.info("Running tests", extra={"type": test_type, "coverage": coverage})
    click.echo(" ".join(cmd))
    sys.exit(subprocess.run(cmd).returncode)


def show_info() -> None:
    """Print the app identity and the available actions."""
    from notepad.backend.core.config import get_app_config

    app_settings = get_app_config().application
    click.echo(f"{app_settings.name} {app_settings.version}")
    click.echo(app_settings.description)
    click.echo()
    click.echo("Available Actions:")
    for name, description in ACTIONS.items():
        click.echo(f"  --action {name:<8} {description}")
    click.echo()
    click.echo("Examples:")
    click.echo("  python run.py --action init-db")
    click.echo("  python run.py --action server --reload -v")
    click.echo("  python run.py --action test --test-type unit --coverage")


if __name__ == "__main__":
    main()
