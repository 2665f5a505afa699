"""
CLI Commands.

Organized by domain/feature area.
"""

from notepad.cli.commands.categories import app as categories_app
from notepad.cli.commands.health import app as health_app
from notepad.cli.commands.notes import app as notes_app

__all__ = [
    "categories_app",
    "health_app",
    "notes_app",
]
