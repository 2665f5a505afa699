"""
Notepad Application.

- backend/: REST API, SQLite persistence, configuration and logging
- cli/: Command-line client for the REST API (Typer + Rich)
"""
