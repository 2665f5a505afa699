"""
CLI Client Module.

Command-line client built with Typer for browsing and editing
categories and notes through the backend API.

Architecture:
- CLI is a thin presentation layer
- All business logic lives in the backend
- CLI calls backend via HTTP (httpx)
- Sends X-Frontend-ID: cli header for log routing

Usage:
    python cli.py --help
    python cli.py categories list
    python cli.py notes list --search meeting
"""
