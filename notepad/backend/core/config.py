"""
Configuration Management.

YAML files under config/settings/ describe the notepad (server address,
SQLite file, logging, feature flags). A handful of NOTEPAD_* environment
variables, or config/.env, override them per machine:

    NOTEPAD_DATABASE_URL  - SQLite URL used instead of database.yaml's url
    NOTEPAD_API_URL       - Backend URL the CLI talks to instead of server host/port

Both loaders are cached; tests call get_settings.cache_clear() after
changing the environment.
"""

from functools import lru_cache
from pathlib import Path
from typing import Any, TypeVar

import yaml
from pydantic import BaseModel, ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

from notepad.backend.core.config_schema import (
    ApplicationSchema,
    DatabaseSchema,
    FeaturesSchema,
    LoggingSchema,
)

SchemaT = TypeVar("SchemaT", bound=BaseModel)


def find_project_root() -> Path:
    """Walk up from the working directory to the .project_root marker."""
    current = Path.cwd()
    while current != current.parent:
        if (current / ".project_root").exists():
            return current
        current = current.parent
    raise RuntimeError("Project root not found. Ensure .project_root file exists.")


def load_yaml_config(filename: str) -> dict[str, Any]:
    """Load a YAML configuration file from config/settings/."""
    config_path = find_project_root() / "config" / "settings" / filename

    if not config_path.exists():
        raise FileNotFoundError(f"Configuration file not found: {config_path}")

    with open(config_path, encoding="utf-8") as f:
        return yaml.safe_load(f) or {}


def _load_validated(schema_cls: type[SchemaT], filename: str) -> SchemaT:
    raw = load_yaml_config(filename)
    try:
        return schema_cls(**raw)
    except ValidationError as e:
        raise ValueError(f"Invalid configuration in {filename}:\n{e}") from e


class Settings(BaseSettings):
    """Environment overrides loaded from NOTEPAD_* variables or config/.env."""

    database_url: str | None = None
    api_url: str | None = None

    model_config = SettingsConfigDict(
        env_prefix="NOTEPAD_",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )


class AppConfig:
    """
    Validated contents of config/settings/*.yaml.

    Every file is loaded and checked on construction, so a bad value
    in any of them stops the server before it binds a port.
    """

    def __init__(self) -> None:
        self._application = _load_validated(ApplicationSchema, "application.yaml")
        self._database = _load_validated(DatabaseSchema, "database.yaml")
        self._logging = _load_validated(LoggingSchema, "logging.yaml")
        self._features = _load_validated(FeaturesSchema, "features.yaml")

    @property
    def application(self) -> ApplicationSchema:
        return self._application

    @property
    def database(self) -> DatabaseSchema:
        return self._database

    @property
    def logging(self) -> LoggingSchema:
        return self._logging

    @property
    def features(self) -> FeaturesSchema:
        return self._features


@lru_cache
def get_settings() -> Settings:
    """Get cached environment settings. Resolves .env path from project root."""
    env_path = find_project_root() / "config" / ".env"
    return Settings(_env_file=str(env_path))


@lru_cache
def get_app_config() -> AppConfig:
    """Get cached application configuration."""
    return AppConfig()


def get_database_url() -> str:
    """SQLite URL to open: NOTEPAD_DATABASE_URL, else database.yaml."""
    return get_settings().database_url or get_app_config().database.url


def get_server_base_url() -> tuple[str, float]:
    """
    Backend URL and request timeout for the CLI client.

    Returns:
        Tuple of (base_url, timeout_seconds). The URL is NOTEPAD_API_URL
        when set, else built from application.yaml's server host and port.
    """
    app = get_app_config().application
    base_url = get_settings().api_url or f"http://{app.server.host}:{app.server.port}"
    return base_url.rstrip("/"), app.client.timeout_seconds
