"""YAML and environment configuration for the client and the data endpoint."""

from __future__ import annotations

import os
import warnings
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

import yaml

DEFAULT_API_ENDPOINT = "http://localhost:8787/api/clips"
DEFAULT_HOST = "127.0.0.1"
DEFAULT_PORT = 8787
DEFAULT_DATABASE_URL = "sqlite:///clips.db"

KNOWN_TOP_KEYS = {"api", "server", "database"}
KNOWN_API_KEYS = {"endpoint", "timeout"}
KNOWN_SERVER_KEYS = {"host", "port"}
KNOWN_DATABASE_KEYS = {"url", "table"}

ENV_PORT = "PORT"
ENV_DATABASE_URL = "DATABASE_URL"
ENV_API_ENDPOINT = "CLIPDECK_API_ENDPOINT"


@dataclass
class CatalogConfig:
    # Client
    api_endpoint: str = DEFAULT_API_ENDPOINT
    api_timeout: float | None = None  # None = wait as long as the socket does

    # Data endpoint
    host: str = DEFAULT_HOST
    port: int = DEFAULT_PORT
    database_url: str = DEFAULT_DATABASE_URL
    table: str = "lol_clips"


def _warn_unknown_keys(keys: set[str], known: set[str], section: str) -> None:
    unknown = keys - known
    for key in sorted(unknown):
        warnings.warn(f"Unknown key '{key}' in {section} section of catalog config", stacklevel=3)


def _section(raw: dict, name: str, known: set[str]) -> dict:
    value = raw.get(name)
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise ValueError(f"'{name}' must be a mapping")
    _warn_unknown_keys(set(value.keys()), known, name)
    return value


def load_catalog_config(path: str | Path) -> CatalogConfig:
    """Load a YAML config file and return a CatalogConfig."""
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")

    raw = yaml.safe_load(path.read_text())
    if raw is None:
        return CatalogConfig()
    if not isinstance(raw, dict):
        raise ValueError(f"Catalog config must be a YAML mapping, got {type(raw).__name__}")

    _warn_unknown_keys(set(raw.keys()), KNOWN_TOP_KEYS, "top-level")

    cfg = CatalogConfig()

    # --- api ---
    if isinstance(raw.get("api"), str):
        # Shorthand: api: "http://host/api/clips"
        cfg.api_endpoint = raw["api"]
    else:
        api = _section(raw, "api", KNOWN_API_KEYS)
        if "endpoint" in api:
            cfg.api_endpoint = str(api["endpoint"])
        if api.get("timeout") is not None:
            cfg.api_timeout = float(api["timeout"])

    # --- server ---
    server = _section(raw, "server", KNOWN_SERVER_KEYS)
    if "host" in server:
        cfg.host = str(server["host"])
    if "port" in server:
        cfg.port = int(server["port"])

    # --- database ---
    database = _section(raw, "database", KNOWN_DATABASE_KEYS)
    if "url" in database:
        cfg.database_url = str(database["url"])
    if "table" in database:
        cfg.table = str(database["table"])

    return cfg


def apply_environment(
    config: CatalogConfig, environ: Mapping[str, str] | None = None
) -> CatalogConfig:
    """Overlay environment variables (``PORT``, ``DATABASE_URL``, ...) onto *config*."""
    environ = os.environ if environ is None else environ

    if environ.get(ENV_PORT):
        try:
            config.port = int(environ[ENV_PORT])
        except ValueError:
            raise ValueError(f"{ENV_PORT} must be an integer, got {environ[ENV_PORT]!r}")
    if environ.get(ENV_DATABASE_URL):
        config.database_url = environ[ENV_DATABASE_URL]
    if environ.get(ENV_API_ENDPOINT):
        config.api_endpoint = environ[ENV_API_ENDPOINT]
    return config
