from __future__ import annotations

from dataclasses import dataclass, field

"""Config dataclasses for the resource import tool.

Built by ``teamtrack.config.loader.load_config`` after schema validation.
"""


@dataclass(frozen=True)
class StorageConfig:
    """Storage backend connection settings.

    Used as fallback when environment variables are not set.
    Environment variables (and .env) take precedence over these values.
    """
    table: str = "resources"
    host: str | None = None
    port: int | None = None
    user: str | None = None
    password: str | None = None
    database: str | None = None
    dsn: str | None = None


@dataclass(frozen=True)
class ImportConfig:
    """Root configuration object for import / export / demo session commands."""
    separator: str = ","  # delimited-text separator
    error_log_dir: str = "./logs"
    session_file: str = "./.teamtrack/demo_session.json"
    storage: StorageConfig = field(default_factory=StorageConfig)
