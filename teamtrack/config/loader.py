from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import jsonschema
import yaml
from jsonschema.exceptions import ValidationError

from ..models.config_models import ImportConfig, StorageConfig

"""Config loader.

Responsibilities:
- Load YAML (default: config/teamtrack.yml)
- Validate against the bundled JSON schema (additionalProperties: false)
- Apply defaults for every optional key
"""

__all__ = [
    "DEFAULT_CONFIG_PATH",
    "SCHEMA_PATH",
    "ConfigError",
    "load_config",
]

DEFAULT_CONFIG_PATH = Path("config/teamtrack.yml")
SCHEMA_PATH = Path(__file__).with_name("config_schema.json")


class ConfigError(Exception):
    pass


def _validate_config_schema(data: dict[str, Any]) -> None:
    """Validate config data against JSON schema.

    Raises:
        ConfigError: schema file missing or unreadable, or data violates it
    """
    if not SCHEMA_PATH.exists():
        raise ConfigError(f"config schema not found: {SCHEMA_PATH}")

    try:
        schema = json.loads(SCHEMA_PATH.read_text(encoding="utf-8"))
        jsonschema.validate(data, schema)
    except json.JSONDecodeError as e:
        raise ConfigError(f"invalid schema file: {e}") from e
    except ValidationError as e:
        raise ConfigError(f"config validation failed: {e.message}") from e


def load_config(path: Path) -> ImportConfig:
    if not path.exists():
        raise ConfigError(f"config file not found: {path}")
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"invalid yaml: {e}") from e
    if not isinstance(data, dict):
        raise ConfigError(f"config root must be a mapping, got {type(data).__name__}")

    _validate_config_schema(data)

    defaults = ImportConfig()
    st_raw = data.get("storage") or {}
    storage = StorageConfig(
        table=st_raw.get("table", defaults.storage.table),
        host=st_raw.get("host"),
        port=st_raw.get("port"),
        user=st_raw.get("user"),
        password=st_raw.get("password"),
        database=st_raw.get("database"),
        dsn=st_raw.get("dsn"),
    )
    return ImportConfig(
        separator=data.get("separator", defaults.separator),
        error_log_dir=data.get("error_log_dir", defaults.error_log_dir),
        session_file=data.get("session_file", defaults.session_file),
        storage=storage,
    )
