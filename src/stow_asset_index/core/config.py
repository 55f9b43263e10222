"""Index configuration loading and JSON Schema validation.

Settings are read from an optional JSON file and validated against the
schema shipped in schemas/index_config.schema.json. Keys missing from
the file fall back to DEFAULT_CONFIG.
"""

import copy
import json
from pathlib import Path
from typing import Any

import jsonschema
from jsonschema import ValidationError

from .compaction import DEFAULT_LABEL_SUFFIX, MIN_PREFIX_SAVINGS
from .errors import ConfigError
from .types import IndexConfig

CONFIG_FILENAME = "asset-index.json"

SCHEMA_PATH = Path(__file__).parent / "schemas" / "index_config.schema.json"

DEFAULT_CONFIG: IndexConfig = {
    "bundle_root": "public/cdn-assets",
    "extension": ".stow",
    "label_suffix": DEFAULT_LABEL_SUFFIX,
    "targets": ["CLAUDE.md", "AGENTS.md"],
    "legacy_labels": ["Core.stow Asset List"],
    "min_prefix_savings": MIN_PREFIX_SAVINGS,
    "reader": "listing",
    "reader_options": {},
}


def load_schema() -> dict[str, Any]:
    """Load the configuration JSON Schema from the package.

    Raises:
        FileNotFoundError: If the schema file doesn't exist
        json.JSONDecodeError: If the schema is invalid JSON
    """
    if not SCHEMA_PATH.exists():
        raise FileNotFoundError(f"Schema file not found: {SCHEMA_PATH}")

    with SCHEMA_PATH.open("r", encoding="utf-8") as f:
        return json.load(f)  # type: ignore[no-any-return]


def validate_config(data: dict[str, Any]) -> None:
    """Validate raw configuration data against the JSON Schema.

    Raises:
        ValidationError: If the data doesn't conform to the schema
    """
    jsonschema.validate(instance=data, schema=load_schema())


def validate_config_with_error_details(data: dict[str, Any]) -> tuple[bool, str | None]:
    """Validate configuration data and return a readable error message.

    Returns:
        Tuple of (is_valid, error_message). error_message is None if valid.
    """
    try:
        validate_config(data)
        return True, None
    except ValidationError as e:
        error_path = " -> ".join(str(p) for p in e.path) if e.path else "root"
        return False, f"Validation error at {error_path}: {e.message}"
    except (FileNotFoundError, json.JSONDecodeError) as e:
        return False, f"Schema error: {e}"


def default_config() -> IndexConfig:
    """Return a fresh copy of the default configuration."""
    return copy.deepcopy(DEFAULT_CONFIG)


def load_config(path: Path | None = None) -> IndexConfig:
    """Load configuration from a JSON file, filling in defaults.

    Args:
        path: Configuration file, or None to use defaults only

    Returns:
        Complete IndexConfig

    Raises:
        ConfigError: If the file can't be read, isn't JSON, or fails validation
    """
    config = default_config()
    if path is None:
        return config

    try:
        with path.open("r", encoding="utf-8") as f:
            data = json.load(f)
    except OSError as e:
        raise ConfigError(f"Cannot read config {path}: {e}") from e
    except json.JSONDecodeError as e:
        raise ConfigError(f"Config {path} is not valid JSON: {e}") from e

    is_valid, error_msg = validate_config_with_error_details(data)
    if not is_valid:
        raise ConfigError(f"Invalid config {path}: {error_msg}")

    config.update(data)  # type: ignore[typeddict-item]
    return config
