"""Tests for configuration loading and schema validation."""

import json
import tempfile
from pathlib import Path

import pytest

from stow_asset_index.core.config import (
    DEFAULT_CONFIG,
    load_config,
    validate_config_with_error_details,
)
from stow_asset_index.core.errors import ConfigError


class TestValidateConfig:
    """Test JSON Schema validation of config data."""

    def test_empty_config_valid(self) -> None:
        """Test that every key is optional."""
        assert validate_config_with_error_details({}) == (True, None)

    def test_full_config_valid(self) -> None:
        """Test that the defaults themselves validate."""
        assert validate_config_with_error_details(dict(DEFAULT_CONFIG)) == (True, None)

    def test_unknown_key_rejected(self) -> None:
        """Test that misspelled keys are reported."""
        is_valid, error_msg = validate_config_with_error_details({"target": ["CLAUDE.md"]})
        assert not is_valid
        assert error_msg is not None and "'target'" in error_msg

    def test_error_path_reported(self) -> None:
        """Test that the location of a bad value is part of the message."""
        is_valid, error_msg = validate_config_with_error_details({"targets": ["CLAUDE.md", 3]})
        assert not is_valid
        assert error_msg is not None and error_msg.startswith("Validation error at targets -> 1")

    def test_extension_needs_leading_dot(self) -> None:
        """Test that an extension without a dot is rejected."""
        is_valid, _ = validate_config_with_error_details({"extension": "stow"})
        assert not is_valid

    def test_negative_threshold_rejected(self) -> None:
        """Test that the prefix threshold can't be negative."""
        is_valid, _ = validate_config_with_error_details({"min_prefix_savings": -1})
        assert not is_valid


class TestLoadConfig:
    """Test loading config files."""

    def test_defaults_without_file(self) -> None:
        """Test that no path gives the defaults."""
        config = load_config(None)
        assert config == DEFAULT_CONFIG
        config["targets"].append("README.md")
        assert DEFAULT_CONFIG["targets"] == ["CLAUDE.md", "AGENTS.md"]

    def test_file_overrides_defaults(self) -> None:
        """Test that file values replace defaults and the rest is filled in."""
        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "asset-index.json"
            path.write_text(json.dumps({"targets": ["docs/ASSETS.md"], "min_prefix_savings": 4}))

            config = load_config(path)

            assert config["targets"] == ["docs/ASSETS.md"]
            assert config["min_prefix_savings"] == 4
            assert config["extension"] == ".stow"

    def test_invalid_json(self) -> None:
        """Test that broken JSON raises ConfigError."""
        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "asset-index.json"
            path.write_text("{targets: }")
            with pytest.raises(ConfigError, match="not valid JSON"):
                load_config(path)

    def test_schema_violation(self) -> None:
        """Test that schema errors raise ConfigError."""
        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "asset-index.json"
            path.write_text(json.dumps({"reader": 5}))
            with pytest.raises(ConfigError, match="Invalid config"):
                load_config(path)

    def test_missing_file(self) -> None:
        """Test that an unreadable file raises ConfigError."""
        with tempfile.TemporaryDirectory() as tmpdir:
            with pytest.raises(ConfigError, match="Cannot read config"):
                load_config(Path(tmpdir) / "missing.json")
