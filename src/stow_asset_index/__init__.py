"""Stow Asset Index.

This package scans asset bundles, extracts their asset tables through
pluggable readers, and appends one compact index line per bundle to
documentation files so that people and coding agents can look up which
assets a bundle provides.
"""

# Core library interface
from .pipeline import IndexPipeline, RunResult
from .registry import ReaderRegistry
from .readers.base import BundleReader

# Core utilities
from .core import AssetRecord, BundleEntry, IndexConfig, load_config
from .core import build_index_line, compact_group, decode_group, parse_index_line
from .core import merge_index_lines, update_document
from .core import AssetIndexError, BundleDecodeError, ConfigError, ReaderUnavailableError

# Discovery
from .scanner import discover_bundles, relative_bundle_path, validate_path_safety

# CLI
from .cli import main

__version__ = "0.1.0"

# Auto-discover and register all bundle formats
ReaderRegistry.discover_formats()

__all__ = [
    # Primary library interface
    "IndexPipeline",
    "RunResult",
    "ReaderRegistry",
    "BundleReader",
    # Core utilities
    "AssetRecord",
    "BundleEntry",
    "IndexConfig",
    "load_config",
    "build_index_line",
    "compact_group",
    "decode_group",
    "parse_index_line",
    "merge_index_lines",
    "update_document",
    # Errors
    "AssetIndexError",
    "BundleDecodeError",
    "ConfigError",
    "ReaderUnavailableError",
    # Discovery
    "discover_bundles",
    "relative_bundle_path",
    "validate_path_safety",
    # CLI
    "main",
]
