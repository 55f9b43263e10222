"""Core utilities for asset index generation.

This package contains the record types, the compaction algorithm,
the document merge logic and configuration loading that are used by
the pipeline and every reader format.
"""

from .compaction import (
    MIN_PREFIX_SAVINGS,
    TYPE_KEYS,
    build_index_line,
    compact_group,
    decode_group,
    group_records,
    index_line_label,
    longest_common_prefix,
    make_label,
    parse_index_line,
)
from .config import IndexConfig, load_config, validate_config, validate_config_with_error_details
from .errors import AssetIndexError, BundleDecodeError, ConfigError, ReaderUnavailableError
from .merge import merge_index_lines, update_document
from .types import AssetRecord, BundleEntry

__all__ = [
    "AssetRecord",
    "BundleEntry",
    "IndexConfig",
    "MIN_PREFIX_SAVINGS",
    "TYPE_KEYS",
    "AssetIndexError",
    "BundleDecodeError",
    "ConfigError",
    "ReaderUnavailableError",
    "build_index_line",
    "compact_group",
    "decode_group",
    "group_records",
    "index_line_label",
    "load_config",
    "longest_common_prefix",
    "make_label",
    "merge_index_lines",
    "parse_index_line",
    "update_document",
    "validate_config",
    "validate_config_with_error_details",
]
