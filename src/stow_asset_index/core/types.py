"""Type definitions for asset index generation.

Records produced by readers are small frozen dataclasses; the
configuration mirrors the JSON schema in schemas/index_config.schema.json.
"""

from dataclasses import dataclass, field
from typing import Any, TypedDict


@dataclass(frozen=True)
class AssetRecord:
    """One decoded entry from a bundle.

    Attributes:
        name: Asset name as stored in the bundle (not unique)
        type_code: Reader-defined type code, see TYPE_KEYS
    """

    name: str
    type_code: int


@dataclass
class BundleEntry:
    """Extraction result for a single bundle."""

    label: str
    relative_path: str  # Forward-slash path relative to the bundle root
    records: list[AssetRecord] = field(default_factory=list)


class IndexConfig(TypedDict):
    """Settings for one index generation run."""

    bundle_root: str  # Directory scanned for bundles, relative to project root
    extension: str  # Bundle file extension, e.g. ".stow"
    label_suffix: str  # Appended to the bundle filename to form the label
    targets: list[str]  # Documents receiving the index lines
    legacy_labels: list[str]  # Old labels still stripped from targets
    min_prefix_savings: int  # Characters a prefix must save to be factored out
    reader: str  # Registered reader format name
    reader_options: dict[str, Any]  # Keyword arguments for the reader factory
