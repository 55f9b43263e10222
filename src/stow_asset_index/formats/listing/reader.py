"""Plain-text asset listing reader.

Bundle packers can export the asset table of a bundle as a text listing:
a header line per asset category followed by one asset name per line.

    --- Meshes ---
    rock_large
    rock_small
    --- Textures ---
    sky

Category headers are mapped to reader type codes; unknown categories
get code 0 and are dropped during compaction.
"""

import re
from dataclasses import dataclass, field

from ...core.compaction import TYPE_KEYS
from ...core.errors import BundleDecodeError
from ...core.types import AssetRecord
from ...readers.base import BundleReader

HEADER_RX = re.compile(r"^---\s+(.+?)\s+---$")

UNKNOWN_TYPE_CODE = 0

# Plural and alternative category names found in packer exports
CATEGORY_ALIASES = {
    "meshes": "mesh",
    "textures": "texture",
    "sounds": "audio",
    "materials": "material",
    "skinned_meshes": "skinned_mesh",
    "animations": "animation",
}

TYPE_CODES = {key: code for code, key in TYPE_KEYS.items()}


def normalize_category(header: str) -> str:
    """Turn a header title into a category key.

    Example:
        "Skinned Meshes" -> "skinned_meshes"
    """
    key = re.sub(r"[^a-z0-9 _/]", "", header.lower())
    return re.sub(r"[\s/]+", "_", key)


def category_type_code(category: str) -> int:
    """Map a normalized category key to a reader type code."""
    key = CATEGORY_ALIASES.get(category, category)
    return TYPE_CODES.get(key, UNKNOWN_TYPE_CODE)


def parse_listing(text: str) -> list[AssetRecord]:
    """Parse listing text into asset records, in listing order.

    Blank lines and lines before the first header are ignored.
    """
    records: list[AssetRecord] = []
    current: int | None = None

    for raw in text.split("\n"):
        line = raw.strip()
        if not line:
            continue

        header = HEADER_RX.match(line)
        if header:
            current = category_type_code(normalize_category(header.group(1)))
        elif current is not None:
            records.append(AssetRecord(name=line, type_code=current))

    return records


@dataclass
class ListingHandle:
    """Open listing; holds the parsed records until closed."""

    records: list[AssetRecord] = field(default_factory=list)
    closed: bool = False


class ListingReader(BundleReader):
    """Reader for text asset listings.

    Example:
        >>> reader = ListingReader()
        >>> handle = reader.open(b"--- Textures ---\\nsky\\n")
        >>> reader.list_assets(handle)
        [AssetRecord(name='sky', type_code=2)]
        >>> reader.close(handle)
    """

    def __init__(self, encoding: str = "utf-8-sig"):
        self.encoding = encoding

    def open(self, data: bytes) -> ListingHandle:
        try:
            text = data.decode(self.encoding)
        except UnicodeDecodeError as e:
            raise BundleDecodeError(f"Listing is not {self.encoding} text: {e}") from e
        return ListingHandle(records=parse_listing(text))

    def list_assets(self, handle: ListingHandle) -> list[AssetRecord]:
        if handle.closed:
            raise BundleDecodeError("Listing handle is already closed")
        return list(handle.records)

    def close(self, handle: ListingHandle) -> None:
        handle.records = []
        handle.closed = True
