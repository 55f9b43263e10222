"""Text listing format for the index pipeline.

This format reads asset listings exported by bundle packers and needs
no native decoder, so it is always available.
"""

from .reader import ListingReader, normalize_category, parse_listing

# Auto-register with the registry
from ...registry import ReaderRegistry


def _create_listing_reader(encoding: str = "utf-8-sig", **kwargs) -> ListingReader:
    """Factory function for creating listing readers.

    Args:
        encoding: Text encoding of the listing files
        **kwargs: Additional parameters (unused for listings)

    Returns:
        ListingReader instance
    """
    return ListingReader(encoding=encoding)


# Auto-register at module import
ReaderRegistry.register_factory("listing", _create_listing_reader)

__all__ = [
    "ListingReader",
    "normalize_category",
    "parse_listing",
]
