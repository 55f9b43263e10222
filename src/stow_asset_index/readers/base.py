"""Base abstraction for bundle readers.

A reader decodes the raw bytes of one bundle into asset records. The
pipeline shares a single reader across all bundles and drives it with
an explicit open / list / close sequence per bundle.
"""

from abc import ABC, abstractmethod
from typing import Any

from ..core.types import AssetRecord


class BundleReader(ABC):
    """Abstract base class for all bundle readers.

    Implementations may hold native resources per open bundle; the
    pipeline always calls ``close`` on a handle returned by ``open``,
    even when listing fails, and never keeps two handles open at once.
    """

    @abstractmethod
    def open(self, data: bytes) -> Any:
        """Open a bundle from its raw bytes.

        Args:
            data: Complete bundle file content

        Returns:
            Reader-specific handle passed to list_assets and close

        Raises:
            BundleDecodeError: If the data is not a readable bundle
        """
        pass

    @abstractmethod
    def list_assets(self, handle: Any) -> list[AssetRecord]:
        """List the assets of an open bundle, in bundle order.

        Raises:
            BundleDecodeError: If the asset table can't be decoded
        """
        pass

    @abstractmethod
    def close(self, handle: Any) -> None:
        """Release the resources held by an open bundle."""
        pass
