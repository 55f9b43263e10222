"""Reader registry for factory-based reader creation.

This module provides a central registry for bundle reader factories,
enabling format-agnostic pipelines and automatic format discovery.
"""

import importlib
from pathlib import Path
from typing import TYPE_CHECKING, Callable

from .core.errors import ReaderUnavailableError

if TYPE_CHECKING:
    from .readers.base import BundleReader


class ReaderRegistry:
    """Central registry for bundle reader factories.

    Formats register themselves when imported, and the registry can
    automatically discover all available formats. Keeping the factories
    here lets the pipeline stay independent of any bundle format.
    """

    _factories: dict[str, Callable[..., "BundleReader"]] = {}

    @classmethod
    def register_factory(cls, name: str, factory: Callable[..., "BundleReader"]) -> None:
        """Register a factory function for creating readers.

        Args:
            name: Name of the format (e.g., 'listing', 'external')
            factory: Callable that creates a BundleReader instance

        Example:
            >>> def create_listing_reader(**kwargs) -> ListingReader:
            ...     return ListingReader()
            >>> ReaderRegistry.register_factory('listing', create_listing_reader)
        """
        cls._factories[name] = factory

    @classmethod
    def create_reader(cls, format_name: str, **kwargs) -> "BundleReader":
        """Create a reader for a registered format.

        Args:
            format_name: Name of the registered format
            **kwargs: Arguments passed to the format factory

        Returns:
            BundleReader ready to open bundles

        Raises:
            ReaderUnavailableError: If the format is not registered or
                its factory can't provide a reader
        """
        if format_name not in cls._factories:
            available = ", ".join(cls._factories.keys()) or "none"
            raise ReaderUnavailableError(
                f"Unknown reader: '{format_name}'. Available readers: {available}"
            )

        return cls._factories[format_name](**kwargs)

    @classmethod
    def list_readers(cls) -> list[str]:
        """List all registered format names.

        Example:
            >>> ReaderRegistry.list_readers()
            ['external', 'listing']
        """
        return list(cls._factories.keys())

    @classmethod
    def discover_formats(cls) -> None:
        """Auto-discover and import all formats.

        Every subpackage of formats/ is imported; formats register
        themselves from their __init__.py. Formats with missing optional
        dependencies are skipped.
        """
        formats_dir = Path(__file__).parent / "formats"

        if not formats_dir.exists():
            return

        for format_path in sorted(formats_dir.iterdir()):
            if not format_path.is_dir():
                continue

            if not (format_path / "__init__.py").exists():
                continue

            try:
                importlib.import_module(
                    f".formats.{format_path.name}",
                    package="stow_asset_index",
                )
            except ImportError:
                # Format dependencies not installed
                pass
