"""External decoder format for the index pipeline.

This format adapts a separately installed decoder module (for example
Python bindings for the engine's bundle reader). The module is named in
the reader options:

    {"reader": "external", "reader_options": {"module": "stowkit_py"}}
"""

from .reader import ExternalModuleReader, coerce_record, load_decoder_module

from ...core.errors import ReaderUnavailableError

# Auto-register with the registry
from ...registry import ReaderRegistry


def _create_external_reader(module: str | None = None, **kwargs) -> ExternalModuleReader:
    """Factory function for creating external module readers.

    Args:
        module: Dotted name of the decoder module
        **kwargs: Additional parameters (unused)

    Returns:
        ExternalModuleReader instance

    Raises:
        ReaderUnavailableError: If no module is configured or it can't be loaded
    """
    if not module:
        raise ReaderUnavailableError(
            "The 'external' reader requires a 'module' reader option"
        )
    return ExternalModuleReader(module)


# Auto-register at module import
ReaderRegistry.register_factory("external", _create_external_reader)

__all__ = [
    "ExternalModuleReader",
    "coerce_record",
    "load_decoder_module",
]
