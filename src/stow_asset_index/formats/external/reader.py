"""Reader backed by an external decoder module.

Binary bundle formats are decoded by native or WASM-backed libraries
that ship outside this package. Any importable module exposing three
callables can act as the decoder:

    open(data: bytes) -> handle
    list_assets(handle) -> iterable of entries
    close(handle) -> None

Entries may be mappings with ``name`` and ``type`` keys or objects with
``name`` and ``type`` / ``type_code`` attributes.
"""

import importlib
from collections.abc import Mapping
from types import ModuleType
from typing import Any

from ...core.errors import BundleDecodeError, ReaderUnavailableError
from ...core.types import AssetRecord
from ...readers.base import BundleReader

REQUIRED_CALLABLES = ("open", "list_assets", "close")


def load_decoder_module(module_name: str) -> ModuleType:
    """Import a decoder module and check that it has the reader callables.

    Raises:
        ReaderUnavailableError: If the module can't be imported or is incomplete
    """
    try:
        module = importlib.import_module(module_name)
    except ImportError as e:
        raise ReaderUnavailableError(
            f"Cannot import bundle decoder module '{module_name}': {e}"
        ) from e

    missing = [name for name in REQUIRED_CALLABLES if not callable(getattr(module, name, None))]
    if missing:
        raise ReaderUnavailableError(
            f"Bundle decoder module '{module_name}' is missing: {', '.join(missing)}"
        )
    return module


def coerce_record(entry: Any) -> AssetRecord:
    """Convert a decoder entry into an AssetRecord.

    Raises:
        BundleDecodeError: If the entry has no name or a non-integer type
    """
    if isinstance(entry, Mapping):
        name = entry.get("name")
        code = entry.get("type", entry.get("type_code"))
    else:
        name = getattr(entry, "name", None)
        code = getattr(entry, "type_code", getattr(entry, "type", None))

    if not isinstance(name, str) or not name:
        raise BundleDecodeError(f"Asset entry has no name: {entry!r}")

    try:
        type_code = int(code)  # type: ignore[arg-type]
    except (TypeError, ValueError) as e:
        raise BundleDecodeError(f"Asset '{name}' has an invalid type code: {code!r}") from e

    return AssetRecord(name=name, type_code=type_code)


class ExternalModuleReader(BundleReader):
    """BundleReader delegating to an external decoder module.

    Example:
        >>> reader = ExternalModuleReader("stowkit_py")
        >>> handle = reader.open(Path("Core.stow").read_bytes())
        >>> records = reader.list_assets(handle)
        >>> reader.close(handle)
    """

    def __init__(self, module_name: str):
        """Initialize the reader.

        Args:
            module_name: Dotted name of the decoder module

        Raises:
            ReaderUnavailableError: If the decoder can't be loaded
        """
        self.module_name = module_name
        self._decoder = load_decoder_module(module_name)

    def open(self, data: bytes) -> Any:
        return self._decoder.open(data)

    def list_assets(self, handle: Any) -> list[AssetRecord]:
        return [coerce_record(entry) for entry in self._decoder.list_assets(handle)]

    def close(self, handle: Any) -> None:
        self._decoder.close(handle)
