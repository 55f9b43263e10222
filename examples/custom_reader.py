"""Template for implementing a custom bundle reader.

This example demonstrates the complete pattern for supporting a new
bundle format:
- BundleReader implementation (open / list_assets / close)
- Registration with ReaderRegistry
- Running the pipeline with the new format
"""

import json
import sys
from pathlib import Path
from typing import Any

from stow_asset_index import AssetRecord, BundleDecodeError, BundleReader, IndexPipeline, ReaderRegistry
from stow_asset_index.core.config import default_config


# Step 1: Implement the BundleReader interface
class JsonManifestReader(BundleReader):
    """Reader for bundles that carry a JSON manifest as their first line."""

    def open(self, data: bytes) -> Any:
        header, _, _ = data.partition(b"\n")
        try:
            return json.loads(header)
        except ValueError as e:
            raise BundleDecodeError(f"No JSON manifest header: {e}") from e

    def list_assets(self, handle: Any) -> list[AssetRecord]:
        return [AssetRecord(entry["name"], entry["type"]) for entry in handle["assets"]]

    def close(self, handle: Any) -> None:
        # Nothing to release; native readers free their buffers here
        pass


# Step 2: Register a factory with ReaderRegistry
def create_json_manifest_reader(**kwargs: Any) -> JsonManifestReader:
    """Factory function for creating JsonManifestReader."""
    return JsonManifestReader()


ReaderRegistry.register_factory("json_manifest", create_json_manifest_reader)


# Step 3: Use your reader
def main():
    """Example usage of a custom reader."""
    project_root = Path.cwd()

    config = default_config()
    config["reader"] = "json_manifest"
    config["targets"] = ["ASSETS.md"]

    result = IndexPipeline(config, project_root).run(dry_run=True)

    print(f"Bundles found: {result.bundles_found}", file=sys.stderr)
    for line in result.lines:
        print(line)


if __name__ == '__main__':
    main()
