"""Basic listing example.

This example demonstrates how to:
- Read one bundle listing with the built-in listing reader
- Build its index line
- Merge the line into a documentation file
"""

import sys
from pathlib import Path

from stow_asset_index import ReaderRegistry, build_index_line, update_document
from stow_asset_index.core.compaction import make_label


def main():
    # Listing exported next to the bundle (change this to your file)
    listing = Path("public") / "cdn-assets" / "Core.stow"

    if not listing.exists():
        print(f"Bundle not found: {listing}", file=sys.stderr)
        print("Please update the listing variable in this script", file=sys.stderr)
        return

    reader = ReaderRegistry.create_reader("listing")
    handle = reader.open(listing.read_bytes())
    try:
        records = reader.list_assets(handle)
    finally:
        reader.close(handle)

    line = build_index_line(make_label(listing.name), listing.name, records)

    print(f"Assets: {len(records)}", file=sys.stderr)
    print(line)

    update_document(Path("AGENTS.md"), [line], [make_label(listing.name)])
    print("\nUpdated AGENTS.md", file=sys.stderr)


if __name__ == '__main__':
    main()
