"""Index generation pipeline.

This module provides the main interface for generating asset index
lines from bundle files and merging them into documentation files. The
pipeline is format-agnostic and delegates decoding to a BundleReader.
"""

import sys
from dataclasses import dataclass, field
from pathlib import Path

from .core.compaction import build_index_line, group_records, make_label
from .core.config import default_config
from .core.merge import update_document
from .core.types import AssetRecord, BundleEntry, IndexConfig
from .readers.base import BundleReader
from .registry import ReaderRegistry
from .scanner import discover_bundles, relative_bundle_path


@dataclass
class RunResult:
    """Outcome of one pipeline run."""

    bundles_found: int = 0
    lines: list[str] = field(default_factory=list)
    failed: list[str] = field(default_factory=list)  # Relative bundle paths
    updated: list[Path] = field(default_factory=list)


class IndexPipeline:
    """Main interface for asset index generation.

    The reader is created from the configured format on first use unless
    one is passed in. A single reader serves every bundle of a run.

    Example:
        >>> pipeline = IndexPipeline(load_config(Path('asset-index.json')), Path('.'))
        >>> result = pipeline.run()
        >>> print(f"{len(result.lines)} bundles indexed")
        >>>
        >>> # Custom reader (advanced)
        >>> pipeline = IndexPipeline(config, Path('.'), reader=MyReader())
    """

    def __init__(
        self,
        config: IndexConfig | None = None,
        project_root: Path | None = None,
        reader: BundleReader | None = None,
    ):
        """Initialize the pipeline.

        Args:
            config: Index configuration (defaults when omitted)
            project_root: Directory relative config paths resolve against
                (current directory when omitted)
            reader: Reader to use instead of the configured format
        """
        self.config = config if config is not None else default_config()
        self.project_root = (project_root or Path.cwd()).resolve()
        self.reader = reader

    @property
    def bundle_root(self) -> Path:
        return (self.project_root / self.config["bundle_root"]).resolve()

    @property
    def target_paths(self) -> list[Path]:
        return [self.project_root / target for target in self.config["targets"]]

    def get_reader(self) -> BundleReader:
        """Return the pipeline's reader, creating it if needed.

        Raises:
            ReaderUnavailableError: If the configured reader can't be created
        """
        if self.reader is None:
            self.reader = ReaderRegistry.create_reader(
                self.config["reader"], **self.config["reader_options"]
            )
        return self.reader

    def discover(self) -> list[Path]:
        """Find bundles below the bundle root, sorted by relative path."""
        root = self.bundle_root
        bundles = discover_bundles(root, self.config["extension"])
        return sorted(bundles, key=lambda path: relative_bundle_path(path, root))

    def extract_bundle(self, reader: BundleReader, bundle_path: Path) -> list[AssetRecord]:
        """Decode the asset records of one bundle.

        The handle is always closed, also when listing fails. A failing
        close is reported but does not discard the records.

        Raises:
            Exception: Whatever reading, opening or listing the bundle raises
        """
        data = bundle_path.read_bytes()
        handle = reader.open(data)
        try:
            return list(reader.list_assets(handle))
        finally:
            try:
                reader.close(handle)
            except Exception as e:
                print(f"Warning: Failed to close {bundle_path.name}: {e}", file=sys.stderr)

    def extract(self, bundles: list[Path], result: RunResult | None = None) -> list[BundleEntry]:
        """Extract every bundle, skipping the ones that fail to decode.

        Args:
            bundles: Bundle paths in output order
            result: Optional run result receiving the failed bundle paths

        Returns:
            One BundleEntry per successfully decoded bundle, in input order
        """
        reader = self.get_reader()
        root = self.bundle_root
        entries: list[BundleEntry] = []

        for bundle_path in bundles:
            relative_path = relative_bundle_path(bundle_path, root)

            try:
                records = self.extract_bundle(reader, bundle_path)
            except Exception as e:
                # Log error to stderr but continue with the next bundle
                print(f"Warning: Failed to read {relative_path}: {e}", file=sys.stderr)
                if result is not None:
                    result.failed.append(relative_path)
                continue

            print(f"{relative_path}: {len(records)} assets", file=sys.stderr)
            entries.append(
                BundleEntry(
                    label=make_label(bundle_path.name, self.config["label_suffix"]),
                    relative_path=relative_path,
                    records=records,
                )
            )

        return entries

    def build_lines(self, entries: list[BundleEntry]) -> list[str]:
        """Build one index line per bundle entry, keeping entry order."""
        return [
            build_index_line(
                entry.label,
                entry.relative_path,
                entry.records,
                self.config["min_prefix_savings"],
            )
            for entry in entries
        ]

    def write(self, lines: list[str], labels: list[str]) -> list[Path]:
        """Merge index lines into every target document, one at a time.

        Lines labelled with any of the given labels or a configured legacy
        label are replaced.

        Returns:
            Target paths that were written
        """
        updated: list[Path] = []
        for target, path in zip(self.config["targets"], self.target_paths):
            update_document(path, lines, labels, self.config["legacy_labels"])
            print(f"Updated {target}", file=sys.stderr)
            updated.append(path)
        return updated

    def run(self, dry_run: bool = False) -> RunResult:
        """Run discovery, extraction, compaction and the document merge.

        Nothing is written when no bundles are found or no bundle yields
        any asset record of a known type.

        Args:
            dry_run: Build the lines without touching any target document

        Returns:
            RunResult describing what was found and written

        Raises:
            ReaderUnavailableError: If the reader can't be created; no
                target document has been touched at that point
        """
        result = RunResult()

        bundles = self.discover()
        result.bundles_found = len(bundles)
        if not bundles:
            print(
                f"No {self.config['extension']} bundles found under {self.bundle_root}",
                file=sys.stderr,
            )
            return result

        entries = self.extract(bundles, result)
        if not any(group_records(entry.records) for entry in entries):
            print("No usable assets extracted from any bundle, skipping index update", file=sys.stderr)
            return result

        result.lines = self.build_lines(entries)
        if not dry_run:
            result.updated = self.write(result.lines, [entry.label for entry in entries])

        return result
