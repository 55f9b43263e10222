"""Command-line interface for the asset index generator.

This module provides the CLI entry point that regenerates the asset
index lines in the project's documentation files.
"""

import argparse
import sys
from pathlib import Path

from .core.config import CONFIG_FILENAME, load_config
from .core.errors import ConfigError, ReaderUnavailableError
from .core.types import IndexConfig
from .pipeline import IndexPipeline


def build_config(args: argparse.Namespace, project_root: Path) -> IndexConfig:
    """Load the configuration file and apply command-line overrides.

    The config file is ``--config`` when given, otherwise
    asset-index.json in the project root if it exists.

    Raises:
        ConfigError: If the configuration file is invalid
    """
    if args.config:
        config_path: Path | None = Path(args.config)
    else:
        default_path = project_root / CONFIG_FILENAME
        config_path = default_path if default_path.exists() else None

    config = load_config(config_path)

    if args.bundle_root:
        config["bundle_root"] = args.bundle_root
    if args.extension:
        extension = args.extension
        config["extension"] = extension if extension.startswith(".") else f".{extension}"
    if args.targets:
        config["targets"] = args.targets
    if args.label_suffix:
        config["label_suffix"] = args.label_suffix
    if args.min_prefix_savings is not None:
        config["min_prefix_savings"] = args.min_prefix_savings
    if args.reader_module:
        config["reader"] = "external"
        config["reader_options"] = {"module": args.reader_module}
    if args.reader:
        config["reader"] = args.reader

    return config


def create_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="asset-index",
        description="Append a compact asset index for bundle files to documentation files",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Index public/cdn-assets/**/*.stow into CLAUDE.md and AGENTS.md
  asset-index

  # Use a native decoder module and a single target
  asset-index --reader-module stowkit_py --target docs/ASSETS.md

  # Print the lines without touching any file
  asset-index --dry-run
        """,
    )

    parser.add_argument(
        "--root", default=".", help="Project root; relative paths resolve against it"
    )

    parser.add_argument("--config", help=f"Config file (default: <root>/{CONFIG_FILENAME})")

    parser.add_argument("--bundle-root", help="Directory scanned for bundles")

    parser.add_argument("--extension", help='Bundle file extension (e.g. ".stow")')

    parser.add_argument(
        "--target",
        dest="targets",
        action="append",
        help="Document receiving the index (repeatable)",
    )

    parser.add_argument("--label-suffix", help='Label suffix (e.g. "Assets")')

    parser.add_argument(
        "--min-prefix-savings",
        type=int,
        help="Characters a shared prefix must save before it is factored out",
    )

    parser.add_argument("--reader", help="Registered reader format (e.g. listing, external)")

    parser.add_argument("--reader-module", help="Decoder module for the external reader")

    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Print the index lines to stdout instead of updating documents",
    )

    return parser


def main(argv: list[str] | None = None) -> None:
    """Main entry point for the asset index generator."""
    args = create_parser().parse_args(argv)

    project_root = Path(args.root)
    if not project_root.exists():
        print(f"Error: Path does not exist: {project_root}", file=sys.stderr)
        sys.exit(1)

    if not project_root.is_dir():
        print(f"Error: Path is not a directory: {project_root}", file=sys.stderr)
        sys.exit(1)

    try:
        config = build_config(args, project_root)
    except ConfigError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    pipeline = IndexPipeline(config, project_root)

    try:
        result = pipeline.run(dry_run=args.dry_run)
    except ReaderUnavailableError as e:
        print(f"Error: Bundle reader unavailable: {e}", file=sys.stderr)
        sys.exit(1)

    if args.dry_run:
        for line in result.lines:
            print(line)

    if result.failed:
        print(f"{len(result.failed)} bundle(s) could not be read", file=sys.stderr)


if __name__ == "__main__":
    main()
