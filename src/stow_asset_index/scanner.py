"""Bundle discovery.

This module finds bundle files below a root directory, with path
validation so that symlinks can't pull files from outside the root
into the index.
"""

import os
import sys
from pathlib import Path

DEFAULT_EXTENSION = ".stow"


def validate_path_safety(path: Path, base_dir: Path) -> None:
    """Validate that a path stays within the base directory.

    Args:
        path: Path to validate
        base_dir: Base directory that path must be within

    Raises:
        ValueError: If path escapes the base directory
    """
    resolved_path = path.resolve()
    resolved_base = base_dir.resolve()

    if not resolved_path.is_relative_to(resolved_base):
        raise ValueError(f"Path {path} escapes base directory {base_dir}")


def relative_bundle_path(path: Path, root: Path) -> str:
    """Return the bundle path relative to root, with forward slashes.

    Example:
        /project/assets/chars/Hero.stow, /project/assets -> "chars/Hero.stow"
    """
    return path.relative_to(root).as_posix()


def discover_bundles(root: Path, extension: str = DEFAULT_EXTENSION) -> list[Path]:
    """Recursively find bundle files below a directory.

    The extension is matched case-insensitively. Hidden files and hidden
    directories are skipped, as are files resolving outside the root.

    Args:
        root: Directory to scan
        extension: Bundle file extension including the dot

    Returns:
        Bundle paths below root, in no particular order. A missing root
        yields an empty list.
    """
    if not root.is_dir():
        return []

    suffix = extension.lower()
    bundles: list[Path] = []

    for dirpath, dirnames, filenames in os.walk(root):
        # Skip hidden directories (.git, .cache, ...)
        dirnames[:] = [d for d in dirnames if not d.startswith(".")]

        for filename in filenames:
            # Skip hidden files and system files
            if filename.startswith("."):
                continue

            if not filename.lower().endswith(suffix):
                continue

            file_path = Path(dirpath) / filename

            try:
                validate_path_safety(file_path, root)
            except ValueError as e:
                print(f"Warning: Skipping {file_path}: {e}", file=sys.stderr)
                continue

            bundles.append(file_path)

    return bundles
