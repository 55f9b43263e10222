"""Compact index line encoding.

Asset names of one type are grouped, sorted, and written either as a
single name, a braced list, or a shared prefix followed by a braced list
of suffixes when factoring the prefix out saves enough characters:

    mesh:rock_large               one item
    texture:{grass,sky}           no worthwhile prefix
    animation:Character_{Idle,Run,Walk}

The decoding helpers invert the encoding. Names containing the
separator characters ``|``, ``{``, ``}`` or ``,`` cannot be decoded
unambiguously.
"""

import os
from collections.abc import Iterable, Sequence

from .types import AssetRecord

# Reader type codes; iteration order is the canonical group order
TYPE_KEYS: dict[int, str] = {
    1: "mesh",
    2: "texture",
    3: "audio",
    4: "material",
    5: "skinned_mesh",
    6: "animation",
}

# A prefix is only factored out when it saves strictly more characters
MIN_PREFIX_SAVINGS = 10

DEFAULT_LABEL_SUFFIX = "Assets"


def longest_common_prefix(strings: Sequence[str]) -> str:
    """Return the longest prefix shared by every string (character-wise)."""
    if not strings:
        return ""
    return os.path.commonprefix(list(strings))


def prefix_savings(prefix: str, count: int) -> int:
    """Characters saved by writing ``prefix{...}`` instead of full names."""
    return len(prefix) * count - (len(prefix) + count)


def compact_group(
    key: str,
    items: Iterable[str],
    min_prefix_savings: int = MIN_PREFIX_SAVINGS,
) -> str:
    """Encode one group of asset names.

    Args:
        key: Type key written before the colon
        items: Asset names of that type (sorted before encoding)
        min_prefix_savings: Savings a prefix must strictly exceed

    Returns:
        Encoded group such as ``mesh:rock_{large,small}``

    Raises:
        ValueError: If the group is empty
    """
    names = sorted(items)
    if not names:
        raise ValueError(f"Cannot compact empty group '{key}'")

    if len(names) == 1:
        return f"{key}:{names[0]}"

    prefix = longest_common_prefix(names)
    if prefix and prefix_savings(prefix, len(names)) > min_prefix_savings:
        suffixes = [name[len(prefix):] for name in names]
        return f"{key}:{prefix}{{{','.join(suffixes)}}}"

    return f"{key}:{{{','.join(names)}}}"


def group_records(records: Iterable[AssetRecord]) -> dict[str, list[str]]:
    """Group asset names by type key.

    Records with unknown type codes are dropped. Duplicate names are kept.

    Returns:
        Ordered mapping of type key to sorted names, in canonical type
        order, with empty groups omitted
    """
    groups: dict[str, list[str]] = {key: [] for key in TYPE_KEYS.values()}
    for record in records:
        key = TYPE_KEYS.get(record.type_code)
        if key is None:
            continue
        groups[key].append(record.name)

    return {key: sorted(names) for key, names in groups.items() if names}


def make_label(bundle_filename: str, suffix: str = DEFAULT_LABEL_SUFFIX) -> str:
    """Build the label identifying a bundle's index line."""
    return f"{bundle_filename} {suffix}"


def build_index_line(
    label: str,
    relative_path: str,
    records: Iterable[AssetRecord],
    min_prefix_savings: int = MIN_PREFIX_SAVINGS,
) -> str:
    """Assemble the index line for one bundle.

    A bundle without usable records still yields a line holding only
    the label and the path.

    Example:
        >>> records = [AssetRecord("rock_small", 1), AssetRecord("sky", 2)]
        >>> build_index_line("Core.stow Assets", "Core.stow", records)
        '[Core.stow Assets]|path:Core.stow|mesh:rock_small|texture:sky'
    """
    parts = [f"[{label}]", f"path:{relative_path}"]
    for key, names in group_records(records).items():
        parts.append(compact_group(key, names, min_prefix_savings))
    return "|".join(parts)


def index_line_label(line: str) -> str:
    """Return the label of an index line (the text between the brackets).

    Raises:
        ValueError: If the line does not start with a bracketed label
    """
    if not line.startswith("["):
        raise ValueError(f"Not an index line: {line!r}")
    end = line.find("]")
    if end < 0:
        raise ValueError(f"Unterminated label in index line: {line!r}")
    return line[1:end]


def decode_group(text: str) -> tuple[str, list[str]]:
    """Decode one encoded group back into its key and sorted names."""
    key, sep, body = text.partition(":")
    if not sep or not key:
        raise ValueError(f"Malformed group: {text!r}")

    if body.endswith("}") and "{" in body:
        prefix, _, inner = body[:-1].partition("{")
        return key, [prefix + suffix for suffix in inner.split(",")]

    return key, [body]


def parse_index_line(line: str) -> tuple[str, str, dict[str, list[str]]]:
    """Parse an index line into its label, path and decoded groups.

    Raises:
        ValueError: If the line is not a well-formed index line
    """
    label = index_line_label(line)
    parts = line.split("|")
    if len(parts) < 2 or not parts[1].startswith("path:"):
        raise ValueError(f"Index line has no path segment: {line!r}")

    groups: dict[str, list[str]] = {}
    for part in parts[2:]:
        key, names = decode_group(part)
        groups[key] = names

    return label, parts[1][len("path:"):], groups
