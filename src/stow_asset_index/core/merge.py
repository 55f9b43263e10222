"""Idempotent merge of index lines into documentation files.

Generated lines are identified by their bracketed label. Every run
removes the lines of the current labels and of any legacy labels, then
appends the fresh lines at the end of the document.
"""

import os
from collections.abc import Iterable, Sequence
from pathlib import Path


def merge_index_lines(
    text: str | None,
    index_lines: Sequence[str],
    labels: Iterable[str],
    legacy_labels: Iterable[str] = (),
) -> str:
    """Merge index lines into document text.

    Args:
        text: Current document content, or None if the document is new
        index_lines: Freshly generated index lines, in output order
        labels: Labels of the fresh index lines
        legacy_labels: Labels from earlier versions to strip as well

    Returns:
        The new document content, ending with exactly one newline
    """
    all_labels = set(labels)
    all_labels.update(legacy_labels)
    markers = tuple(f"[{label}]" for label in sorted(all_labels))

    lines = text.split("\n") if text is not None else []
    if markers:
        lines = [line for line in lines if not line.startswith(markers)]

    # Trim trailing blank lines before appending
    while lines and not lines[-1].strip():
        lines.pop()

    lines.extend(index_lines)
    return "\n".join(lines) + "\n"


def update_document(
    path: Path,
    index_lines: Sequence[str],
    labels: Iterable[str],
    legacy_labels: Iterable[str] = (),
) -> None:
    """Rewrite a target document with the given index lines.

    A missing document is created holding only the index lines. Symlinked
    documents are updated through the link. The new content is written to
    a temporary file beside the real document, which then replaces it
    with the document's permission bits.

    Args:
        path: Target document
        index_lines: Freshly generated index lines, in output order
        labels: Labels of the fresh index lines
        legacy_labels: Labels from earlier versions to strip as well
    """
    target = path.resolve()
    text = target.read_text(encoding="utf-8") if target.exists() else None
    content = merge_index_lines(text, index_lines, labels, legacy_labels)

    target.parent.mkdir(parents=True, exist_ok=True)
    tmp_path = target.with_suffix(target.suffix + ".tmp")
    try:
        with tmp_path.open("w", encoding="utf-8", newline="") as handle:
            handle.write(content)
        if text is not None:
            os.chmod(tmp_path, target.stat().st_mode & 0o7777)
        tmp_path.replace(target)
    except BaseException:
        tmp_path.unlink(missing_ok=True)
        raise
