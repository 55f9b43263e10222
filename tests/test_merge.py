"""Tests for merging index lines into documents."""

import stat
import tempfile
from pathlib import Path
from unittest.mock import patch

import pytest

from stow_asset_index.core.merge import merge_index_lines, update_document

CORE_LINE = "[Core.stow Assets]|path:Core.stow|texture:sky"
HERO_LINE = "[Hero.stow Assets]|path:chars/Hero.stow|skinned_mesh:Hero"
CORE_LABEL = "Core.stow Assets"
LABELS = [CORE_LABEL, "Hero.stow Assets"]


class TestMergeIndexLines:
    """Test the text-level merge."""

    def test_new_document(self) -> None:
        """Test that a missing document gets only the index lines."""
        assert merge_index_lines(None, [CORE_LINE, HERO_LINE], LABELS) == f"{CORE_LINE}\n{HERO_LINE}\n"

    def test_appends_after_content(self) -> None:
        """Test that index lines follow the existing content."""
        text = "# Project\n\nSome notes.\n"
        assert merge_index_lines(text, [CORE_LINE], [CORE_LABEL]) == f"# Project\n\nSome notes.\n{CORE_LINE}\n"

    def test_replaces_existing_line(self) -> None:
        """Test that a previous line with the same label is replaced."""
        text = "# Project\n[Core.stow Assets]|path:Core.stow|texture:old\nFooter\n"
        assert merge_index_lines(text, [CORE_LINE], [CORE_LABEL]) == f"# Project\nFooter\n{CORE_LINE}\n"

    def test_strips_legacy_labels(self) -> None:
        """Test that lines with legacy labels are removed."""
        text = "# Project\n[Core.stow Asset List]|bundle:public/cdn-assets/Core.stow|mesh:rock\n"
        result = merge_index_lines(text, [CORE_LINE], [CORE_LABEL], legacy_labels=["Core.stow Asset List"])
        assert result == f"# Project\n{CORE_LINE}\n"

    def test_keeps_unrelated_bracketed_lines(self) -> None:
        """Test that lines with other labels are preserved in order."""
        text = "[Other.stow Assets]|path:Other.stow\n[Notes] keep me\n"
        assert merge_index_lines(text, [CORE_LINE], [CORE_LABEL]) == (
            f"[Other.stow Assets]|path:Other.stow\n[Notes] keep me\n{CORE_LINE}\n"
        )

    def test_label_must_start_line(self) -> None:
        """Test that a label in the middle of a line is not matched."""
        text = "See [Core.stow Assets] below\n"
        assert merge_index_lines(text, [CORE_LINE], [CORE_LABEL]) == f"See [Core.stow Assets] below\n{CORE_LINE}\n"

    def test_trims_trailing_blank_lines(self) -> None:
        """Test that trailing blank lines collapse before the index."""
        text = "# Project\n\n\n   \n"
        assert merge_index_lines(text, [CORE_LINE], [CORE_LABEL]) == f"# Project\n{CORE_LINE}\n"

    def test_empty_document(self) -> None:
        """Test that an empty document behaves like a new one."""
        assert merge_index_lines("", [CORE_LINE], [CORE_LABEL]) == f"{CORE_LINE}\n"

    def test_label_with_closing_bracket(self) -> None:
        """Test that a label containing ] only matches its own lines."""
        label = "a]b.stow Assets"
        line = f"[{label}]|path:a]b.stow|texture:sky"
        text = "[a] user note\n[a]b.stow Assets]|path:a]b.stow\n"
        assert merge_index_lines(text, [line], [label]) == f"[a] user note\n{line}\n"

    def test_idempotent(self) -> None:
        """Test that merging twice gives the same text."""
        text = "# Project\n\nNotes\n\n"
        once = merge_index_lines(text, [CORE_LINE, HERO_LINE], LABELS, ["Core.stow Asset List"])
        twice = merge_index_lines(once, [CORE_LINE, HERO_LINE], LABELS, ["Core.stow Asset List"])
        assert once == twice


class TestUpdateDocument:
    """Test the file-level merge."""

    def test_creates_missing_file(self) -> None:
        """Test that a missing target is created with the index lines."""
        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "docs" / "AGENTS.md"
            update_document(path, [CORE_LINE], [CORE_LABEL])
            assert path.read_text(encoding="utf-8") == f"{CORE_LINE}\n"

    def test_rewrites_in_place(self) -> None:
        """Test that existing content is kept and no temp file is left."""
        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "CLAUDE.md"
            path.write_text("# Guide\n[Core.stow Assets]|path:Core.stow\n", encoding="utf-8")

            update_document(path, [CORE_LINE], [CORE_LABEL])

            assert path.read_text(encoding="utf-8") == f"# Guide\n{CORE_LINE}\n"
            assert sorted(p.name for p in Path(tmpdir).iterdir()) == ["CLAUDE.md"]

    def test_byte_identical_second_run(self) -> None:
        """Test that a second update leaves the file bytes unchanged."""
        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "CLAUDE.md"
            path.write_text("# Guide\n\n", encoding="utf-8")

            update_document(path, [CORE_LINE, HERO_LINE], LABELS)
            first = path.read_bytes()
            update_document(path, [CORE_LINE, HERO_LINE], LABELS)

            assert path.read_bytes() == first

    def test_writes_through_symlink(self) -> None:
        """Test that a symlinked target updates the linked document."""
        with tempfile.TemporaryDirectory() as tmpdir:
            real = Path(tmpdir) / "CLAUDE.md"
            real.write_text("# Guide\n", encoding="utf-8")
            link = Path(tmpdir) / "AGENTS.md"
            link.symlink_to(real)

            update_document(link, [CORE_LINE], [CORE_LABEL])
            update_document(real, [CORE_LINE], [CORE_LABEL])

            assert link.is_symlink()
            assert real.read_text(encoding="utf-8") == f"# Guide\n{CORE_LINE}\n"
            assert sorted(p.name for p in Path(tmpdir).iterdir()) == ["AGENTS.md", "CLAUDE.md"]

    def test_keeps_permission_bits(self) -> None:
        """Test that the rewritten document keeps its mode."""
        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "CLAUDE.md"
            path.write_text("# Guide\n", encoding="utf-8")
            path.chmod(0o640)

            update_document(path, [CORE_LINE], [CORE_LABEL])

            assert stat.S_IMODE(path.stat().st_mode) == 0o640

    def test_failed_write_leaves_no_temp_file(self) -> None:
        """Test that the temporary file is removed when the replace fails."""
        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "CLAUDE.md"
            path.write_text("# Guide\n", encoding="utf-8")

            with patch.object(Path, "replace", side_effect=OSError("disk full")):
                with pytest.raises(OSError, match="disk full"):
                    update_document(path, [CORE_LINE], [CORE_LABEL])

            assert path.read_text(encoding="utf-8") == "# Guide\n"
            assert sorted(p.name for p in Path(tmpdir).iterdir()) == ["CLAUDE.md"]
