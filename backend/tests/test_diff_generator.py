"""Unit tests for the DiffGenerator pipeline."""

import pytest

from services.diff_generator import DiffGenerator

from conftest import LETTERS


@pytest.fixture
def generator() -> DiffGenerator:
    return DiffGenerator()


class TestGenerateDiff:
    """Test full diff results."""

    def test_identical_content(self, generator) -> None:
        """No changes give an empty result and no patch."""
        result = generator.generate_diff(LETTERS, LETTERS, "letters.txt")

        assert result.hunks == []
        assert result.change_groups == []
        assert result.unified_diff == ""

    def test_result_covers_all_hunks(self, generator) -> None:
        """The unified diff holds every hunk."""
        modified = LETTERS.replace("b\n", "B\n").replace("r\n", "R\n")
        result = generator.generate_diff(LETTERS, modified, "letters.txt")

        assert len(result.hunks) == 2
        assert len(result.change_groups) == 2
        assert result.unified_diff.startswith("--- a/letters.txt\n+++ b/letters.txt\n")
        assert result.unified_diff.count("@@ -") == 2
        assert all(g.is_staged is None for g in result.change_groups)

    def test_context_lines_setting(self) -> None:
        """Smaller context splits nearby edits into separate hunks."""
        modified = LETTERS.replace("b\n", "B\n").replace("g\n", "G\n")

        assert len(DiffGenerator().generate_diff(LETTERS, modified, "f").hunks) == 1
        assert len(DiffGenerator(context_lines=1).generate_diff(LETTERS, modified, "f").hunks) == 2


class TestGenerateStagedDiff:
    """Test diffs annotated with staged state."""

    def test_marks_staged_groups(self, generator) -> None:
        """Groups present in the staged revision are marked."""
        working = LETTERS.replace("b\n", "B\n").replace("r\n", "R\n")
        staged = LETTERS.replace("b\n", "B\n")

        result = generator.generate_staged_diff(LETTERS, working, staged, "letters.txt")

        assert [g.is_staged for g in result.change_groups] == [True, False]


class TestPatches:
    """Test patch helpers."""

    def test_hunk_patch(self, generator) -> None:
        """Selected hunks only."""
        modified = LETTERS.replace("b\n", "B\n").replace("r\n", "R\n")

        patch = generator.hunk_patch(LETTERS, modified, "letters.txt", [1])

        assert "+R\n" in patch
        assert "+B\n" not in patch

    def test_hunk_patch_empty_selection(self, generator) -> None:
        """No selection, no patch."""
        assert generator.hunk_patch(LETTERS, LETTERS.replace("b\n", "B\n"), "f", []) == ""

    def test_group_patch(self, generator) -> None:
        """A group patch leaves the other group of the hunk out."""
        modified = LETTERS.replace("b\n", "B\n").replace("e\n", "E\n")

        patch = generator.group_patch(LETTERS, modified, "letters.txt", 1)

        assert "-e\n+E\n" in patch
        assert "+B\n" not in patch
        assert "\n b\n" in patch

    def test_group_patch_unknown_group(self, generator) -> None:
        """An index with no group raises LookupError."""
        with pytest.raises(LookupError):
            generator.group_patch(LETTERS, LETTERS.replace("b\n", "B\n"), "f", 5)
