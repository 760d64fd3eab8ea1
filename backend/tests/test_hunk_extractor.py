"""Unit tests for hunk extraction."""

import pytest

from models.diff import LineKind
from services.hunk_extractor import compute_hunks, split_lines

from conftest import LETTERS


def _counts(hunk):
    kinds = [LineKind.of(line) for line in hunk.lines]
    old = sum(1 for k in kinds if k in (LineKind.CONTEXT, LineKind.REMOVE))
    new = sum(1 for k in kinds if k in (LineKind.CONTEXT, LineKind.ADD))
    return old, new


class TestSplitLines:
    """Test newline splitting."""

    def test_empty_text(self) -> None:
        """Empty text has no lines."""
        assert split_lines("") == []

    def test_trailing_newline_adds_no_line(self) -> None:
        """A final newline does not create an empty line."""
        assert split_lines("a\nb\n") == ["a\n", "b\n"]

    def test_missing_trailing_newline(self) -> None:
        """Only the unterminated last line lacks a newline."""
        assert split_lines("a\nb") == ["a\n", "b"]

    def test_keeps_carriage_returns(self) -> None:
        """Only \\n separates lines."""
        assert split_lines("a\r\nb\r\n") == ["a\r\n", "b\r\n"]


class TestComputeHunks:
    """Test hunk computation."""

    @pytest.mark.parametrize("text", ["", "hello\nworld\n", "no newline"])
    def test_identical_content_has_no_hunks(self, text) -> None:
        """Identical inputs give an empty list."""
        assert compute_hunks(text, text) == []

    def test_detects_added_lines(self) -> None:
        """An appended line shows up as a single addition."""
        hunks = compute_hunks("line1\nline2\n", "line1\nline2\nline3\n")

        assert len(hunks) == 1
        assert hunks[0].lines == [" line1", " line2", "+line3"]
        assert (hunks[0].old_start, hunks[0].old_lines) == (1, 2)
        assert (hunks[0].new_start, hunks[0].new_lines) == (1, 3)

    def test_detects_removed_lines(self) -> None:
        """A removed line is tagged with '-'."""
        hunks = compute_hunks("line1\nline2\nline3\n", "line1\nline3\n")

        assert len(hunks) == 1
        assert "-line2" in hunks[0].lines

    def test_detects_modified_lines(self) -> None:
        """A replaced line is a removal followed by an addition."""
        hunks = compute_hunks("line1\noriginal\nline3\n", "line1\nmodified\nline3\n")

        assert len(hunks) == 1
        assert hunks[0].lines == [" line1", "-original", "+modified", " line3"]

    def test_detects_multiple_hunks(self) -> None:
        """Distant edits produce separate hunks with sequential indices."""
        modified = LETTERS.replace("b\n", "B\n").replace("r\n", "R\n")
        hunks = compute_hunks(LETTERS, modified)

        assert len(hunks) == 2
        assert [h.index for h in hunks] == [0, 1]
        assert hunks[0].old_start == 1
        assert hunks[1].old_start == 14
        assert hunks[1].lines == [" n", " o", " p", " q", "-r", "+R", " s", " t"]

    def test_nearby_edits_share_a_hunk(self) -> None:
        """Edits within the context window are merged into one hunk."""
        modified = LETTERS.replace("b\n", "B\n").replace("e\n", "E\n")
        hunks = compute_hunks(LETTERS, modified)

        assert len(hunks) == 1

    def test_context_lines_controls_merging(self) -> None:
        """With no context every edit is its own hunk."""
        modified = LETTERS.replace("b\n", "B\n").replace("d\n", "D\n")
        hunks = compute_hunks(LETTERS, modified, context_lines=0)

        assert len(hunks) == 2
        assert hunks[0].lines == ["-b", "+B"]
        assert (hunks[0].old_start, hunks[0].new_start) == (2, 2)

    def test_empty_original(self) -> None:
        """Everything is added to an empty file."""
        hunks = compute_hunks("", "new content\n")

        assert len(hunks) == 1
        assert hunks[0].lines == ["+new content"]
        assert hunks[0].old_lines == 0
        assert hunks[0].old_start == 0
        assert hunks[0].new_start == 1

    def test_empty_modified(self) -> None:
        """Everything is removed when the file is emptied."""
        hunks = compute_hunks("content\n", "")

        assert len(hunks) == 1
        assert hunks[0].lines == ["-content"]
        assert hunks[0].new_lines == 0
        assert hunks[0].new_start == 0

    def test_pure_insertion_start_points_before_range(self) -> None:
        """A zero-length old range reports the line before the insertion."""
        hunks = compute_hunks("a\nb\n", "a\nX\nb\n", context_lines=0)

        assert hunks[0].old_start == 1
        assert hunks[0].old_lines == 0
        assert hunks[0].new_start == 2

    def test_adding_final_newline_is_a_change(self) -> None:
        """Terminating the last line replaces it."""
        hunks = compute_hunks("a\nb", "a\nb\n")

        assert len(hunks) == 1
        assert hunks[0].lines == [" a", "-b", "+b"]
        assert hunks[0].missing_newline_at == [1]

    def test_unterminated_context_line_is_recorded(self) -> None:
        """An unchanged last line without newline is flagged as context."""
        hunks = compute_hunks("a\nb\nc", "a\nB\nc")

        assert hunks[0].lines == [" a", "-b", "+B", " c"]
        assert hunks[0].missing_newline_at == [3]

    def test_terminated_files_flag_nothing(self) -> None:
        """Files ending in a newline have no flagged lines."""
        assert compute_hunks("a\n", "b\n")[0].missing_newline_at == []

    def test_carriage_returns_are_content(self) -> None:
        """Line endings other than \\n stay in the line text."""
        hunks = compute_hunks("a\r\nb\r\n", "a\r\nc\r\n")

        assert "-b\r" in hunks[0].lines
        assert "+c\r" in hunks[0].lines

    def test_file_label_does_not_change_result(self) -> None:
        """The label is bookkeeping only."""
        assert compute_hunks("a\n", "b\n", "x.py") == compute_hunks("a\n", "b\n", "y.py")

    @pytest.mark.parametrize(
        "original,modified",
        [
            ("", "a\nb\n"),
            ("a\nb\n", ""),
            (LETTERS, LETTERS.replace("c\n", "")),
            (LETTERS, LETTERS.replace("j\n", "j\nJ1\nJ2\n").replace("a\n", "")),
            ("x\ny\nz\n", "z\ny\nx\n"),
        ],
    )
    def test_line_counts_match_headers(self, original, modified) -> None:
        """Context+removed equals old_lines; context+added equals new_lines."""
        hunks = compute_hunks(original, modified)

        assert hunks
        for hunk in hunks:
            assert hunk.lines
            assert _counts(hunk) == (hunk.old_lines, hunk.new_lines)

    def test_hunks_are_immutable(self) -> None:
        """Hunks are frozen value objects."""
        hunk = compute_hunks("a\n", "b\n")[0]

        with pytest.raises(Exception):
            hunk.index = 5
