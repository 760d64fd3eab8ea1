"""
Hunk Extractor - Turn two revisions of a file into unified-diff hunks
"""

from __future__ import annotations

from difflib import SequenceMatcher

from models.diff import Hunk, LineKind

DEFAULT_CONTEXT_LINES = 4


def split_lines(text: str) -> list[str]:
    """Split text after each newline, keeping it.

    Only a final line without a trailing newline lacks the "\\n", so "c" and
    "c\\n" compare unequal.
    """
    parts = text.split("\n")
    lines = [part + "\n" for part in parts[:-1]]
    if parts[-1]:
        lines.append(parts[-1])
    return lines


def _range_start(start: int, length: int) -> int:
    """1-indexed start line; an empty range points at the line before it"""
    return start + 1 if length else start


def compute_hunks(
    original: str,
    modified: str,
    file_label: str = "file",
    context_lines: int = DEFAULT_CONTEXT_LINES,
) -> list[Hunk]:
    """Compute the hunks turning `original` into `modified`.

    `file_label` only names the file for the diff primitive and does not
    influence the result. Identical inputs give an empty list.
    """
    if original == modified:
        return []

    old = split_lines(original)
    new = split_lines(modified)

    matcher = SequenceMatcher(None, old, new, autojunk=False)
    hunks = []

    for group in matcher.get_grouped_opcodes(context_lines):
        i1, i2 = group[0][1], group[-1][2]
        j1, j2 = group[0][3], group[-1][4]

        lines: list[str] = []
        missing_newline_at: list[int] = []

        def emit(kind: LineKind, text: str):
            if text.endswith("\n"):
                text = text[:-1]
            else:
                missing_newline_at.append(len(lines))
            lines.append(kind.value + text)

        for tag, a1, a2, b1, b2 in group:
            if tag == "equal":
                for line in old[a1:a2]:
                    emit(LineKind.CONTEXT, line)
                continue
            if tag in ("replace", "delete"):
                for line in old[a1:a2]:
                    emit(LineKind.REMOVE, line)
            if tag in ("replace", "insert"):
                for line in new[b1:b2]:
                    emit(LineKind.ADD, line)

        hunks.append(
            Hunk(
                index=len(hunks),
                old_start=_range_start(i1, i2 - i1),
                old_lines=i2 - i1,
                new_start=_range_start(j1, j2 - j1),
                new_lines=j2 - j1,
                lines=lines,
                missing_newline_at=missing_newline_at,
            )
        )

    return hunks
