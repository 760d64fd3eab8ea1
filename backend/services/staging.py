"""
Staging Reconciler - Decide which working-tree change groups are already staged

The working diff (base -> working) and the staged diff (base -> staged) are
computed independently, so their modified-side line numbers drift apart as
soon as an earlier change is staged. Groups are matched on where they sit in
the base revision and on their exact tagged lines instead.
"""

from __future__ import annotations

from models.diff import ChangeGroup, Hunk, LineKind


def _find_hunk(group: ChangeGroup, hunks: list[Hunk]) -> Hunk | None:
    for hunk in hunks:
        if hunk.index == group.hunk_index:
            return hunk
    return None


def group_lines(group: ChangeGroup, hunks: list[Hunk]) -> list[str]:
    """Tagged lines spanned by a group, verbatim"""
    hunk = _find_hunk(group, hunks)
    if hunk is None:
        return []
    return hunk.lines[group.line_offset_start : group.line_offset_end + 1]


def group_old_anchor(group: ChangeGroup, hunks: list[Hunk]) -> int:
    """Line in the base revision where a group starts, or -1 without its hunk"""
    hunk = _find_hunk(group, hunks)
    if hunk is None:
        return -1
    old_line = hunk.old_start
    for line in hunk.lines[: group.line_offset_start]:
        if LineKind.of(line) in (LineKind.CONTEXT, LineKind.REMOVE):
            old_line += 1
    return old_line


def _missing_newlines(group: ChangeGroup, hunks: list[Hunk]) -> tuple[int, ...]:
    """Group-relative offsets of lines lacking a trailing newline"""
    hunk = _find_hunk(group, hunks)
    if hunk is None:
        return ()
    return tuple(
        offset - group.line_offset_start
        for offset in hunk.missing_newline_at
        if group.line_offset_start <= offset <= group.line_offset_end
    )


def _group_key(group: ChangeGroup, hunks: list[Hunk]) -> tuple[int, str, tuple[int, ...]]:
    return (
        group_old_anchor(group, hunks),
        "\n".join(group_lines(group, hunks)),
        _missing_newlines(group, hunks),
    )


def mark_staged_groups(
    groups: list[ChangeGroup],
    staged_groups: list[ChangeGroup],
    hunks: list[Hunk],
    staged_hunks: list[Hunk],
) -> list[ChangeGroup]:
    """Return copies of `groups` with `is_staged` set.

    A group counts as staged only when the staged diff holds a group with the
    same base-revision anchor and byte-identical tagged lines.
    """
    staged_keys = {_group_key(group, staged_hunks) for group in staged_groups}

    return [
        group.model_copy(update={"is_staged": _group_key(group, hunks) in staged_keys})
        for group in groups
    ]
