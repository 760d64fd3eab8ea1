"""
Change-Group Splitter - Break hunks into independently stageable changes
"""

from __future__ import annotations

from models.diff import ChangeGroup, Hunk, LineKind


def _close_group(
    hunk: Hunk,
    group_index: int,
    offset_start: int,
    offset_end: int,
    candidate_start: int,
    last_plus_line: int | None,
) -> ChangeGroup:
    if last_plus_line is not None:
        new_start, new_end = candidate_start, last_plus_line
    else:
        # Pure deletion: anchor on the modified line just before the gap
        new_start = new_end = max(candidate_start - 1, 1)

    return ChangeGroup(
        group_index=group_index,
        hunk_index=hunk.index,
        new_start=new_start,
        new_end=new_end,
        line_offset_start=offset_start,
        line_offset_end=offset_end,
    )


def split_hunk_into_groups(hunk: Hunk, start_group_index: int) -> list[ChangeGroup]:
    """Split a hunk into its maximal runs of added/removed lines.

    Group indices are numbered from `start_group_index`. New-side line numbers
    are tracked with a cursor that starts at `hunk.new_start` and moves past
    context and added lines only.
    """
    groups: list[ChangeGroup] = []
    modified_line = hunk.new_start
    run_start: int | None = None
    candidate_start = 0
    last_plus_line: int | None = None

    for offset, line in enumerate(hunk.lines):
        kind = LineKind.of(line)

        if kind in (LineKind.ADD, LineKind.REMOVE):
            if run_start is None:
                run_start = offset
                candidate_start = modified_line
                last_plus_line = None
            if kind is LineKind.ADD:
                last_plus_line = modified_line
                modified_line += 1
            continue

        if run_start is not None:
            groups.append(
                _close_group(
                    hunk,
                    start_group_index + len(groups),
                    run_start,
                    offset - 1,
                    candidate_start,
                    last_plus_line,
                )
            )
            run_start = None
        modified_line += 1

    if run_start is not None:
        groups.append(
            _close_group(
                hunk,
                start_group_index + len(groups),
                run_start,
                len(hunk.lines) - 1,
                candidate_start,
                last_plus_line,
            )
        )

    return groups


def compute_change_groups(hunks: list[Hunk]) -> list[ChangeGroup]:
    """Split every hunk, numbering groups globally in hunk order"""
    groups: list[ChangeGroup] = []
    for hunk in hunks:
        groups.extend(split_hunk_into_groups(hunk, len(groups)))
    return groups
