"""
Patch Builder - Synthesize unified-diff text for selected hunks or one change group
"""

from __future__ import annotations

from models.diff import ChangeGroup, Hunk, LineKind

NO_NEWLINE_MARKER = "\\ No newline at end of file"


def _file_header(file_path: str) -> list[str]:
    return [f"--- a/{file_path}", f"+++ b/{file_path}"]


def _hunk_header(old_start: int, old_lines: int, new_start: int, new_lines: int) -> str:
    return f"@@ -{old_start},{old_lines} +{new_start},{new_lines} @@"


def _hunk_body(hunk: Hunk) -> list[str]:
    body = []
    for offset, line in enumerate(hunk.lines):
        body.append(line)
        if offset in hunk.missing_newline_at:
            body.append(NO_NEWLINE_MARKER)
    return body


def generate_patch(file_path: str, hunks: list[Hunk], selected_indices: list[int]) -> str:
    """Build a patch from the hunks whose index is selected.

    Unknown indices are ignored. An empty selection yields "" so callers can
    tell there is nothing to apply.
    """
    wanted = set(selected_indices)
    selected = [hunk for hunk in hunks if hunk.index in wanted]
    if not selected:
        return ""

    lines = _file_header(file_path)
    for hunk in selected:
        lines.append(_hunk_header(hunk.old_start, hunk.old_lines, hunk.new_start, hunk.new_lines))
        lines.extend(_hunk_body(hunk))

    return "\n".join(lines) + "\n"


def generate_group_patch(file_path: str, hunk: Hunk, group: ChangeGroup) -> str:
    """Build a single-hunk patch that applies only `group`.

    Removals outside the group become context and additions outside it are
    dropped, so the rest of the hunk reads as the base revision. A dropped
    addition takes its end-of-file marker with it.
    """
    body = []
    for offset, line in enumerate(hunk.lines):
        kind = LineKind.of(line)
        inside = group.line_offset_start <= offset <= group.line_offset_end
        if not inside and kind is LineKind.ADD:
            continue
        if not inside and kind is LineKind.REMOVE:
            line = LineKind.CONTEXT.value + line[1:]
        body.append(line)
        if offset in hunk.missing_newline_at:
            body.append(NO_NEWLINE_MARKER)

    old_lines = 0
    new_lines = 0
    for line in body:
        kind = LineKind.of(line)
        if kind is LineKind.CONTEXT:
            old_lines += 1
            new_lines += 1
        elif kind is LineKind.REMOVE:
            old_lines += 1
        elif kind is LineKind.ADD:
            new_lines += 1

    lines = _file_header(file_path)
    lines.append(_hunk_header(hunk.old_start, old_lines, hunk.old_start, new_lines))
    lines.extend(body)

    return "\n".join(lines) + "\n"
