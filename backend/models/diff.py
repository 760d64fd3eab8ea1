"""Diff-related data models"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict


class LineKind(str, Enum):
    """Prefix of a tagged hunk line"""

    CONTEXT = " "
    ADD = "+"
    REMOVE = "-"

    @classmethod
    def of(cls, line: str) -> "LineKind | None":
        """Classify a tagged line by its first character"""
        if not line:
            return None
        try:
            return cls(line[0])
        except ValueError:
            return None


class Hunk(BaseModel):
    """One contiguous region of difference between two texts"""

    model_config = ConfigDict(frozen=True)

    index: int
    old_start: int  # 1-indexed
    old_lines: int
    new_start: int  # 1-indexed
    new_lines: int
    lines: list[str]  # " ctx", "-removed", "+added"
    # Offsets into `lines` of a file's last line when it has no trailing newline
    missing_newline_at: list[int] = []


class ChangeGroup(BaseModel):
    """A maximal run of non-context lines inside a hunk"""

    model_config = ConfigDict(frozen=True)

    group_index: int
    hunk_index: int
    new_start: int  # 1-indexed, inclusive
    new_end: int
    line_offset_start: int  # index into Hunk.lines, inclusive
    line_offset_end: int
    is_staged: bool | None = None


class DiffResult(BaseModel):
    """Complete diff result for a file"""

    file_path: str
    hunks: list[Hunk]
    change_groups: list[ChangeGroup]
    unified_diff: str  # Patch text covering every hunk
