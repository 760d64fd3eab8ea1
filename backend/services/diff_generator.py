"""
Diff Generator Service - Run the hunk/group/staging pipeline for one file
"""

from __future__ import annotations

from models.diff import ChangeGroup, DiffResult, Hunk

from .change_groups import compute_change_groups
from .hunk_extractor import DEFAULT_CONTEXT_LINES, compute_hunks
from .patch_builder import generate_group_patch, generate_patch
from .staging import mark_staged_groups


class DiffGenerator:
    """Generate hunks, change groups and patches for file revisions"""

    def __init__(self, context_lines: int = DEFAULT_CONTEXT_LINES):
        self.context_lines = context_lines

    def compute(self, original: str, modified: str, file_path: str) -> tuple[list[Hunk], list[ChangeGroup]]:
        """Hunks and change groups turning `original` into `modified`"""
        hunks = compute_hunks(original, modified, file_path, self.context_lines)
        return hunks, compute_change_groups(hunks)

    def generate_diff(
        self,
        original_content: str,
        new_content: str,
        file_path: str,
    ) -> DiffResult:
        """Generate structured diff from original and new content"""
        hunks, groups = self.compute(original_content, new_content, file_path)
        return self._result(file_path, hunks, groups)

    def generate_staged_diff(
        self,
        original_content: str,
        new_content: str,
        staged_content: str,
        file_path: str,
    ) -> DiffResult:
        """Generate structured diff with groups marked against a staged revision"""
        hunks, groups = self.compute(original_content, new_content, file_path)
        staged_hunks, staged_groups = self.compute(original_content, staged_content, file_path)
        marked = mark_staged_groups(groups, staged_groups, hunks, staged_hunks)
        return self._result(file_path, hunks, marked)

    def hunk_patch(
        self,
        original_content: str,
        new_content: str,
        file_path: str,
        hunk_indices: list[int],
    ) -> str:
        """Patch text for the selected hunks ("" when none match)"""
        hunks, _ = self.compute(original_content, new_content, file_path)
        return generate_patch(file_path, hunks, hunk_indices)

    def group_patch(
        self,
        original_content: str,
        new_content: str,
        file_path: str,
        group_index: int,
    ) -> str:
        """Patch text applying a single change group.

        Raises LookupError when `group_index` names no group of this diff.
        """
        hunks, groups = self.compute(original_content, new_content, file_path)
        group = next((g for g in groups if g.group_index == group_index), None)
        if group is None:
            raise LookupError(f"Change group {group_index} not found in {file_path}")
        hunk = next(h for h in hunks if h.index == group.hunk_index)
        return generate_group_patch(file_path, hunk, group)

    def _result(self, file_path: str, hunks: list[Hunk], groups: list[ChangeGroup]) -> DiffResult:
        return DiffResult(
            file_path=file_path,
            hunks=hunks,
            change_groups=groups,
            unified_diff=generate_patch(file_path, hunks, [h.index for h in hunks]),
        )
