"""Services module - Business logic layer"""

from .change_groups import compute_change_groups, split_hunk_into_groups
from .config_manager import ConfigManager
from .diff_generator import DiffGenerator
from .git_service import GitError, GitService
from .hunk_extractor import compute_hunks
from .patch_builder import generate_group_patch, generate_patch
from .staging import mark_staged_groups

__all__ = [
    "compute_hunks",
    "split_hunk_into_groups",
    "compute_change_groups",
    "mark_staged_groups",
    "generate_patch",
    "generate_group_patch",
    "DiffGenerator",
    "ConfigManager",
    "GitService",
    "GitError",
]
