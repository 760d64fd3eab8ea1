"""Request and response models for the diff and git endpoints"""

from __future__ import annotations

from pydantic import BaseModel

from .diff import ChangeGroup, Hunk


class DiffRequest(BaseModel):
    """Request to diff two revisions of a file"""

    original: str
    modified: str
    file_path: str = "file"


class StagedDiffRequest(DiffRequest):
    """Request to diff and mark groups already present in a staged revision"""

    staged: str


class PatchRequest(DiffRequest):
    """Request for a patch covering selected hunks"""

    hunk_indices: list[int] = []


class GroupPatchRequest(DiffRequest):
    """Request for a patch covering a single change group"""

    group_index: int


class PatchResponse(BaseModel):
    """Synthesized patch text"""

    file_path: str
    patch: str
    empty: bool


class FileChangesRequest(BaseModel):
    """Request for the HEAD -> working changes of a tracked file"""

    repo_path: str
    file_path: str
    ref: str = "HEAD"


class FileChangesResponse(BaseModel):
    """Working changes of a file with per-group staged state"""

    file_path: str
    hunks: list[Hunk]
    change_groups: list[ChangeGroup]
    staged_count: int
    total: int


class StageHunksRequest(BaseModel):
    """Request to stage or unstage whole hunks"""

    repo_path: str
    file_path: str
    hunk_indices: list[int]


class StageGroupRequest(BaseModel):
    """Request to stage or unstage one change group"""

    repo_path: str
    file_path: str
    group_index: int


class StageResponse(BaseModel):
    """Result of applying a patch to the index"""

    success: bool
    applied: bool
    message: str
    patch: str = ""


class FileContentResponse(BaseModel):
    """File content at a given revision"""

    file_path: str
    ref: str
    content: str
