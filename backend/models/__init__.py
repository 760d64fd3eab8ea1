"""Models module - Pydantic data models"""

from .diff import ChangeGroup, DiffResult, Hunk, LineKind
from .staging import (
    DiffRequest,
    FileChangesRequest,
    FileChangesResponse,
    FileContentResponse,
    GroupPatchRequest,
    PatchRequest,
    PatchResponse,
    StagedDiffRequest,
    StageGroupRequest,
    StageHunksRequest,
    StageResponse,
)

__all__ = [
    # Diff models
    "LineKind",
    "Hunk",
    "ChangeGroup",
    "DiffResult",
    # Request/response models
    "DiffRequest",
    "StagedDiffRequest",
    "PatchRequest",
    "GroupPatchRequest",
    "PatchResponse",
    "FileChangesRequest",
    "FileChangesResponse",
    "FileContentResponse",
    "StageHunksRequest",
    "StageGroupRequest",
    "StageResponse",
]
