"""Diff API endpoints - hunks, change groups and patch text for raw revisions"""

from __future__ import annotations

from fastapi import APIRouter, HTTPException

from models.diff import DiffResult
from models.staging import (
    DiffRequest,
    GroupPatchRequest,
    PatchRequest,
    PatchResponse,
    StagedDiffRequest,
)
from services.config_manager import ConfigManager
from services.diff_generator import DiffGenerator

router = APIRouter()


def get_diff_generator() -> DiffGenerator:
    """DiffGenerator using the configured context size"""
    diff_config = ConfigManager.get_instance().get_section("diff")
    return DiffGenerator(context_lines=int(diff_config.get("contextLines", 4)))


@router.post("/hunks", response_model=DiffResult)
async def compute_diff(request: DiffRequest) -> DiffResult:
    """Compute hunks and change groups between two revisions"""
    return get_diff_generator().generate_diff(request.original, request.modified, request.file_path)


@router.post("/staged", response_model=DiffResult)
async def compute_staged_diff(request: StagedDiffRequest) -> DiffResult:
    """Compute change groups and mark the ones already in the staged revision"""
    return get_diff_generator().generate_staged_diff(
        request.original,
        request.modified,
        request.staged,
        request.file_path,
    )


@router.post("/patch", response_model=PatchResponse)
async def hunk_patch(request: PatchRequest) -> PatchResponse:
    """Patch text for the selected hunks"""
    patch = get_diff_generator().hunk_patch(
        request.original,
        request.modified,
        request.file_path,
        request.hunk_indices,
    )
    return PatchResponse(file_path=request.file_path, patch=patch, empty=not patch)


@router.post("/group-patch", response_model=PatchResponse)
async def group_patch(request: GroupPatchRequest) -> PatchResponse:
    """Patch text applying only one change group"""
    try:
        patch = get_diff_generator().group_patch(
            request.original,
            request.modified,
            request.file_path,
            request.group_index,
        )
    except LookupError as e:
        raise HTTPException(status_code=404, detail=str(e))
    return PatchResponse(file_path=request.file_path, patch=patch, empty=not patch)
