"""Git API endpoints - per-group staged state and partial stage/unstage"""

from __future__ import annotations

from fastapi import APIRouter, HTTPException

from models.staging import (
    FileChangesRequest,
    FileChangesResponse,
    FileContentResponse,
    StageGroupRequest,
    StageHunksRequest,
    StageResponse,
)
from services.config_manager import ConfigManager
from services.git_service import GitError, GitService
from services.notifier import schedule_notification

from .diff import get_diff_generator

router = APIRouter()


def get_git_service() -> GitService:
    """GitService using the configured binary and timeout"""
    git_config = ConfigManager.get_instance().get_section("git")
    return GitService(
        git_binary=git_config.get("binary", "git"),
        timeout_seconds=int(git_config.get("timeoutSeconds", 30)),
    )


def _notify(message: str):
    webhook_url = ConfigManager.get_instance().get_section("notify").get("webhookUrl", "")
    schedule_notification(webhook_url, message)


async def _revisions(git: GitService, repo_path: str, file_path: str, unstage: bool) -> tuple[str, str, str]:
    """(relative path, base, target) of the diff a stage/unstage patch is cut from.

    Staging applies index -> working changes to the index; unstaging reverts
    HEAD -> index changes from it.
    """
    _, relative = await git.relative_path(repo_path, file_path)
    staged = await git.staged_content(repo_path, relative)
    if unstage:
        return relative, await git.file_at_ref(repo_path, relative), staged
    return relative, staged, await git.working_content(repo_path, relative)


async def _apply(git: GitService, repo_path: str, relative: str, patch: str, unstage: bool, what: str) -> StageResponse:
    action = "Unstaged" if unstage else "Staged"
    try:
        applied = await git.apply_patch(repo_path, patch, reverse=unstage)
    except GitError as e:
        raise HTTPException(status_code=400, detail=f"Failed to apply patch: {e}")

    if not applied:
        return StageResponse(success=True, applied=False, message="Nothing to apply", patch=patch)

    message = f"{action} {what} in {relative}"
    _notify(message)
    return StageResponse(success=True, applied=True, message=message, patch=patch)


async def _stage_hunks(request: StageHunksRequest, unstage: bool) -> StageResponse:
    git = get_git_service()
    try:
        relative, base, target = await _revisions(git, request.repo_path, request.file_path, unstage)
    except GitError as e:
        raise HTTPException(status_code=400, detail=str(e))

    patch = get_diff_generator().hunk_patch(base, target, relative, request.hunk_indices)
    what = f"hunk(s) {', '.join(str(i) for i in sorted(set(request.hunk_indices)))}"
    return await _apply(git, request.repo_path, relative, patch, unstage, what)


async def _stage_group(request: StageGroupRequest, unstage: bool) -> StageResponse:
    git = get_git_service()
    try:
        relative, base, target = await _revisions(git, request.repo_path, request.file_path, unstage)
    except GitError as e:
        raise HTTPException(status_code=400, detail=str(e))

    try:
        patch = get_diff_generator().group_patch(base, target, relative, request.group_index)
    except LookupError as e:
        raise HTTPException(status_code=404, detail=str(e))
    return await _apply(git, request.repo_path, relative, patch, unstage, f"group {request.group_index}")


@router.post("/changes", response_model=FileChangesResponse)
async def file_changes(request: FileChangesRequest) -> FileChangesResponse:
    """Working-tree change groups of a file, marked staged or not"""
    git = get_git_service()
    try:
        _, relative = await git.relative_path(request.repo_path, request.file_path)
        base = await git.file_at_ref(request.repo_path, relative, request.ref)
        staged = await git.staged_content(request.repo_path, relative)
        working = await git.working_content(request.repo_path, relative)
    except GitError as e:
        raise HTTPException(status_code=400, detail=str(e))

    result = get_diff_generator().generate_staged_diff(base, working, staged, relative)

    return FileChangesResponse(
        file_path=relative,
        hunks=result.hunks,
        change_groups=result.change_groups,
        staged_count=sum(1 for g in result.change_groups if g.is_staged),
        total=len(result.change_groups),
    )


@router.get("/file", response_model=FileContentResponse)
async def file_at_ref(repo_path: str, file_path: str, ref: str = "HEAD") -> FileContentResponse:
    """Content of a file at a commit-ish"""
    git = get_git_service()
    try:
        _, relative = await git.relative_path(repo_path, file_path)
        content = await git.file_at_ref(repo_path, relative, ref)
    except GitError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return FileContentResponse(file_path=relative, ref=ref, content=content)


@router.get("/staged", response_model=FileContentResponse)
async def staged_content(repo_path: str, file_path: str) -> FileContentResponse:
    """Content of a file in the index"""
    git = get_git_service()
    try:
        _, relative = await git.relative_path(repo_path, file_path)
        content = await git.staged_content(repo_path, relative)
    except GitError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return FileContentResponse(file_path=relative, ref="INDEX", content=content)


@router.post("/stage-hunks", response_model=StageResponse)
async def stage_hunks(request: StageHunksRequest) -> StageResponse:
    """Stage whole hunks of the index -> working diff"""
    return await _stage_hunks(request, unstage=False)


@router.post("/unstage-hunks", response_model=StageResponse)
async def unstage_hunks(request: StageHunksRequest) -> StageResponse:
    """Unstage whole hunks of the HEAD -> index diff"""
    return await _stage_hunks(request, unstage=True)


@router.post("/stage-group", response_model=StageResponse)
async def stage_group(request: StageGroupRequest) -> StageResponse:
    """Stage one change group of the index -> working diff"""
    return await _stage_group(request, unstage=False)


@router.post("/unstage-group", response_model=StageResponse)
async def unstage_group(request: StageGroupRequest) -> StageResponse:
    """Unstage one change group of the HEAD -> index diff"""
    return await _stage_group(request, unstage=True)
