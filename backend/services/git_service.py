"""
Git Service - Read file revisions and apply patches to the index

Git is invoked with create_subprocess_exec and list arguments, never via a
shell. Patches are fed to `git apply` on stdin.
"""

from __future__ import annotations

import asyncio
import os
import re
from pathlib import Path

# git show stderr when the revision exists but the path is not in it
_MISSING_PATH = re.compile(r"path '.*' (does not exist|exists on disk, but not in)")


class GitError(RuntimeError):
    """A git command failed or a path is outside the repository"""


class GitService:
    """Thin async wrapper over the git command line"""

    def __init__(self, git_binary: str = "git", timeout_seconds: int = 30):
        self.git_binary = git_binary
        self.timeout_seconds = timeout_seconds

    async def _run(
        self,
        args: list[str],
        cwd: str | Path,
        stdin: str | None = None,
    ) -> tuple[int, str, str]:
        """Run git, returning (exit code, stdout, stderr)"""
        try:
            process = await asyncio.create_subprocess_exec(
                self.git_binary,
                *args,
                stdin=asyncio.subprocess.PIPE if stdin is not None else asyncio.subprocess.DEVNULL,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
                cwd=str(cwd),
                env={**os.environ, "LC_ALL": "C"},
            )
        except (FileNotFoundError, NotADirectoryError) as e:
            raise GitError(f"Cannot run {self.git_binary} in {cwd}: {e}") from e

        try:
            stdout, stderr = await asyncio.wait_for(
                process.communicate(stdin.encode("utf-8") if stdin is not None else None),
                timeout=self.timeout_seconds,
            )
        except asyncio.TimeoutError as e:
            process.kill()
            await process.wait()
            raise GitError(f"git {args[0]} timed out after {self.timeout_seconds}s") from e

        return (
            process.returncode,
            stdout.decode("utf-8", errors="replace"),
            stderr.decode("utf-8", errors="replace"),
        )

    async def _check(self, args: list[str], cwd: str | Path, stdin: str | None = None) -> str:
        code, stdout, stderr = await self._run(args, cwd, stdin)
        if code != 0:
            message = stderr.strip() or f"exit code {code}"
            print(f"[GitService] git {' '.join(args)} failed: {message}")
            raise GitError(message)
        return stdout

    async def repo_root(self, path: str) -> Path:
        """Top-level directory of the repository containing `path`"""
        start = Path(path).expanduser()
        if start.is_file():
            start = start.parent
        stdout = await self._check(["rev-parse", "--show-toplevel"], start)
        return Path(stdout.strip()).resolve()

    async def relative_path(self, repo_path: str, file_path: str) -> tuple[Path, str]:
        """(repo root, repo-relative POSIX path) for a file inside the repository"""
        root = await self.repo_root(repo_path)
        candidate = Path(file_path).expanduser()
        if not candidate.is_absolute():
            candidate = root / candidate
        resolved = candidate.resolve(strict=False)
        try:
            relative = resolved.relative_to(root)
        except ValueError as e:
            raise GitError(f"{file_path} is outside the repository {root}") from e
        return root, relative.as_posix()

    async def _show(self, root: Path, relative: str, revision: str) -> str:
        args = ["show", f"{revision}:{relative}"]
        code, stdout, stderr = await self._run(args, root)
        if code == 0:
            return stdout
        if _MISSING_PATH.search(stderr):
            # Absent at this revision: diff it as an empty file
            return ""
        message = stderr.strip() or f"exit code {code}"
        print(f"[GitService] git {' '.join(args)} failed: {message}")
        raise GitError(message)

    async def file_at_ref(self, repo_path: str, file_path: str, ref: str = "HEAD") -> str:
        """Content of a file at a commit-ish ("" when absent).

        An unborn HEAD reads as empty; any other unknown ref raises GitError.
        """
        if ref.startswith("-"):
            raise GitError(f"Invalid ref: {ref}")
        root, relative = await self.relative_path(repo_path, file_path)
        code, _, _ = await self._run(["rev-parse", "--verify", "--quiet", f"{ref}^{{commit}}"], root)
        if code != 0:
            if ref == "HEAD":
                return ""
            raise GitError(f"Unknown ref: {ref}")
        return await self._show(root, relative, ref)

    async def staged_content(self, repo_path: str, file_path: str) -> str:
        """Content of a file in the index ("" when not staged)"""
        root, relative = await self.relative_path(repo_path, file_path)
        return await self._show(root, relative, "")

    async def working_content(self, repo_path: str, file_path: str) -> str:
        """Content of a file in the working tree ("" when missing)"""
        root, relative = await self.relative_path(repo_path, file_path)
        path = root / relative
        if not path.is_file():
            return ""
        with open(path, encoding="utf-8", errors="replace", newline="") as f:
            return f.read()

    async def apply_patch(self, repo_path: str, patch: str, reverse: bool = False) -> bool:
        """Apply patch text to the index; False when there was nothing to apply"""
        if not patch:
            return False
        root = await self.repo_root(repo_path)
        args = ["apply", "--cached", "--unidiff-zero"]
        if reverse:
            args.append("--reverse")
        args.append("-")
        await self._check(args, root, stdin=patch)
        return True
