"""Shared pytest fixtures for backend tests."""

import shutil
import subprocess
from pathlib import Path

import pytest

from services.config_manager import CONFIG_DIR_ENV, ConfigManager

LETTERS = "".join(f"{c}\n" for c in "abcdefghijklmnopqrst")


@pytest.fixture(autouse=True)
def config_dir(tmp_path, monkeypatch) -> Path:
    """Point the config manager at a throwaway directory."""
    path = tmp_path / "config"
    monkeypatch.setenv(CONFIG_DIR_ENV, str(path))
    ConfigManager.reset_instance()
    yield path
    ConfigManager.reset_instance()


def git(cwd: Path, *args: str) -> str:
    """Run git synchronously for test setup."""
    result = subprocess.run(
        ["git", *args],
        cwd=cwd,
        check=True,
        capture_output=True,
        text=True,
    )
    return result.stdout


@pytest.fixture
def git_repo(tmp_path) -> Path:
    """A repository with letters.txt (a..t, one per line) committed."""
    if shutil.which("git") is None:
        pytest.skip("git executable not available")

    repo = tmp_path / "repo"
    repo.mkdir()
    git(repo, "init", "-q")
    git(repo, "config", "user.email", "tests@example.com")
    git(repo, "config", "user.name", "Tests")
    git(repo, "config", "commit.gpgsign", "false")
    (repo / "letters.txt").write_text(LETTERS)
    git(repo, "add", "letters.txt")
    git(repo, "commit", "-q", "-m", "initial")
    return repo
