from __future__ import annotations

import shutil
import subprocess
from pathlib import Path

import pytest

from dorgpatch.config import get_settings


def git(cwd: Path, *args: str) -> str:
    process = subprocess.run(["git", *args], cwd=cwd, check=True, capture_output=True, text=True)
    return process.stdout.strip()


def commit_file(repo: Path, name: str, content: str, message: str) -> str:
    (repo / name).write_text(content, encoding="utf-8")
    git(repo, "add", name)
    git(repo, "commit", "-m", message)
    return git(repo, "rev-parse", "HEAD")


class StubDrupalOrg:
    def __init__(self, next_index: int = 3, error: Exception | None = None) -> None:
        self.next_index = next_index
        self.error = error
        self.calls: list[str] = []

    def next_comment_index(self, issue_number: str) -> int:
        self.calls.append(issue_number)
        if self.error is not None:
            raise self.error
        return self.next_index


@pytest.fixture(autouse=True)
def _clear_settings_cache():
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def repo(tmp_path: Path) -> Path:
    """A repository with a ``8.x-1.x`` base and a checked out ``12345-fix-thing`` branch."""

    if shutil.which("git") is None:
        pytest.skip("git is not installed")

    path = tmp_path / "repo"
    path.mkdir()
    git(path, "init", "--quiet")
    git(path, "symbolic-ref", "HEAD", "refs/heads/8.x-1.x")
    git(path, "config", "user.email", "dev@example.com")
    git(path, "config", "user.name", "Dev")
    git(path, "config", "commit.gpgsign", "false")
    commit_file(path, "module.php", "<?php\n// base\n", "Initial commit")
    git(path, "checkout", "--quiet", "-b", "12345-fix-thing")
    return path
