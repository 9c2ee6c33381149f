"""Synchronous runner for the git CLI."""

from __future__ import annotations

import logging
import shutil
import subprocess
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Sequence

from ..exceptions import DorgpatchError
from .utils import sanitize_environment

logger = logging.getLogger(__name__)


class GitRunnerError(DorgpatchError):
    """Base class for git runner errors."""


class GitNotFoundError(GitRunnerError):
    """Raised when the git executable cannot be located."""


class GitCommandError(GitRunnerError):
    """Raised when a git command exits with a non-zero status."""

    def __init__(self, result: GitExecutionResult) -> None:
        detail = result.stderr.strip() or result.stdout.strip() or f"exit code {result.returncode}"
        super().__init__(f"git {' '.join(result.args[1:])} failed: {detail}")
        self.result = result


@dataclass(slots=True)
class GitExecutionResult:
    """Holds the outcome of a git invocation."""

    args: tuple[str, ...]
    returncode: int
    raw_stdout: bytes
    stderr: str

    @property
    def ok(self) -> bool:
        return self.returncode == 0

    @property
    def stdout(self) -> str:
        return self.raw_stdout.decode("utf-8", errors="replace")


class GitRunner:
    """Execute git commands inside one working directory."""

    def __init__(self, executable: Path | None = None, *, cwd: Path | None = None) -> None:
        self._executable_path = self._resolve_executable(executable)
        self._cwd = Path(cwd) if cwd is not None else Path.cwd()

    @staticmethod
    def _resolve_executable(explicit: Path | None) -> Path:
        if explicit is not None:
            candidate = Path(explicit)
            if candidate.exists() and candidate.is_file():
                return candidate
            raise GitNotFoundError(f"git executable not found at {candidate}")

        binary = shutil.which("git")
        if binary is None:
            raise GitNotFoundError("git executable not found on PATH")
        return Path(binary)

    @property
    def executable(self) -> Path:
        return self._executable_path

    @property
    def cwd(self) -> Path:
        return self._cwd

    def run(self, *args: str, check: bool = True) -> GitExecutionResult:
        result = self._invoke(*args)
        if check and not result.ok:
            raise GitCommandError(result)
        return result

    def _invoke(self, *args: str) -> GitExecutionResult:
        cmd = [str(self._executable_path), *args]
        logger.debug("Running git", extra={"git_args": args, "cwd": str(self._cwd)})
        process = subprocess.run(
            cmd,
            cwd=self._cwd,
            stdin=subprocess.DEVNULL,
            capture_output=True,
            env=sanitize_environment(),
        )
        stderr = process.stderr.decode("utf-8", errors="replace")
        return GitExecutionResult(
            args=tuple(cmd), returncode=process.returncode, raw_stdout=process.stdout, stderr=stderr
        )


class FakeGitRunner(GitRunner):
    """Test double that answers git commands from a table of canned results.

    Keys are the git argument tuples. A list value is consumed in order, with
    its last entry repeated once exhausted. Unknown commands succeed with no
    output.
    """

    def __init__(  # type: ignore[override]
        self,
        responses: Mapping[tuple[str, ...], GitExecutionResult | Sequence[GitExecutionResult]] | None = None,
        *,
        cwd: Path | None = None,
    ) -> None:
        self._responses: dict[tuple[str, ...], list[GitExecutionResult]] = {}
        for key, value in (responses or {}).items():
            self._responses[tuple(key)] = [value] if isinstance(value, GitExecutionResult) else list(value)
        self._invocations: list[tuple[str, ...]] = []
        self._executable_path = Path("/tmp/fake-git")
        self._cwd = Path(cwd) if cwd is not None else Path("/tmp")

    def _invoke(self, *args: str) -> GitExecutionResult:  # type: ignore[override]
        self._invocations.append(tuple(args))
        queue = self._responses.get(tuple(args))
        if queue:
            return queue.pop(0) if len(queue) > 1 else queue[0]
        return GitExecutionResult(args=("git", *args), returncode=0, raw_stdout=b"", stderr="")

    @property
    def invocations(self) -> list[tuple[str, ...]]:
        return self._invocations


def fake_result(stdout: str | bytes = "", *, returncode: int = 0, stderr: str = "") -> GitExecutionResult:
    """Build a canned result for ``FakeGitRunner``."""

    raw = stdout.encode("utf-8") if isinstance(stdout, str) else stdout
    return GitExecutionResult(args=("git",), returncode=returncode, raw_stdout=raw, stderr=stderr)
