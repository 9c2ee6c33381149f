"""Git operations the patch workflow depends on."""

from __future__ import annotations

import logging
from pathlib import Path

from ..models import CommitLogEntry
from .runner import GitRunner

logger = logging.getLogger(__name__)

_FIELD_SEP = "\x1f"
_RECORD_SEP = "\x1e"
_LOG_FORMAT = f"--format=%H{_FIELD_SEP}%s{_RECORD_SEP}"


class GitService:
    """Thin, typed wrapper over the handful of git commands dorgpatch needs."""

    def __init__(self, runner: GitRunner) -> None:
        self._runner = runner

    @property
    def working_directory(self) -> Path:
        return self._runner.cwd

    def is_clean(self) -> bool:
        """Return True when tracked files have no staged or unstaged changes.

        Untracked files are ignored, so patch files left by earlier runs do
        not block the next one.
        """

        result = self._runner.run("status", "--porcelain", "--untracked-files=no")
        return not result.stdout.strip()

    def current_branch(self) -> str | None:
        """Return the checked out branch name, or None when HEAD is detached."""

        result = self._runner.run("symbolic-ref", "--quiet", "--short", "HEAD", check=False)
        if not result.ok:
            return None
        return result.stdout.strip() or None

    def branch_exists(self, name: str) -> bool:
        result = self._runner.run("show-ref", "--verify", "--quiet", f"refs/heads/{name}", check=False)
        return result.ok

    def local_branches(self) -> list[str]:
        result = self._runner.run("for-each-ref", "--format=%(refname:short)", "refs/heads/")
        return [line.strip() for line in result.stdout.splitlines() if line.strip()]

    def rev_parse(self, ref: str) -> str:
        return self._runner.run("rev-parse", "--verify", ref).stdout.strip()

    def log(self, from_ref: str, to_ref: str, *, reverse: bool = False) -> list[CommitLogEntry]:
        """Return commits reachable from ``to_ref`` but not ``from_ref``.

        Newest first unless ``reverse`` is set.
        """

        args = ["log", _LOG_FORMAT]
        if reverse:
            args.append("--reverse")
        args.append(f"{from_ref}..{to_ref}")
        result = self._runner.run(*args)

        entries: list[CommitLogEntry] = []
        for record in result.stdout.split(_RECORD_SEP):
            record = record.strip("\n")
            if not record:
                continue
            sha, _, message = record.partition(_FIELD_SEP)
            entries.append(CommitLogEntry(sha=sha.strip(), message=message.strip()))
        return entries

    def write_diff(self, from_ref: str, to_ref: str, path: Path, *, sequential: bool = False) -> Path:
        """Write the diff between two refs to ``path`` and return the resolved path.

        With ``sequential`` the output is a ``format-patch`` series instead of
        a single squashed diff.
        """

        if sequential:
            result = self._runner.run("format-patch", "--stdout", f"{from_ref}..{to_ref}")
        else:
            result = self._runner.run("diff", from_ref, to_ref)

        target = Path(path)
        if not target.is_absolute():
            target = self.working_directory / target
        target.write_bytes(result.raw_stdout)
        logger.debug(
            "Wrote diff",
            extra={"from_ref": from_ref, "to_ref": to_ref, "path": str(target), "size": len(result.raw_stdout)},
        )
        return target

    def commit(self, message: str) -> str:
        """Create an empty commit with ``message`` and return its SHA."""

        self._runner.run("commit", "--allow-empty", "--no-verify", "-m", message)
        return self.rev_parse("HEAD")


__all__ = ["GitService"]
