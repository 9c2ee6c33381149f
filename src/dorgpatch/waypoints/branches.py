"""Resolution of the base and feature branches."""

from __future__ import annotations

import logging
import re

from ..exceptions import PreconditionError
from ..git import GitService
from ..models import Branch

logger = logging.getLogger(__name__)

_RELEASE_BRANCH = re.compile(r"^(?:\d+\.x-)?\d+(?:\.\d+)*\.x$")
_CORE_PREFIX = re.compile(r"^\d+\.x-")
_FALLBACK_BASES = ("main", "master")


class BranchNotFoundError(PreconditionError):
    """Raised when the feature branch does not exist."""


class NotCurrentBranchError(PreconditionError):
    """Raised when the feature branch exists but is not checked out."""


class BaseBranchNotFoundError(PreconditionError):
    """Raised when no base branch can be identified."""


def _version_key(name: str) -> tuple[int, tuple[int, ...]]:
    # Contrib semver branches (2.0.x) replaced the core-prefixed scheme (8.x-1.x).
    legacy = _CORE_PREFIX.match(name) is not None
    return (0 if legacy else 1, tuple(int(part) for part in re.findall(r"\d+", name)))


class BranchResolver:
    """Identifies the base (release) branch and the feature branch."""

    def __init__(
        self,
        git: GitService,
        *,
        base_branch: str | None = None,
        feature_branch: str | None = None,
    ) -> None:
        self._git = git
        self._base_name = base_branch
        self._feature_name = feature_branch

    def _describe(self, name: str) -> Branch:
        exists = self._git.branch_exists(name)
        current = self._git.current_branch()
        tip = self._git.rev_parse(f"refs/heads/{name}") if exists else None
        return Branch(name=name, exists=exists, is_current=exists and current == name, tip=tip)

    def resolve_base(self) -> Branch:
        if self._base_name:
            branch = self._describe(self._base_name)
            if not branch.exists:
                raise BaseBranchNotFoundError(f"Base branch '{self._base_name}' does not exist.")
            return branch

        branches = self._git.local_branches()
        releases = sorted((name for name in branches if _RELEASE_BRANCH.match(name)), key=_version_key)
        if releases:
            name = releases[-1]
        else:
            name = next((candidate for candidate in _FALLBACK_BASES if candidate in branches), None)
            if name is None:
                raise BaseBranchNotFoundError(
                    "Could not find a base branch; set DORGPATCH_BASE_BRANCH or use --base."
                )

        logger.info("Resolved base branch", extra={"branch": name, "candidates": releases})
        return self._describe(name)

    def resolve_feature(self, base: Branch | None = None) -> Branch:
        name = self._feature_name or self._git.current_branch()
        if not name:
            raise BranchNotFoundError("Feature branch does not exist: HEAD is detached.")
        if base is not None and name == base.name:
            raise BranchNotFoundError(
                f"Feature branch does not exist: '{name}' is the base branch."
            )

        branch = self._describe(name)
        if not branch.exists:
            raise BranchNotFoundError(f"Feature branch '{name}' does not exist.")
        if not branch.is_current:
            raise NotCurrentBranchError(f"Feature branch '{name}' is not the current branch.")
        return branch


__all__ = [
    "BaseBranchNotFoundError",
    "BranchNotFoundError",
    "BranchResolver",
    "NotCurrentBranchError",
]
