"""Git CLI access for dorgpatch."""

from .runner import (
    FakeGitRunner,
    GitCommandError,
    GitExecutionResult,
    GitNotFoundError,
    GitRunner,
    GitRunnerError,
)
from .service import GitService

__all__ = [
    "FakeGitRunner",
    "GitCommandError",
    "GitExecutionResult",
    "GitNotFoundError",
    "GitRunner",
    "GitRunnerError",
    "GitService",
]
