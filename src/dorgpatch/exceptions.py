"""Exception hierarchy shared across dorgpatch."""

from __future__ import annotations


class DorgpatchError(RuntimeError):
    """Base class for every error dorgpatch reports to the user."""


class PreconditionError(DorgpatchError):
    """Raised when the repository is not in a state a patch can be made from."""


__all__ = ["DorgpatchError", "PreconditionError"]
