"""Deduces the Drupal.org issue number from the feature branch."""

from __future__ import annotations

import re
from dataclasses import dataclass

from ..exceptions import PreconditionError

_LEADING_NUMBER = re.compile(r"^(?P<issue>\d+)(?:[-_.](?P<rest>.*))?$")
_ANY_NUMBER = re.compile(r"\d{4,}")


class IssueNumberError(PreconditionError):
    """Raised when no issue number can be determined."""


@dataclass(frozen=True, slots=True)
class IssueInfo:
    number: str
    description: str


class IssueNumberAnalyser:
    def __init__(self, issue_number: str | None = None) -> None:
        self._explicit = issue_number.strip() if issue_number else None

    def analyse(self, branch_name: str) -> IssueInfo:
        """Return the issue number and the remaining description of ``branch_name``."""

        leaf = branch_name.rsplit("/", 1)[-1]

        match = _LEADING_NUMBER.match(leaf)
        if match:
            number = match.group("issue")
            description = match.group("rest") or ""
        else:
            found = _ANY_NUMBER.search(leaf)
            if found:
                number = found.group(0)
                description = leaf[: found.start()] + leaf[found.end() :]
            elif self._explicit:
                number, description = self._explicit, leaf
            else:
                raise IssueNumberError(
                    f"Unable to deduce an issue number from branch '{branch_name}'; "
                    "set DORGPATCH_ISSUE_NUMBER or use --issue."
                )

        if self._explicit:
            number = self._explicit
        return IssueInfo(number=number, description=_tidy(description))


def _tidy(description: str) -> str:
    cleaned = re.sub(r"[^A-Za-z0-9_-]+", "-", description)
    cleaned = re.sub(r"-{2,}", "-", cleaned)
    return cleaned.strip("-_")


__all__ = ["IssueInfo", "IssueNumberAnalyser", "IssueNumberError"]
