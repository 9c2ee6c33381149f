"""Reconstructs the patch sequence from commit history."""

from __future__ import annotations

import logging

from ..commit_message import CommitMessageHandler
from ..git import GitService
from ..models import CommitLogEntry, PatchWaypoint

logger = logging.getLogger(__name__)


class PatchHistoryReader:
    """Finds marker commits between the base branch and the feature tip.

    There is no state file: the waypoint list is rebuilt from ``git log`` on
    every call.
    """

    def __init__(
        self,
        git: GitService,
        messages: CommitMessageHandler,
        *,
        base_ref: str,
        feature_ref: str,
    ) -> None:
        self._git = git
        self._messages = messages
        self._base_ref = base_ref
        self._feature_ref = feature_ref

    def waypoints(self) -> list[PatchWaypoint]:
        """Return every recorded waypoint, most recent first."""

        return parse_waypoints(self._git.log(self._base_ref, self._feature_ref), self._messages)

    def most_recent_waypoint(self) -> PatchWaypoint | None:
        waypoints = self.waypoints()
        if not waypoints:
            logger.info("No previous patch waypoint found", extra={"feature": self._feature_ref})
            return None
        latest = waypoints[0]
        logger.info(
            "Found previous patch waypoint",
            extra={"sha": latest.sha, "patch_filename": latest.filename, "comment_index": latest.comment_index},
        )
        return latest


def parse_waypoints(entries: list[CommitLogEntry], messages: CommitMessageHandler) -> list[PatchWaypoint]:
    """Turn a newest-first log into waypoints, skipping ordinary commits."""

    waypoints: list[PatchWaypoint] = []
    for entry in entries:
        marker = messages.parse(entry.message)
        if marker is None:
            continue
        waypoints.append(
            PatchWaypoint(
                sha=entry.sha,
                filename=marker.filename,
                # Local markers only know the index they hoped for.
                comment_index=marker.comment_index if marker.source == "drupal_org" else None,
                ordinal=len(waypoints),
                source=marker.source,
            )
        )
    return waypoints


class ChangeLogReader:
    """Lists the work commits in a range for the human-facing summary."""

    def __init__(self, git: GitService, messages: CommitMessageHandler) -> None:
        self._git = git
        self._messages = messages

    def entries(self, from_ref: str, to_ref: str) -> list[CommitLogEntry]:
        """Chronological commits in ``from_ref..to_ref``, without marker commits."""

        return [
            entry
            for entry in self._git.log(from_ref, to_ref, reverse=True)
            if not self._messages.is_marker(entry.message)
        ]


__all__ = ["ChangeLogReader", "PatchHistoryReader", "parse_waypoints"]
