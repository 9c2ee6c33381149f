"""Writes the marker commit that anchors a new waypoint."""

from __future__ import annotations

import logging

from ..commit_message import CommitMessageHandler
from ..git import GitService
from ..models import ArtifactDescriptor

logger = logging.getLogger(__name__)


class WaypointRecorder:
    def __init__(self, git: GitService, messages: CommitMessageHandler) -> None:
        self._git = git
        self._messages = messages

    def record(self, patch: ArtifactDescriptor, expected_comment_index: int | None = None) -> str:
        """Commit an empty marker for ``patch`` and return its SHA."""

        if patch.kind != "patch":
            raise ValueError(f"Only patches are recorded as waypoints, not {patch.kind}")

        message = self._messages.create_local_commit_message(patch.filename, expected_comment_index)
        sha = self._git.commit(message)
        logger.info("Recorded patch waypoint", extra={"sha": sha, "patch_filename": patch.filename})
        return sha


__all__ = ["WaypointRecorder"]
