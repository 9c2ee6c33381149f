"""Data models shared by the waypoint engine and its collaborators."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

WaypointSource = Literal["local", "drupal_org"]
ArtifactKind = Literal["patch", "interdiff"]


@dataclass(frozen=True, slots=True)
class Branch:
    name: str
    exists: bool
    is_current: bool
    tip: str | None = None


@dataclass(frozen=True, slots=True)
class CommitLogEntry:
    sha: str
    message: str


@dataclass(frozen=True, slots=True)
class MarkerMessage:
    """Parsed form of a commit message that records a patch."""

    source: WaypointSource
    filename: str
    comment_index: int | None = None
    expected_comment_index: int | None = None
    url: str | None = None
    fid: int | None = None


@dataclass(frozen=True, slots=True)
class PatchWaypoint:
    """A previously emitted or applied patch, anchored at a commit.

    ``ordinal`` 0 is the waypoint nearest the feature branch tip.
    """

    sha: str
    filename: str
    comment_index: int | None
    ordinal: int
    source: WaypointSource = "local"


@dataclass(frozen=True, slots=True)
class ArtifactDescriptor:
    kind: ArtifactKind
    filename: str
    diff_from: str
    diff_to: str


@dataclass(frozen=True, slots=True)
class PatchPlan:
    """Artifacts to emit for one run and where its changelog starts."""

    patch: ArtifactDescriptor
    interdiff: ArtifactDescriptor | None
    changelog_from: str


__all__ = [
    "ArtifactDescriptor",
    "ArtifactKind",
    "Branch",
    "CommitLogEntry",
    "MarkerMessage",
    "PatchPlan",
    "PatchWaypoint",
    "WaypointSource",
]
