"""Filename and diff-endpoint policy for patches and interdiffs."""

from __future__ import annotations

from ..models import ArtifactDescriptor, Branch, PatchPlan, PatchWaypoint


def patch_filename(issue_number: str, next_index: int, description: str = "") -> str:
    """``{issue}-{comment}.{description}.patch``, the description part optional."""

    if description:
        return f"{issue_number}-{next_index}.{description}.patch"
    return f"{issue_number}-{next_index}.patch"


def interdiff_filename(issue_number: str, next_index: int, previous_index: int | None) -> str:
    """Interdiff name; a range only when the previous patch has a public comment number."""

    if previous_index is None:
        return f"interdiff.{issue_number}.{next_index}.txt"
    return f"interdiff.{issue_number}.{previous_index}-{next_index}.txt"


def _ref(branch: Branch) -> str:
    # Tips are resolved once, so every diff in a run sees the same commits.
    return branch.tip or branch.name


class PatchNamingEngine:
    """Works out which artifacts a run produces and what each one diffs."""

    def plan(
        self,
        *,
        base: Branch,
        feature: Branch,
        waypoint: PatchWaypoint | None,
        issue_number: str,
        next_index: int,
        description: str = "",
    ) -> PatchPlan:
        if not issue_number:
            raise ValueError("issue_number must not be empty")
        if next_index < 1:
            raise ValueError("next_index must be >= 1")

        patch = ArtifactDescriptor(
            kind="patch",
            filename=patch_filename(issue_number, next_index, description),
            diff_from=_ref(base),
            diff_to=_ref(feature),
        )

        if waypoint is None:
            return PatchPlan(patch=patch, interdiff=None, changelog_from=_ref(base))

        interdiff = ArtifactDescriptor(
            kind="interdiff",
            filename=interdiff_filename(issue_number, next_index, waypoint.comment_index),
            diff_from=waypoint.sha,
            diff_to=_ref(feature),
        )
        return PatchPlan(patch=patch, interdiff=interdiff, changelog_from=waypoint.sha)


__all__ = ["PatchNamingEngine", "interdiff_filename", "patch_filename"]
