"""The create-patch workflow: checks, artifacts, changelog, marker commit."""

from __future__ import annotations

import enum
import logging
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Protocol, TextIO

from .commit_message import CommitMessageHandler
from .exceptions import PreconditionError
from .git import GitService
from .models import ArtifactDescriptor, CommitLogEntry, PatchPlan
from .waypoints import (
    BranchResolver,
    ChangeLogReader,
    IssueNumberAnalyser,
    PatchHistoryReader,
    PatchNamingEngine,
    WaypointRecorder,
)

logger = logging.getLogger(__name__)

RULE = "------------------------------------------------"


class GitNotCleanError(PreconditionError):
    """Raised when the working tree has uncommitted changes."""


class RemoteIndexProvider(Protocol):
    def next_comment_index(self, issue_number: str) -> int:
        ...


class WorkflowState(str, enum.Enum):
    IDLE = "idle"
    VERIFY_CLEAN = "verify_clean"
    RESOLVE_BRANCHES = "resolve_branches"
    COMPUTE_PATCH_NAME = "compute_patch_name"
    EMIT_PATCH = "emit_patch"
    COMPUTE_INTERDIFF_NAME = "compute_interdiff_name"
    EMIT_INTERDIFF = "emit_interdiff"
    RENDER_CHANGELOG = "render_changelog"
    RECORD_WAYPOINT = "record_waypoint"
    DONE = "done"
    ABORTED = "aborted"


@dataclass(slots=True)
class WorkflowResult:
    patch: ArtifactDescriptor
    interdiff: ArtifactDescriptor | None
    changelog: list[CommitLogEntry]
    marker_sha: str
    issue_number: str
    next_comment_index: int
    written: list[str] = field(default_factory=list)


class CreatePatchWorkflow:
    """Creates a patch, an interdiff when there is an earlier patch, and a marker commit."""

    def __init__(
        self,
        *,
        git: GitService,
        branches: BranchResolver,
        analyser: IssueNumberAnalyser,
        drupal_org: RemoteIndexProvider,
        messages: CommitMessageHandler | None = None,
        naming: PatchNamingEngine | None = None,
        sequential: bool = False,
        out: TextIO | None = None,
    ) -> None:
        self._git = git
        self._branches = branches
        self._analyser = analyser
        self._drupal_org = drupal_org
        self._messages = messages or CommitMessageHandler()
        self._naming = naming or PatchNamingEngine()
        self._changelog = ChangeLogReader(git, self._messages)
        self._recorder = WaypointRecorder(git, self._messages)
        self._sequential = sequential
        self._out = out or sys.stdout
        self.state = WorkflowState.IDLE

    def _enter(self, state: WorkflowState) -> None:
        logger.debug("Workflow state change", extra={"from_state": self.state.value, "to_state": state.value})
        self.state = state

    def _print(self, line: str = "") -> None:
        print(line, file=self._out)

    def run(self) -> WorkflowResult:
        try:
            return self._run()
        except Exception:
            self.state = WorkflowState.ABORTED
            raise

    def _run(self) -> WorkflowResult:
        self._enter(WorkflowState.VERIFY_CLEAN)
        if not self._git.is_clean():
            raise GitNotCleanError("Git repository is not clean. Aborting.")

        self._enter(WorkflowState.RESOLVE_BRANCHES)
        base = self._branches.resolve_base()
        feature = self._branches.resolve_feature(base)

        self._enter(WorkflowState.COMPUTE_PATCH_NAME)
        issue = self._analyser.analyse(feature.name)
        history = PatchHistoryReader(self._git, self._messages, base_ref=base.name, feature_ref=feature.name)
        # Read before the marker for this run exists.
        waypoint = history.most_recent_waypoint()
        next_index = self._drupal_org.next_comment_index(issue.number)
        plan: PatchPlan = self._naming.plan(
            base=base,
            feature=feature,
            waypoint=waypoint,
            issue_number=issue.number,
            next_index=next_index,
            description=issue.description,
        )
        logger.info(
            "Planned artifacts",
            extra={
                "issue_number": issue.number,
                "next_comment_index": next_index,
                "patch_filename": plan.patch.filename,
                "interdiff_filename": plan.interdiff.filename if plan.interdiff else None,
            },
        )

        written: list[str] = []

        self._enter(WorkflowState.EMIT_PATCH)
        self._emit(plan.patch, sequential=self._sequential)
        written.append(plan.patch.filename)
        self._print(
            f"Written patch {plan.patch.filename} with diff from {base.name} to local branch."
        )

        if plan.interdiff is not None:
            self._enter(WorkflowState.COMPUTE_INTERDIFF_NAME)
            interdiff = plan.interdiff

            self._enter(WorkflowState.EMIT_INTERDIFF)
            self._emit(interdiff)
            written.append(interdiff.filename)
            self._print(
                f"Written interdiff {interdiff.filename} with diff from {interdiff.diff_from} to local branch."
            )

        self._enter(WorkflowState.RENDER_CHANGELOG)
        changelog = self._changelog.entries(plan.changelog_from, plan.patch.diff_to)
        self._render_changelog(changelog, has_interdiff=plan.interdiff is not None)

        self._enter(WorkflowState.RECORD_WAYPOINT)
        marker_sha = self._recorder.record(plan.patch, next_index)

        self._enter(WorkflowState.DONE)
        return WorkflowResult(
            patch=plan.patch,
            interdiff=plan.interdiff,
            changelog=changelog,
            marker_sha=marker_sha,
            issue_number=issue.number,
            next_comment_index=next_index,
            written=written,
        )

    def _emit(self, artifact: ArtifactDescriptor, *, sequential: bool = False) -> None:
        self._git.write_diff(artifact.diff_from, artifact.diff_to, Path(artifact.filename), sequential=sequential)

    def _render_changelog(self, changelog: list[CommitLogEntry], *, has_interdiff: bool) -> None:
        self._print("The following may be useful for the comment on d.org:")
        self._print(RULE)
        self._print("Changes since the last patch:" if has_interdiff else "Changes in this patch:")
        for entry in changelog:
            self._print(f"- {entry.message}")
        if has_interdiff:
            self._print("Patch and interdiff created by dorgpatch.")
        else:
            self._print("Patch created by dorgpatch.")
        self._print(RULE)


__all__ = [
    "CreatePatchWorkflow",
    "GitNotCleanError",
    "RemoteIndexProvider",
    "WorkflowResult",
    "WorkflowState",
]
