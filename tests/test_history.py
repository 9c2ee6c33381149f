from __future__ import annotations

from dorgpatch.commit_message import CommitMessageHandler
from dorgpatch.git import FakeGitRunner, GitService
from dorgpatch.git.runner import fake_result
from dorgpatch.waypoints import ChangeLogReader, PatchHistoryReader

LOG_FORMAT = "--format=%H\x1f%s\x1e"
MESSAGES = CommitMessageHandler()


def _log(*records: tuple[str, str]) -> str:
    return "".join(f"{sha}\x1f{message}\x1e\n" for sha, message in records)


def _reader(output: str) -> PatchHistoryReader:
    fake = FakeGitRunner({("log", LOG_FORMAT, "main..12345-thing"): fake_result(output)})
    return PatchHistoryReader(GitService(fake), MESSAGES, base_ref="main", feature_ref="12345-thing")


def test_no_markers_means_first_patch() -> None:
    reader = _reader(_log(("b", "More work"), ("a", "Start work")))

    assert reader.waypoints() == []
    assert reader.most_recent_waypoint() is None


def test_empty_history() -> None:
    assert _reader("").most_recent_waypoint() is None


def test_most_recent_marker_wins() -> None:
    reader = _reader(
        _log(
            ("d", "Tidy up"),
            ("c", MESSAGES.create_local_commit_message("12345-4.patch", 4)),
            ("b", "Work"),
            (
                "a",
                MESSAGES.create_drupal_org_commit_message(
                    filename="12345-2.patch", url="https://www.drupal.org/files/issues/12345-2.patch", fid=5, comment_index=2
                ),
            ),
        )
    )

    waypoints = reader.waypoints()

    assert [waypoint.sha for waypoint in waypoints] == ["c", "a"]
    assert [waypoint.ordinal for waypoint in waypoints] == [0, 1]
    latest = reader.most_recent_waypoint()
    assert latest is not None
    assert latest.sha == "c"
    assert latest.source == "local"
    assert latest.comment_index is None
    assert waypoints[1].comment_index == 2
    assert waypoints[1].source == "drupal_org"


def test_history_is_deterministic() -> None:
    output = _log(("c", MESSAGES.create_local_commit_message("12345-4.patch", 4)))
    assert _reader(output).waypoints() == _reader(output).waypoints()


def test_changelog_skips_markers_and_is_chronological() -> None:
    output = _log(
        ("a", "Start work"),
        ("b", MESSAGES.create_local_commit_message("12345-2.patch", 2)),
        ("c", "Address review"),
    )
    fake = FakeGitRunner({("log", LOG_FORMAT, "--reverse", "a..12345-thing"): fake_result(output)})

    entries = ChangeLogReader(GitService(fake), MESSAGES).entries("a", "12345-thing")

    assert [entry.message for entry in entries] == ["Start work", "Address review"]
