from __future__ import annotations

import pytest

from dorgpatch.commit_message import CommitMessageHandler


@pytest.fixture
def handler() -> CommitMessageHandler:
    return CommitMessageHandler()


def test_local_message_is_parsed_back(handler: CommitMessageHandler) -> None:
    message = handler.create_local_commit_message("12345-3.fix-thing.patch", 3)

    assert message == (
        "Patch for Drupal.org. Comment (expected): 3; File: 12345-3.fix-thing.patch. "
        "Automatic commit by dorgpatch."
    )
    marker = handler.parse(message)
    assert marker is not None
    assert marker.source == "local"
    assert marker.filename == "12345-3.fix-thing.patch"
    assert marker.expected_comment_index == 3
    assert marker.comment_index is None


def test_local_message_without_expected_index(handler: CommitMessageHandler) -> None:
    marker = handler.parse(handler.create_local_commit_message("12345-3.patch"))

    assert marker is not None
    assert marker.filename == "12345-3.patch"
    assert marker.expected_comment_index is None


def test_drupal_org_message_carries_comment_index(handler: CommitMessageHandler) -> None:
    message = handler.create_drupal_org_commit_message(
        filename="12345-2.patch",
        url="https://www.drupal.org/files/issues/12345-2.patch",
        fid=998877,
        comment_index=2,
    )
    marker = handler.parse(message)

    assert marker is not None
    assert marker.source == "drupal_org"
    assert marker.comment_index == 2
    assert marker.fid == 998877
    assert marker.filename == "12345-2.patch"


def test_drupal_org_message_without_comment(handler: CommitMessageHandler) -> None:
    marker = handler.parse(
        "Patch from Drupal.org. URL: https://www.drupal.org/files/a.patch; file: a.patch; fid: 1. "
        "Automatic commit by dorgpatch."
    )

    assert marker is not None
    assert marker.comment_index is None


@pytest.mark.parametrize(
    "message",
    [
        "Fix the frobnicator.",
        "Patch for Drupal.org, but written by hand",
        "",
    ],
)
def test_ordinary_commits_are_not_markers(handler: CommitMessageHandler, message: str) -> None:
    assert handler.parse(message) is None
    assert not handler.is_marker(message)
