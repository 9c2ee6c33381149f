"""Formatting and parsing of the commit messages that anchor waypoints."""

from __future__ import annotations

import re

from .models import MarkerMessage

SIGNATURE = "Automatic commit by dorgpatch."

_LOCAL_PATTERN = re.compile(
    r"^Patch for Drupal\.org\. "
    r"(?:Comment \(expected\): (?P<expected>\d+); )?"
    r"File: (?P<filename>.+?)\. "
    + re.escape(SIGNATURE)
)
_DRUPAL_ORG_PATTERN = re.compile(
    r"^Patch from Drupal\.org\. "
    r"(?:Comment: (?P<comment_index>\d+); )?"
    r"URL: (?P<url>\S+); "
    r"file: (?P<filename>[^;]+); "
    r"fid: (?P<fid>\d+)\. "
    + re.escape(SIGNATURE)
)


class CommitMessageHandler:
    """Builds marker messages and recognises them in history."""

    def create_local_commit_message(self, filename: str, expected_comment_index: int | None = None) -> str:
        expected = f"Comment (expected): {expected_comment_index}; " if expected_comment_index else ""
        return f"Patch for Drupal.org. {expected}File: {filename}. {SIGNATURE}"

    # Commits that apply a patch downloaded from a Drupal.org comment use this
    # format; they are made outside the patch workflow and read back as
    # waypoints with a known comment number.
    def create_drupal_org_commit_message(
        self,
        *,
        filename: str,
        url: str,
        fid: int,
        comment_index: int | None = None,
    ) -> str:
        comment = f"Comment: {comment_index}; " if comment_index else ""
        return f"Patch from Drupal.org. {comment}URL: {url}; file: {filename}; fid: {fid}. {SIGNATURE}"

    def parse(self, message: str) -> MarkerMessage | None:
        """Return the marker encoded in ``message``, or ``None`` for ordinary commits."""

        subject = message.strip().splitlines()[0] if message.strip() else ""

        match = _LOCAL_PATTERN.match(subject)
        if match:
            expected = match.group("expected")
            return MarkerMessage(
                source="local",
                filename=match.group("filename"),
                expected_comment_index=int(expected) if expected else None,
            )

        match = _DRUPAL_ORG_PATTERN.match(subject)
        if match:
            comment_index = match.group("comment_index")
            return MarkerMessage(
                source="drupal_org",
                filename=match.group("filename").strip(),
                comment_index=int(comment_index) if comment_index else None,
                url=match.group("url"),
                fid=int(match.group("fid")),
            )

        return None

    def is_marker(self, message: str) -> bool:
        return self.parse(message) is not None


__all__ = ["CommitMessageHandler", "SIGNATURE"]
