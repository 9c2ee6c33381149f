"""Read-only access to the Drupal.org REST API."""

from __future__ import annotations

import logging

import httpx

from . import __version__
from .config import DEFAULT_DRUPAL_ORG_API_URL
from .exceptions import DorgpatchError

logger = logging.getLogger(__name__)

USER_AGENT = f"dorgpatch/{__version__}"


class DrupalOrgError(DorgpatchError):
    """Drupal.org could not be reached or returned something unusable."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class DrupalOrgClient:
    """Fetches issue node data needed to number patch files."""

    def __init__(
        self,
        api_url: str = DEFAULT_DRUPAL_ORG_API_URL,
        *,
        timeout: float = 10.0,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self._api_url = api_url.rstrip("/")
        self._timeout = timeout
        self._transport = transport

    def issue_node(self, issue_number: str) -> dict:
        url = f"{self._api_url}/node/{issue_number}.json"
        try:
            with httpx.Client(
                timeout=self._timeout,
                transport=self._transport,
                headers={"User-Agent": USER_AGENT, "Accept": "application/json"},
                follow_redirects=True,
            ) as client:
                response = client.get(url)
        except httpx.HTTPError as exc:
            raise DrupalOrgError(f"Unable to reach Drupal.org for issue {issue_number}: {exc}") from exc

        if response.status_code != 200:
            raise DrupalOrgError(
                f"Drupal.org returned HTTP {response.status_code} for issue {issue_number}",
                status_code=response.status_code,
            )

        try:
            payload = response.json()
        except ValueError as exc:
            raise DrupalOrgError(f"Drupal.org returned invalid JSON for issue {issue_number}") from exc

        if not isinstance(payload, dict):
            raise DrupalOrgError(f"Unexpected Drupal.org response for issue {issue_number}")
        return payload

    def next_comment_index(self, issue_number: str) -> int:
        """Return the number the next comment on the issue will get."""

        node = self.issue_node(issue_number)
        raw = node.get("comment_count")
        try:
            comment_count = int(raw)
        except (TypeError, ValueError) as exc:
            raise DrupalOrgError(
                f"Drupal.org response for issue {issue_number} has no usable comment_count"
            ) from exc

        if comment_count < 0:
            raise DrupalOrgError(f"Drupal.org reported a negative comment_count for issue {issue_number}")

        logger.info(
            "Fetched comment count",
            extra={"issue_number": issue_number, "comment_count": comment_count},
        )
        return comment_count + 1


__all__ = ["DrupalOrgClient", "DrupalOrgError", "USER_AGENT"]
