"""Utility helpers for the git runner."""

from __future__ import annotations

import os
from typing import Mapping

_SANITIZED_VARS = {
    "GIT_DIR",
    "GIT_WORK_TREE",
    "GIT_INDEX_FILE",
    "GIT_PAGER",
    "PAGER",
}


def sanitize_environment(additional: Mapping[str, str] | None = None) -> dict[str, str]:
    """Return an environment that keeps git pointed at the working directory."""

    env = dict(os.environ)
    for key in _SANITIZED_VARS:
        env.pop(key, None)
    # Porcelain output must not be translated or paged.
    env["LC_ALL"] = "C"
    env["GIT_TERMINAL_PROMPT"] = "0"
    if additional:
        env.update(additional)
    return env
