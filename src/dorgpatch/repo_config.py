"""Per-repository overrides read from a YAML file in the working tree."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator

from .exceptions import DorgpatchError


class RepoConfigError(DorgpatchError):
    """Raised when the repository config file cannot be parsed."""


class RepoConfig(BaseModel):
    """Settings a project can pin for everyone working on it."""

    base_branch: str | None = Field(default=None, description="Branch patches are diffed against.")
    issue_number: str | None = Field(default=None, description="Drupal.org issue node id.")

    @field_validator("issue_number", mode="before")
    @classmethod
    def _normalize_issue_number(cls, value: Any):
        if value is None or str(value).strip() == "":
            return None
        normalized = str(value).strip()
        if not normalized.isdigit():
            raise ValueError("issue_number must be numeric")
        return normalized

    @field_validator("base_branch", mode="before")
    @classmethod
    def _normalize_base_branch(cls, value: Any):
        if value is None:
            return None
        normalized = str(value).strip()
        return normalized or None


def load_repo_config(path: Path) -> RepoConfig:
    """Load ``path`` if it exists, otherwise return empty overrides."""

    path = Path(path)
    if not path.exists():
        return RepoConfig()

    try:
        document = yaml.safe_load(path.read_text(encoding="utf-8"))
    except yaml.YAMLError as exc:
        raise RepoConfigError(f"Failed to parse YAML in {path}: {exc}") from exc

    if document is None:
        return RepoConfig()
    if not isinstance(document, dict):
        raise RepoConfigError(f"{path} must contain a mapping")

    try:
        return RepoConfig.model_validate(document)
    except ValidationError as exc:
        raise RepoConfigError(f"Config validation error in {path}: {exc}") from exc


__all__ = ["RepoConfig", "RepoConfigError", "load_repo_config"]
