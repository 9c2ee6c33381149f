"""Configuration management for dorgpatch."""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_DRUPAL_ORG_API_URL = "https://www.drupal.org/api-d7"


class DorgpatchSettings(BaseSettings):
    """Runtime configuration sourced from environment variables and optional .env file."""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    git_path: str | None = Field(default=None, validation_alias="GIT_PATH")
    base_branch: str | None = Field(default=None, validation_alias="DORGPATCH_BASE_BRANCH")
    issue_number: str | None = Field(default=None, validation_alias="DORGPATCH_ISSUE_NUMBER")
    drupal_org_api_url: str = Field(
        default=DEFAULT_DRUPAL_ORG_API_URL, validation_alias="DRUPAL_ORG_API_URL"
    )
    http_timeout: float = Field(default=10.0, validation_alias="DORGPATCH_HTTP_TIMEOUT")
    log_level: str = Field(default="WARNING", validation_alias="DORGPATCH_LOG_LEVEL")
    repo_config_name: str = Field(default=".dorgpatch.yml", validation_alias="DORGPATCH_REPO_CONFIG")

    @field_validator("log_level")
    @classmethod
    def _normalize_log_level(cls, value: str) -> str:
        normalized = value.strip().upper()
        if normalized not in {"CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"}:
            raise ValueError(
                "DORGPATCH_LOG_LEVEL must be one of CRITICAL, ERROR, WARNING, INFO, DEBUG"
            )
        return normalized

    @field_validator("issue_number", mode="before")
    @classmethod
    def _validate_issue_number(cls, value):
        if value is None or str(value).strip() == "":
            return None
        normalized = str(value).strip()
        if not normalized.isdigit():
            raise ValueError("DORGPATCH_ISSUE_NUMBER must be numeric")
        return normalized

    @field_validator("base_branch", mode="before")
    @classmethod
    def _blank_branch_is_unset(cls, value):
        if value is None or str(value).strip() == "":
            return None
        return str(value).strip()

    @field_validator("drupal_org_api_url")
    @classmethod
    def _strip_trailing_slash(cls, value: str) -> str:
        return value.strip().rstrip("/")

    @field_validator("http_timeout")
    @classmethod
    def _validate_http_timeout(cls, value: float) -> float:
        if value <= 0:
            raise ValueError("DORGPATCH_HTTP_TIMEOUT must be > 0")
        return value

    def repo_config_path(self, repo_root: Path) -> Path:
        return Path(repo_root) / self.repo_config_name


@lru_cache(maxsize=1)
def get_settings() -> DorgpatchSettings:
    """Return cached settings instance."""

    return DorgpatchSettings()


__all__ = ["DEFAULT_DRUPAL_ORG_API_URL", "DorgpatchSettings", "get_settings"]
