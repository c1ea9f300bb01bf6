"""Configuration for a git-backed storage instance."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Literal, Mapping

from pydantic import BaseModel, Field, field_validator

# Environment variable for each StorageConfig field
ENV_KEYS: dict[str, str] = {
    "branch_name": "GITSTORAGE_BRANCH",
    "repo_url": "GITSTORAGE_REPO_URL",
    "target_path": "GITSTORAGE_TARGET_PATH",
    "base_path": "GITSTORAGE_BASE_PATH",
    "log_level": "GITSTORAGE_LOG_LEVEL",
}

READ_TREE_DIR = "read"
WRITE_TREE_DIR = "write"


class StorageConfig(BaseModel):
    """Where to clone from and where to keep the working trees.

    ``base_path`` scopes both trees' file storages and every history query
    under a sub-directory of the repository.  ``log_level`` is the level of
    the timing records (``DEBUG`` or ``INFO``).
    """

    branch_name: str = Field(min_length=1)
    repo_url: str = Field(min_length=1)
    target_path: Path
    base_path: str | None = None
    log_level: Literal["DEBUG", "INFO"] = "DEBUG"

    @field_validator("base_path")
    @classmethod
    def _normalise_base_path(cls, value: str | None) -> str | None:
        if value is None:
            return None
        value = value.strip().replace("\\", "/").strip("/")
        return value or None

    @property
    def level(self) -> int:
        return logging.INFO if self.log_level == "INFO" else logging.DEBUG

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> StorageConfig:
        """Build a config from ``GITSTORAGE_*`` environment variables."""
        environ = os.environ if environ is None else environ
        values = {
            field: environ[key]
            for field, key in ENV_KEYS.items()
            if environ.get(key)
        }
        if "log_level" in values:
            values["log_level"] = values["log_level"].upper()
        return cls(**values)
