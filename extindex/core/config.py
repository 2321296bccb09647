"""
Runtime settings for the index builder.

Settings are read from the process environment exactly once, at startup,
and then passed explicitly to the components that need them.
"""
from __future__ import annotations

import os
from pathlib import Path
from typing import Mapping, Optional

from pydantic import BaseModel, Field, ValidationError

from extindex.domain.errors import ErrorKind, IndexBuildError
from extindex.services.fetcher.github_repository import GITHUB_RAW_URL
from extindex.services.github_api import GITHUB_API_URL

GITHUB_TOKEN_ENV_VAR = "GITHUB_TOKEN"
REPOSITORIES_FILE_ENV_VAR = "EXTINDEX_REPOSITORIES_FILE"
OUTPUT_FILE_ENV_VAR = "EXTINDEX_OUTPUT_FILE"
GITHUB_API_URL_ENV_VAR = "EXTINDEX_GITHUB_API_URL"
GITHUB_RAW_URL_ENV_VAR = "EXTINDEX_GITHUB_RAW_URL"
REQUEST_TIMEOUT_ENV_VAR = "EXTINDEX_REQUEST_TIMEOUT"
CONTINUE_ON_ERROR_ENV_VAR = "EXTINDEX_CONTINUE_ON_ERROR"
LOG_LEVEL_ENV_VAR = "EXTINDEX_LOG_LEVEL"

_TRUE_VALUES = {"1", "true", "yes", "on"}


class Settings(BaseModel):
    """Configuration for a single index build run."""

    repositories_file: Path = Field(
        default=Path("repositories.json"),
        description="JSON file mapping authors to repository locations.",
    )
    output_file: Path = Field(
        default=Path("extindex.json"),
        description="Where the aggregated index is written.",
    )
    github_token: Optional[str] = Field(
        default=None,
        description="Token sent as 'Authorization: token <value>' on GitHub API calls.",
    )
    github_api_url: str = Field(default=GITHUB_API_URL)
    github_raw_url: str = Field(default=GITHUB_RAW_URL)
    request_timeout: float = Field(default=30.0, gt=0, description="HTTP timeout in seconds.")
    continue_on_error: bool = Field(
        default=False,
        description="Record failing repositories and keep going instead of aborting the run.",
    )
    log_level: str = Field(default="INFO")

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Settings":
        """
        Build settings from environment variables, falling back to defaults
        for anything unset.
        """
        env = os.environ if environ is None else environ
        values = {}

        token = env.get(GITHUB_TOKEN_ENV_VAR)
        if token:
            values["github_token"] = token

        if env.get(REPOSITORIES_FILE_ENV_VAR):
            values["repositories_file"] = Path(env[REPOSITORIES_FILE_ENV_VAR]).expanduser()
        if env.get(OUTPUT_FILE_ENV_VAR):
            values["output_file"] = Path(env[OUTPUT_FILE_ENV_VAR]).expanduser()
        if env.get(GITHUB_API_URL_ENV_VAR):
            values["github_api_url"] = env[GITHUB_API_URL_ENV_VAR].rstrip("/")
        if env.get(GITHUB_RAW_URL_ENV_VAR):
            values["github_raw_url"] = env[GITHUB_RAW_URL_ENV_VAR].rstrip("/")
        if env.get(REQUEST_TIMEOUT_ENV_VAR):
            values["request_timeout"] = env[REQUEST_TIMEOUT_ENV_VAR]
        if env.get(CONTINUE_ON_ERROR_ENV_VAR):
            values["continue_on_error"] = env[CONTINUE_ON_ERROR_ENV_VAR].strip().lower() in _TRUE_VALUES
        if env.get(LOG_LEVEL_ENV_VAR):
            values["log_level"] = env[LOG_LEVEL_ENV_VAR].strip().upper()

        try:
            return cls(**values)
        except ValidationError as e:
            raise IndexBuildError(ErrorKind.CONFIGURATION, f"Invalid settings: {e}", "environment") from e
