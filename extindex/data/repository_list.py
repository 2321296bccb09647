"""
Load the list of extension repositories to index.
"""
from __future__ import annotations

import logging
from pathlib import Path

from pydantic import ValidationError

from extindex.domain.errors import ErrorKind, IndexBuildError
from extindex.domain.models import RepositoryList

logger = logging.getLogger(__name__)


def load_repository_list(path: Path) -> RepositoryList:
    """
    Read repositories.json.

    Expected shape:
        {"repositories": {"<author>": ["<repository url>", ...]}}

    A missing or malformed file is a configuration error; nothing is fetched
    in that case.
    """
    if not path.exists():
        raise IndexBuildError(ErrorKind.CONFIGURATION, "Repository list not found", str(path))

    try:
        content = path.read_text(encoding="utf-8")
    except OSError as e:
        raise IndexBuildError(ErrorKind.CONFIGURATION, f"Failed to read repository list: {e}", str(path)) from e

    try:
        repository_list = RepositoryList.model_validate_json(content)
    except ValidationError as e:
        raise IndexBuildError(ErrorKind.CONFIGURATION, f"Malformed repository list: {e}", str(path)) from e

    total = sum(len(repos) for repos in repository_list.repositories.values())
    logger.debug(f"Loaded {total} repositories from {len(repository_list.repositories)} authors in {path}")
    return repository_list
