"""
Error types raised while building the extension index.
"""
from __future__ import annotations

from enum import Enum


class ErrorKind(str, Enum):
    CONFIGURATION = "configuration"
    URL_SHAPE = "url_shape"
    FETCH = "fetch"
    PARSE = "parse"


class IndexBuildError(Exception):
    """
    A failure that stops a repository (or the whole run) from being indexed.

    Args:
        kind: Category of the failure.
        message: Human readable description.
        source: The offending URL or file path.
    """

    def __init__(self, kind: ErrorKind, message: str, source: str = ""):
        super().__init__(message)
        self.kind = kind
        self.message = message
        self.source = source

    def __str__(self) -> str:
        if self.source:
            return f"{self.message} ({self.source})"
        return self.message
