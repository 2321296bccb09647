"""
Parsing of extension manifests (package.json).
"""
from __future__ import annotations

import logging

from pydantic import ValidationError

from extindex.domain.errors import ErrorKind, IndexBuildError
from extindex.domain.models import RawManifest

logger = logging.getLogger(__name__)

MANIFEST_FILENAME = "package.json"
STATIC_ASSETS_DIR = "static"


def parse_manifest(content: str, source: str) -> RawManifest:
    """Parse package.json text, raising a PARSE error that names the source on failure."""
    try:
        return RawManifest.model_validate_json(content)
    except ValidationError as e:
        logger.error(f"Failed to parse manifest from {source}: {e}")
        raise IndexBuildError(ErrorKind.PARSE, f"Invalid manifest: {e}", source) from e
