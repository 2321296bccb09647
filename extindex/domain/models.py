"""
Pydantic models for the extension index.

This module defines the data models that flow through the index build:
- The repository list read from repositories.json
- The raw manifest (package.json) published by each extension
- The normalized package record and the final index entry

Serialized field names follow the launcher's camelCase contract
(iconUrl, newestVersion, ...), while Python code uses snake_case.
"""

from __future__ import annotations

from enum import Enum
from pathlib import Path
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


DEFAULT_ARTIFACT_NAME = "extension.zip"


class RepositoryKind(str, Enum):
    """How a repository location is fetched."""

    GITHUB = "github"
    STATIC = "static"


# ---------------------------------------------------------------------------
# Input Models
# ---------------------------------------------------------------------------


class RepositoryList(BaseModel):
    """
    Contents of repositories.json.

    Maps author names to the repository locations they publish. Iteration
    order of the mapping is the order records appear in the index.
    """

    repositories: Dict[str, List[str]] = Field(
        description="Author name -> list of repository locations (GitHub URLs or static base URLs).",
    )


class RawManifest(BaseModel):
    """
    The package.json an extension author publishes in their repository.

    Only the fields the index needs are modelled; anything else is ignored.
    """

    model_config = ConfigDict(alias_generator=to_camel)

    name: str
    author: str
    version: str
    display_name: Optional[str] = None
    description: Optional[str] = None
    icon: Optional[str] = None
    artifact_name: Optional[str] = None


# ---------------------------------------------------------------------------
# Index Models
# ---------------------------------------------------------------------------


class ExtensionPackage(BaseModel):
    """Normalized metadata for one extension, derived from its manifest."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: str = Field(description="Lowercase '<author>.<name>' identifier.")
    author: str
    title: str
    description: str = ""
    newest_version: str
    repository: str = Field(description="Base location the record was fetched from (ends with '/').")
    icon_url: Optional[str] = Field(default=None, description="Absolute URL of the extension icon.")
    artifact_name: str = DEFAULT_ARTIFACT_NAME

    @classmethod
    def from_manifest(cls, manifest: RawManifest, repository: str) -> "ExtensionPackage":
        """
        Build a package record from a raw manifest.

        icon_url is left as the bare icon filename; callers resolve it to an
        absolute URL since that depends on where the repository is hosted.
        """
        return cls(
            id=f"{manifest.author.lower()}.{manifest.name.lower()}",
            author=manifest.author,
            title=manifest.display_name or manifest.name,
            description=manifest.description or "",
            newest_version=manifest.version,
            repository=repository,
            icon_url=manifest.icon,
            artifact_name=manifest.artifact_name or DEFAULT_ARTIFACT_NAME,
        )


class ExtensionInfo(ExtensionPackage):
    """A single entry of extindex.json."""

    available_versions: List[str] = Field(default_factory=list)

    def to_index_entry(self) -> dict:
        """Serialize using the camelCase keys of the index file, omitting a missing icon."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class RepositoryFailure(BaseModel):
    """A repository that could not be indexed when failures are collected instead of raised."""

    author: str
    repository: str
    kind: str
    message: str


class IndexBuildResult(BaseModel):
    """Outcome of one index build run."""

    extensions: List[ExtensionInfo] = Field(default_factory=list)
    failures: List[RepositoryFailure] = Field(default_factory=list)
    output_path: Optional[Path] = None

    @property
    def succeeded(self) -> bool:
        return not self.failures
