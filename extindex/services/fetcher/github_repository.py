"""
Fetch extensions published as GitHub repositories.
"""
from __future__ import annotations

import logging

from extindex.domain.models import ExtensionInfo
from extindex.domain.repository_utils import normalize_base_url, split_github_url
from extindex.services.fetcher.manifest import MANIFEST_FILENAME, STATIC_ASSETS_DIR, parse_manifest
from extindex.services.github_api import GitHubApiClient

logger = logging.getLogger(__name__)

GITHUB_RAW_URL = "https://raw.githubusercontent.com"


class GitHubRepositoryFetcher:
    """
    Builds an index entry for https://github.com/<owner>/<repo>.

    The manifest comes from the contents API. Icons are linked through
    raw.githubusercontent.com on the default branch, and every published
    release tag is listed as an available version.
    """

    def __init__(self, api: GitHubApiClient, raw_url: str = GITHUB_RAW_URL):
        self.api = api
        self.raw_url = raw_url.rstrip("/")

    async def fetch(self, location: str) -> ExtensionInfo:
        repository = normalize_base_url(location)
        owner, repo_name = split_github_url(repository)

        content = await self.api.get_file_content(owner, repo_name, MANIFEST_FILENAME)
        manifest = parse_manifest(content, self.api.contents_url(owner, repo_name, MANIFEST_FILENAME))
        info = ExtensionInfo.from_manifest(manifest, repository)

        default_branch = await self.api.get_default_branch(owner, repo_name)
        if manifest.icon:
            info.icon_url = (
                f"{self.raw_url}/{owner}/{repo_name}/{default_branch}/{STATIC_ASSETS_DIR}/{manifest.icon}"
            )

        info.available_versions = await self.api.get_release_tags(owner, repo_name)
        if not info.available_versions:
            logger.debug(f"No releases published for {owner}/{repo_name}")
        return info
