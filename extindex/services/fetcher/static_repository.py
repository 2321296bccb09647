"""
Fetch extensions hosted as plain files on any web server.
"""
from __future__ import annotations

import logging

import httpx

from extindex.domain.errors import ErrorKind, IndexBuildError
from extindex.domain.models import ExtensionInfo
from extindex.domain.repository_utils import normalize_base_url
from extindex.services.fetcher.manifest import MANIFEST_FILENAME, STATIC_ASSETS_DIR, parse_manifest

logger = logging.getLogger(__name__)


class StaticRepositoryFetcher:
    """
    Reads <base>/package.json directly. Icons are expected under <base>/static/.

    Static repositories publish a single version, so availableVersions is
    always just the manifest version.
    """

    def __init__(self, client: httpx.AsyncClient):
        self.client = client

    async def fetch(self, location: str) -> ExtensionInfo:
        base_url = normalize_base_url(location)
        manifest_url = base_url + MANIFEST_FILENAME
        logger.debug(f"Downloading manifest from {manifest_url}")

        try:
            response = await self.client.get(manifest_url)
            response.raise_for_status()
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            raise IndexBuildError(ErrorKind.FETCH, f"Failed to fetch manifest: {e}", manifest_url) from e

        manifest = parse_manifest(response.text, manifest_url)

        icon_url = None
        if manifest.icon:
            icon_url = f"{base_url}{STATIC_ASSETS_DIR}/{manifest.icon}"

        info = ExtensionInfo.from_manifest(manifest, base_url)
        info.icon_url = icon_url
        info.available_versions = [info.newest_version]
        return info
