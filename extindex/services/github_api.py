"""
Thin client for the parts of the GitHub REST API the index builder uses.
"""
from __future__ import annotations

import base64
import binascii
import logging
from typing import Any, Dict, List, Optional

import httpx

from extindex.domain.errors import ErrorKind, IndexBuildError

logger = logging.getLogger(__name__)

GITHUB_API_URL = "https://api.github.com"
GITHUB_ACCEPT_HEADER = "application/vnd.github.v3+json"
DEFAULT_BRANCH_FALLBACK = "main"


class GitHubApiClient:
    """
    Read-only GitHub API access over a shared httpx.AsyncClient.

    The token is passed in explicitly; when it is None requests go out
    unauthenticated.
    """

    def __init__(
        self,
        client: httpx.AsyncClient,
        token: Optional[str] = None,
        api_url: str = GITHUB_API_URL,
    ):
        self.client = client
        self.token = token
        self.api_url = api_url.rstrip("/")

    def _headers(self) -> Dict[str, str]:
        headers = {"Accept": GITHUB_ACCEPT_HEADER}
        if self.token:
            headers["Authorization"] = f"token {self.token}"
        return headers

    async def _get_json(self, path: str) -> Any:
        url = f"{self.api_url}{path}"
        logger.debug(f"GET {url}")
        response = await self.client.get(url, headers=self._headers())
        response.raise_for_status()
        return response.json()

    def contents_url(self, owner: str, repo: str, file_path: str) -> str:
        return f"{self.api_url}/repos/{owner}/{repo}/contents/{file_path}"

    async def get_file_content(self, owner: str, repo: str, file_path: str) -> str:
        """
        Fetch a file through the contents API and return it decoded as UTF-8.

        The contents API returns the file body base64 encoded in "content".
        """
        path = f"/repos/{owner}/{repo}/contents/{file_path}"
        source = self.contents_url(owner, repo, file_path)
        try:
            data = await self._get_json(path)
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            raise IndexBuildError(ErrorKind.FETCH, f"Failed to fetch {file_path}: {e}", source) from e
        except ValueError as e:
            raise IndexBuildError(ErrorKind.PARSE, f"Contents API returned invalid JSON: {e}", source) from e

        encoded = data.get("content") if isinstance(data, dict) else None
        if not isinstance(encoded, str):
            raise IndexBuildError(ErrorKind.PARSE, f"No content returned for {file_path}", source)

        try:
            return base64.b64decode(encoded).decode("utf-8")
        except (binascii.Error, UnicodeDecodeError) as e:
            raise IndexBuildError(ErrorKind.PARSE, f"Could not decode {file_path}: {e}", source) from e

    async def get_default_branch(self, owner: str, repo: str) -> str:
        """Return the repository's default branch, or "main" if it cannot be determined."""
        try:
            data = await self._get_json(f"/repos/{owner}/{repo}")
            branch = data["default_branch"]
            if not isinstance(branch, str) or not branch:
                raise ValueError(f"unexpected default_branch value {branch!r}")
            return branch
        except Exception as e:
            logger.warning(f"Failed to fetch default branch for {owner}/{repo}: {e}")
            return DEFAULT_BRANCH_FALLBACK

    async def get_release_tags(self, owner: str, repo: str) -> List[str]:
        """Return the tag names of the repository's releases, or [] on failure."""
        try:
            releases = await self._get_json(f"/repos/{owner}/{repo}/releases")
            tags = [release.get("tag_name") for release in releases]
            return [tag for tag in tags if isinstance(tag, str) and tag]
        except Exception as e:
            logger.warning(f"Failed to fetch releases for {owner}/{repo}: {e}")
            return []
