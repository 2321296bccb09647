"""
Build extindex.json from the repositories listed in repositories.json.
"""
from __future__ import annotations

import logging
from typing import Optional

import httpx

from extindex.core.config import Settings
from extindex.data.repository_list import load_repository_list
from extindex.domain.errors import IndexBuildError
from extindex.domain.models import ExtensionInfo, IndexBuildResult, RepositoryFailure, RepositoryKind
from extindex.domain.repository_utils import classify_repository
from extindex.services.fetcher import GitHubRepositoryFetcher, StaticRepositoryFetcher
from extindex.services.github_api import GitHubApiClient
from extindex.storage.index_writer import write_index

logger = logging.getLogger(__name__)


class IndexBuilder:
    """
    Walks every author and repository in order and fetches one index entry per
    repository. Repositories are processed strictly one after another.
    """

    def __init__(self, settings: Settings, client: httpx.AsyncClient):
        self.settings = settings
        api = GitHubApiClient(client, token=settings.github_token, api_url=settings.github_api_url)
        self.github_fetcher = GitHubRepositoryFetcher(api, raw_url=settings.github_raw_url)
        self.static_fetcher = StaticRepositoryFetcher(client)

    async def fetch_repository(self, location: str) -> ExtensionInfo:
        """Dispatch a repository location to the matching fetcher."""
        if classify_repository(location) is RepositoryKind.GITHUB:
            return await self.github_fetcher.fetch(location)
        return await self.static_fetcher.fetch(location)

    async def build(self) -> IndexBuildResult:
        """
        Fetch every listed repository and write the index.

        By default the first failing repository aborts the run and nothing is
        written. With continue_on_error the failure is recorded, the repository
        is skipped and the index of the remaining repositories is still written.
        """
        repository_list = load_repository_list(self.settings.repositories_file)
        result = IndexBuildResult()

        for author, repositories in repository_list.repositories.items():
            logger.info(f"Processing author: {author}")
            for repository in repositories:
                logger.info(f"  Processing repository: {repository}")
                try:
                    result.extensions.append(await self.fetch_repository(repository))
                except IndexBuildError as e:
                    if not self.settings.continue_on_error:
                        raise
                    logger.error(f"Skipping {repository}: {e}")
                    result.failures.append(
                        RepositoryFailure(
                            author=author,
                            repository=repository,
                            kind=e.kind.value,
                            message=str(e),
                        )
                    )

        result.output_path = await write_index(result.extensions, self.settings.output_file)
        logger.info(f"Saved info for {len(result.extensions)} repositories")
        return result


async def build_index(settings: Settings, client: Optional[httpx.AsyncClient] = None) -> IndexBuildResult:
    """
    Run a full index build.

    If no client is given one is created for the run and closed afterwards;
    a client passed in stays owned by the caller.
    """
    if client is not None:
        return await IndexBuilder(settings, client).build()

    async with httpx.AsyncClient(follow_redirects=True, timeout=settings.request_timeout) as own_client:
        return await IndexBuilder(settings, own_client).build()
