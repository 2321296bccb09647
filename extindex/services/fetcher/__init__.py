"""
Manifest fetchers for the two kinds of extension repositories.
"""
from extindex.services.fetcher.github_repository import GitHubRepositoryFetcher
from extindex.services.fetcher.static_repository import StaticRepositoryFetcher

__all__ = ["GitHubRepositoryFetcher", "StaticRepositoryFetcher"]
