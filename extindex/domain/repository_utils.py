import re
from typing import Tuple

from extindex.domain.errors import ErrorKind, IndexBuildError
from extindex.domain.models import RepositoryKind

GITHUB_DOMAIN = "github.com"
_GITHUB_REPO_PATTERN = re.compile(r"github\.com/([^/]+)/([^/]+)")


def classify_repository(location: str) -> RepositoryKind:
    """
    Decide how a repository location is fetched.

    Anything mentioning github.com goes through the GitHub API; every other
    location is treated as a static base URL serving package.json directly.
    """
    if GITHUB_DOMAIN in location:
        return RepositoryKind.GITHUB
    return RepositoryKind.STATIC


def normalize_base_url(location: str) -> str:
    """Ensure a base location ends with a single trailing '/'."""
    if not location.endswith("/"):
        return location + "/"
    return location


def split_github_url(location: str) -> Tuple[str, str]:
    """
    Extract (owner, repo) from a GitHub web URL such as
    https://github.com/<owner>/<repo>/.
    """
    match = _GITHUB_REPO_PATTERN.search(normalize_base_url(location))
    if not match:
        raise IndexBuildError(ErrorKind.URL_SHAPE, "Invalid GitHub repository URL", location)

    owner, repo_name = match.group(1), match.group(2)
    if not owner or not repo_name:
        raise IndexBuildError(ErrorKind.URL_SHAPE, "No owner and repository name in URL", location)
    return owner, repo_name
