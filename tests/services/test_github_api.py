"""Tests for extindex.services.github_api."""

from __future__ import annotations

import asyncio
import base64

import pytest

from extindex.domain.errors import ErrorKind, IndexBuildError
from extindex.services.github_api import GitHubApiClient
from tests._fixtures.fake_web import API_URL, FakeWeb

REPO_API = f"{API_URL}/repos/Acme/ext-foo"


def _run(web: FakeWeb, call, token: str | None = None):
    async def _go():
        async with web.client() as client:
            return await call(GitHubApiClient(client, token=token))

    return asyncio.run(_go())


def test_requests_carry_accept_and_token_headers(web: FakeWeb) -> None:
    web.add_json(f"{REPO_API}/releases", [])

    _run(web, lambda api: api.get_release_tags("Acme", "ext-foo"), token="secret")

    request = web.requests[0]
    assert request.headers["Accept"] == "application/vnd.github.v3+json"
    assert request.headers["Authorization"] == "token secret"


def test_requests_without_token_are_unauthenticated(web: FakeWeb) -> None:
    web.add_json(f"{REPO_API}/releases", [])

    _run(web, lambda api: api.get_release_tags("Acme", "ext-foo"))

    assert "Authorization" not in web.requests[0].headers


def test_get_release_tags_returns_tag_names_in_order(web: FakeWeb) -> None:
    web.add_json(f"{REPO_API}/releases", [{"tag_name": "v1.2.0"}, {"tag_name": "v1.1.0"}])

    tags = _run(web, lambda api: api.get_release_tags("Acme", "ext-foo"))

    assert tags == ["v1.2.0", "v1.1.0"]


def test_get_release_tags_returns_empty_list_on_failure(web: FakeWeb, caplog) -> None:
    web.add_json(f"{REPO_API}/releases", {"message": "API rate limit exceeded"}, status=403)

    with caplog.at_level("WARNING"):
        tags = _run(web, lambda api: api.get_release_tags("Acme", "ext-foo"))

    assert tags == []
    assert "Failed to fetch releases for Acme/ext-foo" in caplog.text


def test_get_release_tags_returns_empty_list_on_connection_error(web: FakeWeb) -> None:
    web.add_connect_error(f"{REPO_API}/releases")

    assert _run(web, lambda api: api.get_release_tags("Acme", "ext-foo")) == []


def test_get_default_branch(web: FakeWeb) -> None:
    web.add_json(REPO_API, {"default_branch": "develop"})

    assert _run(web, lambda api: api.get_default_branch("Acme", "ext-foo")) == "develop"


@pytest.mark.parametrize("payload", [{"message": "Not Found"}, {"default_branch": None}])
def test_get_default_branch_falls_back_to_main(web: FakeWeb, caplog, payload) -> None:
    web.add_json(REPO_API, payload)

    with caplog.at_level("WARNING"):
        branch = _run(web, lambda api: api.get_default_branch("Acme", "ext-foo"))

    assert branch == "main"
    assert "Failed to fetch default branch" in caplog.text


def test_get_file_content_decodes_base64(web: FakeWeb) -> None:
    encoded = base64.encodebytes('{"name": "föö"}'.encode("utf-8")).decode("ascii")
    web.add_json(f"{REPO_API}/contents/package.json", {"content": encoded})

    content = _run(web, lambda api: api.get_file_content("Acme", "ext-foo", "package.json"))

    assert content == '{"name": "föö"}'


def test_get_file_content_missing_file_is_fetch_error(web: FakeWeb) -> None:
    with pytest.raises(IndexBuildError) as excinfo:
        _run(web, lambda api: api.get_file_content("Acme", "ext-foo", "package.json"))

    assert excinfo.value.kind is ErrorKind.FETCH
    assert excinfo.value.source == f"{REPO_API}/contents/package.json"


def test_get_file_content_without_content_is_parse_error(web: FakeWeb) -> None:
    web.add_json(f"{REPO_API}/contents/package.json", [{"name": "package.json", "type": "file"}])

    with pytest.raises(IndexBuildError) as excinfo:
        _run(web, lambda api: api.get_file_content("Acme", "ext-foo", "package.json"))

    assert excinfo.value.kind is ErrorKind.PARSE


def test_get_release_tags_skips_releases_without_tag_name(web: FakeWeb) -> None:
    web.add_json(f"{REPO_API}/releases", [{"tag_name": None}, {"name": "draft"}, {"tag_name": "v1"}])

    assert _run(web, lambda api: api.get_release_tags("Acme", "ext-foo")) == ["v1"]


@pytest.mark.parametrize(
    "encoded",
    [
        "abc",
        base64.b64encode(b"\xff\xfe{}").decode("ascii"),
    ],
    ids=["bad-padding", "not-utf8"],
)
def test_get_file_content_undecodable_content_is_parse_error(web: FakeWeb, encoded: str) -> None:
    web.add_json(f"{REPO_API}/contents/package.json", {"content": encoded})

    with pytest.raises(IndexBuildError) as excinfo:
        _run(web, lambda api: api.get_file_content("Acme", "ext-foo", "package.json"))

    assert excinfo.value.kind is ErrorKind.PARSE
    assert excinfo.value.source == f"{REPO_API}/contents/package.json"


def test_get_file_content_non_json_body_is_parse_error(web: FakeWeb) -> None:
    web.add_text(f"{REPO_API}/contents/package.json", "<html>maintenance</html>")

    with pytest.raises(IndexBuildError) as excinfo:
        _run(web, lambda api: api.get_file_content("Acme", "ext-foo", "package.json"))

    assert excinfo.value.kind is ErrorKind.PARSE
    assert excinfo.value.source == f"{REPO_API}/contents/package.json"


def test_get_file_content_unusable_url_is_fetch_error(web: FakeWeb) -> None:
    with pytest.raises(IndexBuildError) as excinfo:
        _run(web, lambda api: api.get_file_content("Acme", "ext foo\x01", "package.json"))

    assert excinfo.value.kind is ErrorKind.FETCH
    assert web.requests == []
