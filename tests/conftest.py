"""Shared fixtures: GitHub REST API responses served through `responses`."""

from __future__ import annotations

import json
from typing import Any, Iterator
from urllib.parse import parse_qs, urlsplit

import pytest
import responses

from stargazed.github_client import API_BASE


def make_repo(name: str, *, language: str | None = "Python", description: str | None = None) -> dict[str, Any]:
    return {
        "name": name,
        "full_name": f"someone/{name}",
        "html_url": f"https://github.com/someone/{name}",
        "description": description,
        "language": language,
    }


def next_link(page: int, last: int) -> str:
    return (
        f'<{API_BASE}/user/1/starred?per_page=100&page={page + 1}>; rel="next", '
        f'<{API_BASE}/user/1/starred?per_page=100&page={last}>; rel="last"'
    )


def add_starred(mock: responses.RequestsMock, username: str, pages: list[list[dict[str, Any]]]) -> None:
    """Serve `pages` for /users/<username>/starred, picking the body by the `page` query parameter."""

    def callback(request: Any) -> tuple[int, dict[str, str], str]:
        page = int(parse_qs(urlsplit(request.url).query)["page"][0])
        headers = {"Link": next_link(page, len(pages))} if page < len(pages) else {}
        return 200, headers, json.dumps(pages[page - 1])

    mock.add_callback(
        responses.GET,
        f"{API_BASE}/users/{username}/starred",
        callback=callback,
        content_type="application/json",
    )


def add_publish_target(mock: responses.RequestsMock, *, exists: bool, sha: str | None = None) -> None:
    """Register the endpoints `publish_readme` touches for octocat/stars."""
    mock.add(responses.GET, f"{API_BASE}/user", json={"login": "octocat"})
    if exists:
        mock.add(
            responses.GET,
            f"{API_BASE}/repos/octocat/stars",
            json={"html_url": "https://github.com/octocat/stars", "default_branch": "main"},
        )
    else:
        mock.add(responses.GET, f"{API_BASE}/repos/octocat/stars", json={"message": "Not Found"}, status=404)
        mock.add(
            responses.POST,
            f"{API_BASE}/user/repos",
            json={"owner": {"login": "octocat"}, "html_url": "https://github.com/octocat/stars"},
            status=201,
        )
    contents = f"{API_BASE}/repos/octocat/stars/contents/README.md"
    if sha:
        mock.add(responses.GET, contents, json={"sha": sha})
    else:
        mock.add(responses.GET, contents, json={"message": "Not Found"}, status=404)
    mock.add(responses.PUT, contents, json={}, status=201 if not sha else 200)


def sent_json(call: Any) -> Any:
    return json.loads(call.request.body)


@pytest.fixture
def github_api() -> Iterator[responses.RequestsMock]:
    with responses.RequestsMock(assert_all_requests_are_fired=False) as mock:
        yield mock
