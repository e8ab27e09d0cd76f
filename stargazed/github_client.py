"""
github_client.py

Responsibility: Isolate all direct GitHub REST API interaction.

This module must be the only place that:
- Constructs GitHub REST endpoints
- Sends HTTP requests to api.github.com
- Interprets GitHub API responses / error payloads / pagination links

Everything else (aggregation, rendering, CLI behavior) should use this client.
"""

from __future__ import annotations

import base64
import logging
from dataclasses import dataclass
from typing import Any, Iterator

import requests

from stargazed import __version__

logger = logging.getLogger(__name__)

API_BASE = "https://api.github.com"
PER_PAGE = 100
REQUEST_TIMEOUT = 30
README_PATH = "README.md"
DEFAULT_COMMIT_MESSAGE = "Update README"


class GitHubError(RuntimeError):
    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


@dataclass(frozen=True)
class StarredItem:
    name: str
    url: str
    description: str | None = None
    language: str | None = None

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> "StarredItem":
        return cls(
            name=data["name"],
            url=data["html_url"],
            description=data.get("description"),
            language=data.get("language"),
        )


@dataclass(frozen=True)
class RepoInfo:
    owner: str
    name: str
    html_url: str
    default_branch: str


class GitHubClient:
    def __init__(self, token: str | None = None, api_base: str = API_BASE) -> None:
        self._token = (token or "").strip() or None
        self._api_base = api_base.rstrip("/")

    @property
    def authenticated(self) -> bool:
        return self._token is not None

    def _headers(self) -> dict[str, str]:
        headers = {
            "Accept": "application/vnd.github+json",
            "X-GitHub-Api-Version": "2022-11-28",
            "User-Agent": f"stargazed/{__version__}",
        }
        if self._token:
            headers["Authorization"] = f"Bearer {self._token}"
        return headers

    def _send(
        self,
        method: str,
        path: str,
        *,
        params: dict[str, Any] | None = None,
        json_body: dict[str, Any] | None = None,
    ) -> requests.Response:
        url = f"{self._api_base}{path}"
        try:
            r = requests.request(
                method,
                url,
                headers=self._headers(),
                params=params,
                json=json_body,
                timeout=REQUEST_TIMEOUT,
            )
        except requests.RequestException as e:
            raise GitHubError(f"GitHub API request failed {method} {path}: {e}") from e
        if r.status_code >= 400:
            try:
                payload = r.json()
            except ValueError:
                payload = {"message": r.text}
            message = payload.get("message", payload) if isinstance(payload, dict) else payload
            raise GitHubError(
                f"GitHub API error {r.status_code} {method} {path}: {message}",
                status_code=r.status_code,
            )
        return r

    def _request(self, method: str, path: str, *, json_body: dict[str, Any] | None = None) -> Any:
        r = self._send(method, path, json_body=json_body)
        if r.status_code == 204:
            return None
        try:
            return r.json()
        except ValueError as e:
            raise GitHubError(f"Unexpected response for {method} {path}: body is not JSON") from e

    def iter_starred_pages(self, username: str) -> Iterator[list[dict[str, Any]]]:
        """
        Yield raw starred-repository pages for `username`, first page first.

        Stops after the first response whose Link header has no `next` relation.
        """
        page = 1
        path = f"/users/{requests.utils.quote(username, safe='')}/starred"
        while True:
            r = self._send("GET", path, params={"per_page": PER_PAGE, "page": page})
            try:
                body = r.json()
            except ValueError as e:
                raise GitHubError(f"Unexpected response for {path} page {page}: body is not JSON") from e
            if not isinstance(body, list):
                raise GitHubError(f"Unexpected response for {path} page {page}: expected a list")
            logger.debug("Page %d: %d starred repositories", page, len(body))
            yield body

            # requests parses the Link header; missing or unparseable means last page.
            if "next" not in r.links:
                return
            page += 1

    def fetch_starred(self, username: str) -> list[StarredItem]:
        """
        Return every repository starred by `username`, in page-then-in-page order.

        Any failed page aborts the whole fetch; no partial list is returned.
        """
        items: list[StarredItem] = []
        for page_number, page in enumerate(self.iter_starred_pages(username), start=1):
            try:
                items.extend(StarredItem.from_api(entry) for entry in page)
            except (KeyError, TypeError) as e:
                raise GitHubError(f"Malformed starred repository on page {page_number}: {type(e).__name__} {e}") from e
        return items

    def viewer_login(self) -> str:
        viewer = self._request("GET", "/user")
        login = str(viewer.get("login") or "")
        if not login:
            raise GitHubError("Could not determine the authenticated user's login.")
        return login

    def get_repo(self, owner: str, name: str) -> RepoInfo | None:
        """
        Return RepoInfo if the repo exists and is accessible; otherwise None.
        """
        try:
            data = self._request("GET", f"/repos/{owner}/{name}")
        except GitHubError as e:
            if e.status_code == 404:
                return None
            raise
        return RepoInfo(
            owner=owner,
            name=name,
            html_url=data["html_url"],
            default_branch=data.get("default_branch") or "main",
        )

    def create_repo(self, *, name: str, description: str = "") -> RepoInfo:
        """
        Create a new public repository under the authenticated user.
        """
        body = {
            "name": name,
            "description": description,
            "private": False,
            "auto_init": False,
            "has_projects": False,
            "has_wiki": False,
        }
        data = self._request("POST", "/user/repos", json_body=body)
        return RepoInfo(
            owner=data["owner"]["login"],
            name=name,
            html_url=data["html_url"],
            default_branch=data.get("default_branch") or "main",
        )

    def _readme_sha(self, repo: RepoInfo) -> str | None:
        try:
            data = self._request("GET", f"/repos/{repo.owner}/{repo.name}/contents/{README_PATH}")
        except GitHubError as e:
            if e.status_code == 404:
                return None
            raise
        return data.get("sha")

    def publish_readme(self, name: str, content: str, message: str | None = None) -> RepoInfo:
        """
        Commit `content` as README.md to the authenticated user's repo `name`.

        The repo is created when it does not exist yet; an existing README.md
        is replaced.
        """
        if not self.authenticated:
            raise GitHubError("GitHub token is required to publish a README.")

        owner = self.viewer_login()
        repo = self.get_repo(owner, name)
        if repo is None:
            logger.info("Repository %s/%s not found, creating it", owner, name)
            repo = self.create_repo(name=name, description="A curated list of my GitHub stars")

        body: dict[str, Any] = {
            "message": message or DEFAULT_COMMIT_MESSAGE,
            "content": base64.b64encode(content.encode("utf-8")).decode("ascii"),
        }
        sha = self._readme_sha(repo)
        if sha:
            body["sha"] = sha
        self._request("PUT", f"/repos/{repo.owner}/{repo.name}/contents/{README_PATH}", json_body=body)
        return repo
