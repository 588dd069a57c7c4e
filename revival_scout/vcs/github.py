"""
GitHub VCS provider implementation for Revival Scout.

This module implements the GitHub-specific provider using the GitHub REST API
to fetch repository, issue and commit records.
"""

import os
from typing import Any

import httpx
from dotenv import load_dotenv

from revival_scout.config import get_github_api_url
from revival_scout.errors import DataUnavailable
from revival_scout.http_client import _get_http_client
from revival_scout.models import Commit, Issue, Repository, SearchFilters
from revival_scout.vcs.base import BaseVCSProvider

# Load environment variables
load_dotenv()

USER_AGENT = "revival-scout/0.1.0"

# GitHub returns at most 100 items per page
PAGE_SIZE = 100

CATEGORY_KEYWORDS: dict[str, list[str]] = {
    "cli-tool": ["cli tool", "command line", "terminal", "console"],
    "build-tool": ["build tool", "bundler", "webpack", "rollup", "vite", "parcel"],
    "dev-tool": ["developer tool", "development", "devtools"],
    "testing": ["testing framework", "test runner", "jest", "mocha", "cypress"],
    "linter": ["linter", "eslint", "tslint", "prettier", "code quality"],
    "framework": ["framework", "library framework"],
    "library": ["library", "utility library"],
    "plugin": ["plugin", "extension"],
}


class GitHubProvider(BaseVCSProvider):
    """GitHub provider using the REST API."""

    def __init__(self, token: str | None = None, base_url: str | None = None):
        """
        Initialize GitHub provider.

        Args:
            token: GitHub token. If not provided, reads from the GITHUB_TOKEN
                   environment variable. Unauthenticated access works with a
                   much lower rate limit.
            base_url: REST API base URL. Defaults to the configured URL.
        """
        self.token = token or os.getenv("GITHUB_TOKEN") or None
        self.base_url = (base_url or get_github_api_url()).rstrip("/")

    def get_platform_name(self) -> str:
        """Return 'github' as the platform identifier."""
        return "github"

    def validate_credentials(self) -> bool:
        """Check if a GitHub token is configured."""
        return self.token is not None and len(self.token) > 0

    def get_repository_url(self, owner: str, repo: str) -> str:
        """Construct GitHub repository URL."""
        return f"https://github.com/{owner}/{repo}"

    def _headers(self) -> dict[str, str]:
        headers = {
            "Accept": "application/vnd.github+json",
            "User-Agent": USER_AGENT,
        }
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        return headers

    def _get(self, path: str, source: str, params: dict[str, Any] | None = None) -> Any:
        """
        Issue a GET request against the REST API.

        Raises:
            DataUnavailable: On transport errors or non-success responses.
        """
        client = _get_http_client()
        try:
            response = client.get(
                f"{self.base_url}{path}", params=params, headers=self._headers()
            )
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise DataUnavailable(source, _error_message(e.response)) from e
        except httpx.RequestError as e:
            raise DataUnavailable(source, e) from e
        return response.json()

    def get_repository(self, owner: str, repo: str) -> Repository:
        """
        Fetch repository metadata.

        Raises:
            ValueError: If repository not found or is inaccessible
            DataUnavailable: If GitHub API returns another error
        """
        try:
            data = self._get(f"/repos/{owner}/{repo}", "repository")
        except DataUnavailable as e:
            cause = e.__cause__
            if (
                isinstance(cause, httpx.HTTPStatusError)
                and cause.response.status_code == 404
            ):
                raise ValueError(
                    f"Repository {owner}/{repo} not found or is inaccessible."
                ) from e
            raise
        return normalize_repository(data)

    def fetch_issues(self, owner: str, repo: str, state: str = "all") -> list[Issue]:
        """Fetch the most recent page of issues. Pull requests are skipped."""
        items = self._get(
            f"/repos/{owner}/{repo}/issues",
            "issues",
            params={"state": state, "per_page": PAGE_SIZE},
        )
        return [
            normalize_issue(item) for item in items if "pull_request" not in item
        ]

    def fetch_commits(
        self, owner: str, repo: str, since: str | None = None
    ) -> list[Commit]:
        """Fetch the most recent page of commits on the default branch."""
        params: dict[str, Any] = {"per_page": PAGE_SIZE}
        if since:
            params["since"] = since
        items = self._get(f"/repos/{owner}/{repo}/commits", "commits", params=params)
        return [normalize_commit(item) for item in items]

    def fetch_forks(self, owner: str, repo: str, limit: int = 40) -> list[Repository]:
        """
        Fetch up to ``limit`` forks, newest first, following pagination.

        Raises:
            DataUnavailable: If a page cannot be fetched
        """
        per_page = min(PAGE_SIZE, max(limit, 1))
        forks: list[Repository] = []
        page = 1
        while len(forks) < limit:
            items = self._get(
                f"/repos/{owner}/{repo}/forks",
                "forks",
                params={"sort": "newest", "page": page, "per_page": per_page},
            )
            forks.extend(normalize_repository(item) for item in items)
            if len(items) < per_page:
                break
            page += 1
        return forks[:limit]

    def search_repositories(
        self, filters: SearchFilters, page: int = 1, per_page: int = 30
    ) -> tuple[int, list[Repository]]:
        """
        Search repositories matching ``filters``.

        Returns:
            Tuple of (total match count, repositories on the requested page)
        """
        data = self._get(
            "/search/repositories",
            "search results",
            params={
                "q": build_search_query(filters),
                "sort": filters.sort,
                "order": filters.order,
                "page": page,
                "per_page": per_page,
            },
        )
        items = [normalize_repository(item) for item in data.get("items", [])]
        return data.get("total_count", len(items)), items

    def get_rate_limit(self) -> dict[str, Any]:
        """Return the raw rate limit status."""
        return self._get("/rate_limit", "rate limit")


def _error_message(response: httpx.Response) -> str:
    """Extract GitHub's error message from a failed response."""
    try:
        message = response.json().get("message")
    except (ValueError, AttributeError):
        message = None
    return f"HTTP {response.status_code}" + (f": {message}" if message else "")


def build_search_query(filters: SearchFilters) -> str:
    """Build a GitHub search query string from filters."""
    query_parts: list[str] = []

    if filters.language:
        query_parts.append(f"language:{filters.language}")

    if filters.min_stars is not None or filters.max_stars is not None:
        minimum = filters.min_stars or 0
        maximum = filters.max_stars if filters.max_stars is not None else "*"
        query_parts.append(f"stars:{minimum}..{maximum}")

    if filters.pushed_before:
        query_parts.append(f"pushed:<{filters.pushed_before}")
    if filters.pushed_after:
        query_parts.append(f"pushed:>{filters.pushed_after}")

    if filters.has_issues:
        query_parts.append("has:issues")

    if filters.archived is not None:
        query_parts.append(f"archived:{str(filters.archived).lower()}")

    if filters.category:
        keywords = CATEGORY_KEYWORDS.get(filters.category, [])
        if keywords:
            joined = " OR ".join(f'"{keyword}"' for keyword in keywords)
            query_parts.append(f"({joined})")

    return " ".join(query_parts)


def normalize_repository(data: dict[str, Any]) -> Repository:
    """Normalize a REST repository payload into a Repository record."""
    owner = data.get("owner") or {}
    full_name = data.get("full_name") or ""
    owner_login = owner.get("login") or full_name.partition("/")[0]
    license_data = data.get("license")
    license_name = None
    if license_data:
        license_name = (
            license_data.get("spdx_id")
            or license_data.get("name")
            or license_data.get("key")
        )

    return Repository(
        owner=owner_login,
        name=data.get("name") or full_name.partition("/")[2],
        pushed_at=data.get("pushed_at"),
        updated_at=data.get("updated_at"),
        created_at=data.get("created_at"),
        stargazers_count=data.get("stargazers_count") or 0,
        forks_count=data.get("forks_count") or 0,
        watchers_count=data.get("watchers_count") or 0,
        open_issues_count=data.get("open_issues_count") or 0,
        size=data.get("size") or 0,
        archived=bool(data.get("archived", False)),
        description=data.get("description"),
        topics=tuple(data.get("topics") or ()),
        license=license_name,
        language=data.get("language"),
        html_url=data.get("html_url"),
    )


def normalize_issue(data: dict[str, Any]) -> Issue:
    return Issue(
        state=data.get("state", "open"),
        created_at=data.get("created_at"),
        closed_at=data.get("closed_at"),
    )


def normalize_commit(data: dict[str, Any]) -> Commit:
    author = (data.get("commit") or {}).get("author") or {}
    return Commit(authored_at=author.get("date"))
