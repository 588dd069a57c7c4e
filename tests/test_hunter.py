"""
Tests for repository hunting.
"""

import pytest

from revival_scout.errors import DataUnavailable
from revival_scout.hunter import describe_filters, hunt, rank_by_revival_potential
from revival_scout.models import SearchFilters
from revival_scout.vcs.github import GitHubProvider


class FakeSearchProvider(GitHubProvider):
    """GitHub provider answering searches from memory."""

    def __init__(self, repositories, total=None, error=None):
        super().__init__(token="test_token", base_url="https://api.github.test")
        self.repositories = repositories
        self.total = total if total is not None else len(repositories)
        self.error = error
        self.search_calls = []

    def search_repositories(self, filters, page=1, per_page=30):
        self.search_calls.append((filters, page, per_page))
        if self.error:
            raise self.error
        return self.total, self.repositories[:per_page]

    def fetch_issues(self, owner, repo, state="all"):
        return []

    def fetch_commits(self, owner, repo, since=None):
        return []


@pytest.fixture
def candidates(make_repository, days_ago):
    return [
        make_repository(name="tiny", pushed_at=days_ago(400), stargazers_count=5),
        make_repository(
            name="popular",
            pushed_at=days_ago(400),
            created_at=days_ago(1000),
            stargazers_count=900,
            forks_count=40,
            description="A well documented command line tool",
            license="MIT",
            size=500,
        ),
        make_repository(name="broken", pushed_at="someday"),
    ]


class TestHunt:
    """Test the hunt workflow."""

    def test_results_ranked_by_revival_potential(self, candidates, now):
        provider = FakeSearchProvider(candidates, total=57)
        results = hunt(
            SearchFilters(language="python"),
            max_results=2,
            provider=provider,
            now=now,
        )

        assert results.total_found == 57
        assert [r.repository.name for r in results.analyzed] == ["popular", "tiny"]
        assert results.query == "language:python"
        assert results.timestamp == now.isoformat()
        assert all(r.analyzed_at == now.isoformat() for r in results.analyzed)
        assert results.execution_time >= 0

    def test_requests_twice_the_wanted_results(self, candidates, now):
        provider = FakeSearchProvider(candidates)
        hunt(SearchFilters(), max_results=5, provider=provider, now=now)
        assert provider.search_calls[0][1:] == (1, 10)

    def test_page_size_is_capped(self, now):
        provider = FakeSearchProvider([])
        hunt(SearchFilters(), max_results=80, provider=provider, now=now)
        assert provider.search_calls[0][2] == 100

    def test_malformed_repository_is_skipped(self, candidates, now):
        provider = FakeSearchProvider(candidates)
        results = hunt(SearchFilters(), max_results=3, provider=provider, now=now)
        assert sorted(r.repository.name for r in results.analyzed) == ["popular", "tiny"]

    def test_search_failure_propagates(self, now):
        provider = FakeSearchProvider([], error=DataUnavailable("search results", "HTTP 422"))
        with pytest.raises(DataUnavailable):
            hunt(SearchFilters(), provider=provider, now=now)

    def test_results_are_json_ready(self, candidates, now):
        provider = FakeSearchProvider(candidates)
        payload = hunt(
            SearchFilters(min_stars=1), max_results=1, provider=provider, now=now
        ).to_dict()
        assert payload["filters"]["min_stars"] == 1
        assert len(payload["analyzed"]) == 1


def test_rank_by_revival_potential(candidates, now):
    from revival_scout.core import analyze

    results = [analyze(repo, now=now) for repo in candidates[:2]]
    ranked = rank_by_revival_potential(results)
    assert ranked[0].revival_potential >= ranked[1].revival_potential


@pytest.mark.parametrize(
    "filters, expected",
    [
        (SearchFilters(), ""),
        (SearchFilters(language="rust", category="cli-tool"), "language:rust category:cli-tool"),
        (SearchFilters(min_stars=10, max_stars=99), "stars:>=10 stars:<=99"),
        (
            SearchFilters(pushed_before="2023-01-01", pushed_after="2019-01-01"),
            "pushed:<2023-01-01 pushed:>2019-01-01",
        ),
    ],
)
def test_describe_filters(filters, expected):
    assert describe_filters(filters) == expected
