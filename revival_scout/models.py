"""
Data structures shared by the analysis engine, providers and CLI.
"""

import math
from typing import Any, NamedTuple

TECHNICAL_COMPLEXITY_LEVELS = ("low", "medium", "high")

PROJECT_CATEGORIES = (
    "cli-tool",
    "build-tool",
    "dev-tool",
    "testing",
    "linter",
    "framework",
    "library",
    "plugin",
)

# Sort fields accepted by the GitHub repository search API
SEARCH_SORT_FIELDS = ("stars", "forks", "updated")
SORT_ORDERS = ("desc", "asc")

FORK_SORT_FIELDS = ("activity", "stars", "divergence", "health")


class Repository(NamedTuple):
    """Read-only repository record supplied by the caller."""

    owner: str
    name: str
    pushed_at: str | None
    updated_at: str | None
    created_at: str | None
    stargazers_count: int = 0
    forks_count: int = 0
    watchers_count: int = 0
    open_issues_count: int = 0
    size: int = 0  # Unitless size metric reported by the host
    archived: bool = False
    description: str | None = None
    topics: tuple[str, ...] = ()
    license: str | None = None
    language: str | None = None
    html_url: str | None = None

    @property
    def full_name(self) -> str:
        return f"{self.owner}/{self.name}"


_COUNT_FIELDS = (
    "stargazers_count",
    "forks_count",
    "watchers_count",
    "open_issues_count",
    "size",
)
_TEXT_FIELDS = ("description", "license", "language")


def _as_count(value: Any) -> int | float:
    if isinstance(value, (int, float)) and math.isfinite(value):
        return value
    return 0


def sanitize_repository(repository: Repository) -> Repository:
    """
    Replace missing or mistyped non-timestamp fields with neutral values.

    Counts become 0, text fields become None and topics become an empty
    tuple. Timestamps are left alone; they are validated where they are
    read. The same record is returned when nothing needs replacing.
    """
    changes: dict[str, Any] = {}

    for field in _COUNT_FIELDS:
        value = getattr(repository, field)
        count = _as_count(value)
        if count is not value:
            changes[field] = count

    for field in _TEXT_FIELDS:
        value = getattr(repository, field)
        if value is not None and not isinstance(value, str):
            changes[field] = None

    topics = repository.topics
    if not isinstance(topics, tuple):
        if isinstance(topics, (list, set, frozenset)):
            changes["topics"] = tuple(t for t in topics if isinstance(t, str))
        else:
            changes["topics"] = ()

    if not isinstance(repository.archived, bool):
        changes["archived"] = bool(repository.archived)

    if not changes:
        return repository
    return repository._replace(**changes)


class Issue(NamedTuple):
    """A single issue as seen by the engine."""

    state: str  # "open" or "closed"
    created_at: str | None
    closed_at: str | None = None


class Commit(NamedTuple):
    """A single commit, reduced to its author timestamp."""

    authored_at: str | None


class AnalysisResult(NamedTuple):
    """The result of analysing one repository."""

    repository: Repository
    abandonment_score: int
    revival_potential: int
    last_commit_age_days: int
    issue_response_time_days: float | None  # None when no closed issue is timestamped
    community_engagement: int
    technical_complexity: str  # "low", "medium", "high"
    market_relevance: int
    reasons: list[str]
    recommendations: list[str]
    degraded: bool = False
    analyzed_at: str = ""

    def to_dict(self) -> dict[str, Any]:
        """Return a JSON-serialisable representation."""
        data = self._asdict()
        repository = self.repository._asdict()
        repository["topics"] = list(self.repository.topics)
        data["repository"] = repository
        data["reasons"] = list(self.reasons)
        data["recommendations"] = list(self.recommendations)
        return data


class SearchFilters(NamedTuple):
    """Filters used to search for candidate repositories."""

    language: str | None = None
    category: str | None = None
    min_stars: int | None = None
    max_stars: int | None = None
    pushed_before: str | None = None  # ISO date
    pushed_after: str | None = None  # ISO date
    has_issues: bool | None = None
    archived: bool | None = None
    sort: str = "stars"  # One of SEARCH_SORT_FIELDS
    order: str = "desc"


class HuntResults(NamedTuple):
    """Outcome of a hunt for abandoned repositories."""

    query: str
    filters: SearchFilters
    total_found: int
    analyzed: list[AnalysisResult]
    execution_time: float  # seconds
    timestamp: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "query": self.query,
            "filters": self.filters._asdict(),
            "total_found": self.total_found,
            "analyzed": [result.to_dict() for result in self.analyzed],
            "execution_time": self.execution_time,
            "timestamp": self.timestamp,
        }


class ForkInfo(NamedTuple):
    """One analyzed fork, or the original repository it was forked from."""

    analysis: AnalysisResult
    activity_score: int
    divergence: int  # Rough commits-ahead estimate
    last_activity_days: int
    has_recent_commits: bool  # Pushed within 30 days
    maintainer_responsiveness: int
    rank: int = 0  # 1-based, assigned after sorting
    is_original: bool = False

    @property
    def repository(self) -> Repository:
        return self.analysis.repository

    def to_dict(self) -> dict[str, Any]:
        return {
            "full_name": self.repository.full_name,
            "html_url": self.repository.html_url,
            "is_original": self.is_original,
            "rank": self.rank,
            "activity_score": self.activity_score,
            "divergence": self.divergence,
            "last_activity_days": self.last_activity_days,
            "has_recent_commits": self.has_recent_commits,
            "maintainer_responsiveness": self.maintainer_responsiveness,
            "analysis": self.analysis.to_dict(),
        }


class ForkComparison(NamedTuple):
    """Forks of a repository ranked as alternatives for revival."""

    original: Repository
    total_forks: int
    analyzed_forks: int
    ranked: list[ForkInfo]
    active_forks: list[ForkInfo]
    top_recommendations: list[ForkInfo]
    insights: list[str]
    best_for_revival: ForkInfo | None
    best_for_contribution: ForkInfo | None
    most_diverged: ForkInfo | None
    execution_time: float  # seconds
    timestamp: str

    def to_dict(self) -> dict[str, Any]:
        def pick(fork: ForkInfo | None) -> str | None:
            return fork.repository.full_name if fork is not None else None

        return {
            "original": self.original.full_name,
            "total_forks": self.total_forks,
            "analyzed_forks": self.analyzed_forks,
            "ranked": [fork.to_dict() for fork in self.ranked],
            "active_forks": [fork.repository.full_name for fork in self.active_forks],
            "top_recommendations": [
                fork.repository.full_name for fork in self.top_recommendations
            ],
            "insights": list(self.insights),
            "best_for_revival": pick(self.best_for_revival),
            "best_for_contribution": pick(self.best_for_contribution),
            "most_diverged": pick(self.most_diverged),
            "execution_time": self.execution_time,
            "timestamp": self.timestamp,
        }
