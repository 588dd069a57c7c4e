"""
Core analysis logic for Revival Scout.
"""

from concurrent.futures import ThreadPoolExecutor
from datetime import datetime
from typing import Callable, NamedTuple, Sequence

from rich.console import Console

from revival_scout.errors import ComputationFault, DataUnavailable
from revival_scout.insights import (
    degraded_reasons,
    degraded_recommendations,
    generate_abandonment_reasons,
    generate_recommendations,
)
from revival_scout.metrics import (
    assess_technical_complexity,
    calculate_abandonment_score,
    calculate_community_engagement,
    calculate_degraded_abandonment_score,
    calculate_degraded_revival_potential,
    calculate_issue_response_time,
    calculate_market_relevance,
    calculate_revival_potential,
    estimate_community_engagement,
)
from revival_scout.models import (
    AnalysisResult,
    Commit,
    Issue,
    Repository,
    sanitize_repository,
)
from revival_scout.timeutils import Clock, days_since, parse_timestamp, utc_now
from revival_scout.vcs.base import BaseVCSProvider

# Diagnostics go to stderr so JSON output stays clean
console = Console(stderr=True)


class FetchOutcome(NamedTuple):
    """Items obtained from one data source, or the reason they are missing."""

    source: str
    items: list
    error: DataUnavailable | None = None

    @property
    def available(self) -> bool:
        return self.error is None


def _fetch(source: str, fetch: Callable[[], Sequence]) -> FetchOutcome:
    try:
        return FetchOutcome(source, list(fetch()))
    except DataUnavailable as e:
        return FetchOutcome(source, [], e)
    except Exception as e:
        return FetchOutcome(source, [], DataUnavailable(source, e))


def fetch_activity(
    provider: BaseVCSProvider | None, repository: Repository
) -> tuple[FetchOutcome, FetchOutcome]:
    """
    Fetch issues and commits concurrently.

    Each source fails independently; a failure yields an empty outcome carrying
    the error rather than aborting the other fetch.
    """
    if provider is None:
        missing = "no data provider configured"
        return (
            FetchOutcome("issues", [], DataUnavailable("issues", missing)),
            FetchOutcome("commits", [], DataUnavailable("commits", missing)),
        )

    owner, name = repository.owner, repository.name
    with ThreadPoolExecutor(max_workers=2) as executor:
        issues_future = executor.submit(
            _fetch, "issues", lambda: provider.fetch_issues(owner, name, "all")
        )
        commits_future = executor.submit(
            _fetch, "commits", lambda: provider.fetch_commits(owner, name)
        )
        issues_outcome = issues_future.result()
        commits_outcome = commits_future.result()

    for outcome in (issues_outcome, commits_outcome):
        if not outcome.available:
            console.print(
                f"  [yellow]⚠️  {repository.full_name}: {outcome.error}[/yellow]"
            )

    return issues_outcome, commits_outcome


def analyze_records(
    repository: Repository,
    issues: Sequence[Issue],
    commits: Sequence[Commit],
    now: datetime,
) -> AnalysisResult:
    """Run every full-data calculator and insight generator."""
    repository = sanitize_repository(repository)
    last_commit_age = days_since(repository.pushed_at, now, "pushed_at")
    abandonment_score = calculate_abandonment_score(repository, issues, commits, now)
    revival_potential = calculate_revival_potential(repository, issues, now)

    return AnalysisResult(
        repository=repository,
        abandonment_score=abandonment_score,
        revival_potential=revival_potential,
        last_commit_age_days=last_commit_age,
        issue_response_time_days=calculate_issue_response_time(issues),
        community_engagement=calculate_community_engagement(repository, issues, now),
        technical_complexity=assess_technical_complexity(repository),
        market_relevance=calculate_market_relevance(repository, now),
        reasons=generate_abandonment_reasons(repository, last_commit_age, issues, now),
        recommendations=generate_recommendations(
            repository, abandonment_score, revival_potential
        ),
        degraded=False,
        analyzed_at=now.isoformat(),
    )


def degraded_analysis(repository: Repository, now: datetime) -> AnalysisResult:
    """
    Reduced-fidelity analysis that needs only the repository record.

    Missing or mistyped counts, text fields and topics score as neutral
    values, so only ``MalformedTimestamp`` can escape.
    """
    repository = sanitize_repository(repository)
    last_commit_age = days_since(repository.pushed_at, now, "pushed_at")

    return AnalysisResult(
        repository=repository,
        abandonment_score=calculate_degraded_abandonment_score(repository, now),
        revival_potential=calculate_degraded_revival_potential(repository, now),
        last_commit_age_days=last_commit_age,
        issue_response_time_days=None,
        community_engagement=estimate_community_engagement(repository),
        technical_complexity=assess_technical_complexity(repository),
        market_relevance=calculate_market_relevance(repository, now),
        reasons=degraded_reasons(last_commit_age),
        recommendations=degraded_recommendations(),
        degraded=True,
        analyzed_at=now.isoformat(),
    )


def _analyze_full(
    repository: Repository,
    issues: Sequence[Issue],
    commits: Sequence[Commit],
    now: datetime,
) -> AnalysisResult:
    try:
        return analyze_records(repository, issues, commits, now)
    except Exception as e:
        raise ComputationFault(f"{type(e).__name__}: {e}") from e


def analyze(
    repository: Repository,
    provider: BaseVCSProvider | None = None,
    now: datetime | None = None,
) -> AnalysisResult:
    """
    Analyze a repository for abandonment and revival potential.

    Issues and commits are fetched from ``provider``. When neither source is
    available, or the full computation fails, the degraded analysis is
    returned instead.

    Args:
        repository: Repository record to analyze
        provider: Source of issue and commit records. None means both are
                  unavailable.
        now: Reference instant for every age computation. Defaults to the
             current time.

    Returns:
        A complete AnalysisResult

    Raises:
        MalformedTimestamp: If the repository's pushed_at cannot be parsed
    """
    reference = parse_timestamp(now, "now") if now is not None else utc_now()
    repository = sanitize_repository(repository)

    # Staleness is needed on every path, so bad pushed_at is not recoverable
    days_since(repository.pushed_at, reference, "pushed_at")

    issues_outcome, commits_outcome = fetch_activity(provider, repository)

    if not issues_outcome.available and not commits_outcome.available:
        return degraded_analysis(repository, reference)

    try:
        return _analyze_full(
            repository, issues_outcome.items, commits_outcome.items, reference
        )
    except ComputationFault as e:
        console.print(
            f"  [yellow]⚠️  {repository.full_name}: analysis incomplete, "
            f"using limited analysis - {e}[/yellow]"
        )
        return degraded_analysis(repository, reference)


def parse_full_name(full_name: str) -> tuple[str, str]:
    """
    Split ``owner/repo`` into its parts.

    Raises:
        ValueError: If the value is not in owner/repo form.
    """
    owner, _, repo = full_name.strip().partition("/")
    if not owner or not repo or "/" in repo:
        raise ValueError('Repository must be in format "owner/repo"')
    return owner, repo


class Analyzer:
    """Analyzes repositories against a provider with an injectable clock."""

    def __init__(self, provider: BaseVCSProvider | None, clock: Clock = utc_now):
        self.provider = provider
        self.clock = clock

    def analyze(self, repository: Repository) -> AnalysisResult:
        return analyze(repository, self.provider, now=self.clock())

    def analyze_full_name(self, full_name: str) -> AnalysisResult:
        """
        Fetch a repository by ``owner/repo`` and analyze it.

        Raises:
            ValueError: If the name is invalid, no provider is configured, or
                        the repository does not exist
            DataUnavailable: If the repository itself cannot be fetched
            MalformedTimestamp: If the repository's pushed_at cannot be parsed
        """
        owner, repo = parse_full_name(full_name)
        if self.provider is None:
            raise ValueError("A data provider is required to fetch repositories.")
        repository = self.provider.get_repository(owner, repo)
        return self.analyze(repository)
