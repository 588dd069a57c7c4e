"""
Compare the forks of a repository as candidates for carrying it on.
"""

import time
from concurrent.futures import ThreadPoolExecutor
from datetime import datetime
from typing import Sequence

from revival_scout.core import Analyzer, console
from revival_scout.errors import DataUnavailable, MalformedTimestamp
from revival_scout.metrics import (
    calculate_fork_activity_score,
    calculate_maintainer_responsiveness,
    estimate_divergence,
)
from revival_scout.models import (
    FORK_SORT_FIELDS,
    ForkComparison,
    ForkInfo,
    Repository,
    sanitize_repository,
)
from revival_scout.timeutils import days_between, days_since, parse_timestamp, utc_now
from revival_scout.vcs.github import GitHubProvider

FORK_WORKERS = 5
TOP_RECOMMENDATIONS = 5

ACTIVE_FORK_THRESHOLD = 30
STRONG_ACTIVITY_THRESHOLD = 60
RECENT_COMMIT_DAYS = 30
HIGH_DIVERGENCE_THRESHOLD = 50
REVIVAL_PICK_THRESHOLD = 60
CONTRIBUTION_PICK_THRESHOLD = 70


def filter_forks(
    forks: Sequence[Repository], min_stars: int, min_activity_days: int, now: datetime
) -> list[Repository]:
    """
    Keep forks with at least ``min_stars`` stars, pushed within
    ``min_activity_days`` and not archived. Forks without a usable push
    timestamp are dropped.
    """
    kept: list[Repository] = []
    for fork in forks:
        fork = sanitize_repository(fork)
        if fork.stargazers_count < min_stars or fork.archived:
            continue
        try:
            if days_between(fork.pushed_at, now) > min_activity_days:
                continue
        except MalformedTimestamp:
            continue
        kept.append(fork)
    return kept


def describe_fork(
    repository: Repository,
    original: Repository,
    analyzer: Analyzer,
    now: datetime,
    is_original: bool = False,
) -> ForkInfo:
    """Analyze one fork and compute its fork-specific metrics."""
    analysis = analyzer.analyze(repository)
    fork = analysis.repository
    last_activity = days_since(fork.pushed_at, now, "pushed_at")

    return ForkInfo(
        analysis=analysis,
        activity_score=calculate_fork_activity_score(fork, now),
        divergence=0 if is_original else estimate_divergence(fork, original),
        last_activity_days=last_activity,
        has_recent_commits=last_activity < RECENT_COMMIT_DAYS,
        maintainer_responsiveness=calculate_maintainer_responsiveness(fork, now),
        is_original=is_original,
    )


def _sort_key(sort_by: str):
    if sort_by == "stars":
        return lambda fork: fork.repository.stargazers_count
    if sort_by == "divergence":
        return lambda fork: fork.divergence
    if sort_by == "health":
        return lambda fork: fork.analysis.revival_potential
    return lambda fork: fork.activity_score


def rank_forks(forks: Sequence[ForkInfo], sort_by: str = "activity") -> list[ForkInfo]:
    """Sort forks best first by ``sort_by`` and number them from 1."""
    ordered = sorted(forks, key=_sort_key(sort_by), reverse=True)
    return [fork._replace(rank=position) for position, fork in enumerate(ordered, 1)]


def recommendation_score(fork: ForkInfo) -> float:
    """Blend of activity (40%), revival potential (30%) and responsiveness (30%)."""
    return (
        fork.activity_score * 0.4
        + fork.analysis.revival_potential * 0.3
        + fork.maintainer_responsiveness * 0.3
    )


def recommend_forks(forks: Sequence[ForkInfo]) -> list[ForkInfo]:
    return sorted(forks, key=recommendation_score, reverse=True)


def generate_fork_insights(forks: Sequence[ForkInfo]) -> list[str]:
    """Summarize the fork ecosystem. ``forks`` must already be ranked."""
    if not forks:
        return ["No active forks found - original repository may be the only option"]

    active = [f for f in forks if f.activity_score > ACTIVE_FORK_THRESHOLD]
    recent = [f for f in forks if f.last_activity_days < RECENT_COMMIT_DAYS]
    diverged = [f for f in forks if f.divergence > HIGH_DIVERGENCE_THRESHOLD]

    insights = [f"Found {len(active)} active forks out of {len(forks)} analyzed"]
    if recent:
        insights.append(f"{len(recent)} forks have commits within the last 30 days")
    if diverged:
        insights.append(f"{len(diverged)} forks have significantly diverged from original")

    top = forks[0]
    if top.activity_score > STRONG_ACTIVITY_THRESHOLD:
        insights.append(
            f'Top fork "{top.repository.full_name}" shows strong activity '
            f"({top.activity_score}/100)"
        )
    return insights


def analyze_forks(
    owner: str,
    repo: str,
    provider: GitHubProvider | None = None,
    max_forks: int = 20,
    min_stars: int = 1,
    min_activity_days: int = 365,
    sort_by: str = "activity",
    include_original: bool = True,
    now: datetime | None = None,
) -> ForkComparison:
    """
    Fetch, filter, analyze and rank the forks of ``owner/repo``.

    Twice ``max_forks`` forks are fetched so that filtering still leaves
    enough to analyze. A failed fork listing is reported and treated as no
    forks. Forks whose timestamps cannot be parsed are skipped.

    Raises:
        ValueError: If ``sort_by`` is unknown or the repository does not exist
        DataUnavailable: If the original repository cannot be fetched
        MalformedTimestamp: If the original repository's timestamps are unusable
    """
    if sort_by not in FORK_SORT_FIELDS:
        raise ValueError(
            f"Unknown fork sort field: {sort_by}. Choose from: {', '.join(FORK_SORT_FIELDS)}"
        )

    reference = parse_timestamp(now, "now") if now is not None else utc_now()
    provider = provider or GitHubProvider()
    analyzer = Analyzer(provider, clock=lambda: reference)
    started = time.perf_counter()

    original = sanitize_repository(provider.get_repository(owner, repo))
    days_since(original.pushed_at, reference, "pushed_at")

    try:
        all_forks = provider.fetch_forks(owner, repo, max_forks * 2)
    except DataUnavailable as e:
        console.print(f"  [yellow]⚠️  {original.full_name}: {e}[/yellow]")
        all_forks = []

    candidates = filter_forks(all_forks, min_stars, min_activity_days, reference)[:max_forks]

    described: list[ForkInfo] = []
    if include_original:
        described.append(describe_fork(original, original, analyzer, reference, True))

    def describe(fork: Repository) -> ForkInfo | None:
        try:
            return describe_fork(fork, original, analyzer, reference)
        except MalformedTimestamp as e:
            console.print(f"  [yellow]⚠️  Skipping {fork.full_name}: {e}[/yellow]")
            return None

    with ThreadPoolExecutor(max_workers=FORK_WORKERS) as executor:
        described.extend(
            info for info in executor.map(describe, candidates) if info is not None
        )

    ranked = rank_forks(described, sort_by)
    recommended = recommend_forks(ranked)

    return ForkComparison(
        original=original,
        total_forks=len(all_forks),
        analyzed_forks=len(ranked),
        ranked=ranked,
        active_forks=[f for f in ranked if f.activity_score > ACTIVE_FORK_THRESHOLD],
        top_recommendations=recommended[:TOP_RECOMMENDATIONS],
        insights=generate_fork_insights(ranked),
        best_for_revival=next(
            (f for f in recommended if f.analysis.revival_potential > REVIVAL_PICK_THRESHOLD),
            None,
        ),
        best_for_contribution=next(
            (
                f
                for f in recommended
                if f.maintainer_responsiveness > CONTRIBUTION_PICK_THRESHOLD
            ),
            None,
        ),
        most_diverged=max(ranked, key=lambda f: f.divergence, default=None),
        execution_time=time.perf_counter() - started,
        timestamp=reference.isoformat(),
    )
