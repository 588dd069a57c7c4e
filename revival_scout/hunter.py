"""
Hunt for abandoned repositories worth reviving.
"""

import time
from datetime import datetime

from revival_scout.core import Analyzer, console
from revival_scout.errors import MalformedTimestamp
from revival_scout.models import AnalysisResult, HuntResults, SearchFilters
from revival_scout.timeutils import parse_timestamp, utc_now
from revival_scout.vcs.github import GitHubProvider

MAX_PAGE_SIZE = 100


def describe_filters(filters: SearchFilters) -> str:
    """Build a human-readable summary of the search filters."""
    parts: list[str] = []

    if filters.language:
        parts.append(f"language:{filters.language}")
    if filters.category:
        parts.append(f"category:{filters.category}")
    if filters.min_stars:
        parts.append(f"stars:>={filters.min_stars}")
    if filters.max_stars:
        parts.append(f"stars:<={filters.max_stars}")
    if filters.pushed_before:
        parts.append(f"pushed:<{filters.pushed_before}")
    if filters.pushed_after:
        parts.append(f"pushed:>{filters.pushed_after}")

    return " ".join(parts)


def rank_by_revival_potential(results: list[AnalysisResult]) -> list[AnalysisResult]:
    """Order results by revival potential, best candidates first."""
    return sorted(results, key=lambda result: result.revival_potential, reverse=True)


def hunt(
    filters: SearchFilters,
    max_results: int = 10,
    provider: GitHubProvider | None = None,
    now: datetime | None = None,
) -> HuntResults:
    """
    Search GitHub and analyze the top matches.

    Twice as many candidates as needed are requested (capped at one page) and
    the first ``max_results`` are analyzed. Repositories whose timestamps
    cannot be parsed are skipped. Every repository is analyzed against the
    same reference instant ``now``, which defaults to the current time.

    Raises:
        DataUnavailable: If the search itself fails
    """
    reference = parse_timestamp(now, "now") if now is not None else utc_now()
    provider = provider or GitHubProvider()
    analyzer = Analyzer(provider, clock=lambda: reference)
    started = time.perf_counter()

    per_page = min(max_results * 2, MAX_PAGE_SIZE)
    total_found, candidates = provider.search_repositories(filters, 1, per_page)

    analyses: list[AnalysisResult] = []
    for repository in candidates[:max_results]:
        try:
            analyses.append(analyzer.analyze(repository))
        except MalformedTimestamp as e:
            console.print(
                f"  [yellow]⚠️  Skipping {repository.full_name}: {e}[/yellow]"
            )

    return HuntResults(
        query=describe_filters(filters),
        filters=filters,
        total_found=total_found,
        analyzed=rank_by_revival_potential(analyses),
        execution_time=time.perf_counter() - started,
        timestamp=reference.isoformat(),
    )
