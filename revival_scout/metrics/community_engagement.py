"""Community engagement metric."""

from datetime import datetime
from typing import Sequence

from revival_scout.metrics.activity import count_recent_issues
from revival_scout.metrics.base import bounded_score, clamp
from revival_scout.models import Issue, Repository


def star_fork_ratio(repository: Repository) -> float:
    """Stars per fork, or the raw star count when there are no forks."""
    if repository.forks_count > 0:
        return repository.stargazers_count / repository.forks_count
    return repository.stargazers_count


def calculate_community_engagement(
    repository: Repository, issues: Sequence[Issue], now: datetime
) -> int:
    """
    Scores how engaged the community around a repository is (0-100).

    Scoring:
    - Stars to forks ratio (0-30): ratio / 2
    - Issue activity (0-30): 2 points per issue opened in the last year
    - Watchers (0-20): one point each
    - Open issues (0-20): one point each, as a sign of an active user base
    """
    score = clamp(star_fork_ratio(repository) / 2, 0, 30)
    score += clamp(count_recent_issues(issues, now) * 2, 0, 30)
    score += clamp(repository.watchers_count, 0, 20)
    score += clamp(repository.open_issues_count, 0, 20)

    return bounded_score(score)


def estimate_community_engagement(repository: Repository) -> int:
    """Rough engagement estimate from stars only, used without issue data."""
    return bounded_score(repository.stargazers_count / 10)
