"""Abandonment score metric."""

from datetime import datetime
from typing import Sequence

from revival_scout.metrics.activity import count_recent_commits
from revival_scout.metrics.base import (
    above,
    below,
    bounded_score,
    clamp,
    first_band,
    round_half_up,
)
from revival_scout.models import Commit, Issue, Repository
from revival_scout.timeutils import days_since

STALENESS_POINTS = (
    above(365, 40),
    above(180, 30),
    above(90, 20),
    above(30, 10),
)

DEGRADED_STALENESS_POINTS = (
    above(365, 60),
    above(180, 40),
    above(90, 25),
    above(30, 10),
)

COMMIT_INACTIVITY_POINTS = (
    below(1, 20),
    below(5, 15),
    below(10, 10),
)

UNRESPONSIVE_ISSUE_AGE_DAYS = 30
UNRESPONSIVE_MAX_POINTS = 30
RECENT_COMMIT_WINDOW_DAYS = 365
ARCHIVED_POINTS = 10

DEGRADED_ARCHIVED_POINTS = 20
DEGRADED_OPEN_ISSUES_THRESHOLD = 20
DEGRADED_OPEN_ISSUES_POINTS = 20


def staleness_points(repository: Repository, now: datetime, table=STALENESS_POINTS) -> int:
    """Points for time since the last push, looked up in ``table``."""
    age = days_since(repository.pushed_at, now, "pushed_at")
    return first_band(age, table)


def issue_unresponsiveness_points(issues: Sequence[Issue], now: datetime) -> int:
    """
    Share of open issues older than 30 days, scaled to 30 points.

    Contributes nothing when there are no open issues.
    """
    open_issues = [issue for issue in issues if issue.state == "open"]
    if not open_issues:
        return 0

    unresponsive = [
        issue
        for issue in open_issues
        if days_since(issue.created_at, now, "issue.created_at")
        > UNRESPONSIVE_ISSUE_AGE_DAYS
    ]
    ratio = len(unresponsive) / len(open_issues)
    return round_half_up(ratio * UNRESPONSIVE_MAX_POINTS)


def commit_inactivity_points(commits: Sequence[Commit], now: datetime) -> int:
    recent = count_recent_commits(commits, now, RECENT_COMMIT_WINDOW_DAYS)
    return first_band(recent, COMMIT_INACTIVITY_POINTS)


def calculate_abandonment_score(
    repository: Repository,
    issues: Sequence[Issue],
    commits: Sequence[Commit],
    now: datetime,
) -> int:
    """
    Estimates how abandoned a repository is (0-100, higher = more abandoned).

    Scoring:
    - Staleness (0-40): last push >365d: 40, >180d: 30, >90d: 20, >30d: 10
    - Issue unresponsiveness (0-30): share of open issues older than 30 days
    - Commit inactivity (0-20): commits in the last year 0: 20, <5: 15, <10: 10
    - Archived (0-10): flat 10 when archived
    """
    score = staleness_points(repository, now)
    score += clamp(issue_unresponsiveness_points(issues, now), 0, UNRESPONSIVE_MAX_POINTS)
    score += commit_inactivity_points(commits, now)
    if repository.archived:
        score += ARCHIVED_POINTS

    return bounded_score(score)


def calculate_degraded_abandonment_score(repository: Repository, now: datetime) -> int:
    """
    Abandonment estimate from the repository record alone.

    Used when issue and commit history is unavailable, so staleness and the raw
    open issue count carry more weight.

    Scoring:
    - Staleness (0-60): last push >365d: 60, >180d: 40, >90d: 25, >30d: 10
    - Archived: +20
    - More than 20 open issues: +20
    """
    score = staleness_points(repository, now, DEGRADED_STALENESS_POINTS)
    if repository.archived:
        score += DEGRADED_ARCHIVED_POINTS
    if repository.open_issues_count > DEGRADED_OPEN_ISSUES_THRESHOLD:
        score += DEGRADED_OPEN_ISSUES_POINTS

    return bounded_score(score)
