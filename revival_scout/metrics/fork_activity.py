"""Fork activity, divergence and maintainer responsiveness metrics."""

import math
from datetime import datetime

from revival_scout.metrics.base import Band, above, below, bounded_score, clamp, first_band
from revival_scout.models import Repository
from revival_scout.timeutils import SECONDS_PER_DAY, days_since, parse_timestamp

# Days since last push
PUSH_RECENCY_POINTS: tuple[Band, ...] = (
    below(7, 40),
    below(30, 30),
    below(90, 20),
    below(180, 10),
)

FORK_SIZE_POINTS: tuple[Band, ...] = (
    above(1000, 10),
    above(100, 5),
)

# Days since last update
UPDATE_RECENCY_POINTS: tuple[Band, ...] = (
    below(7, 30),
    below(30, 20),
    below(90, 10),
    above(365, -30),
)

# Open issues per ten stars
OPEN_ISSUE_LOAD_POINTS: tuple[Band, ...] = (
    below(0.1, 20),
    below(0.5, 10),
    above(2, -20),
)


def calculate_fork_activity_score(repository: Repository, now: datetime) -> int:
    """
    Scores how actively a fork is developed (0-100).

    Scoring:
    - Push recency (0-40): under a week 40, a month 30, a quarter 20, half a year 10
    - Stars (0-20): half a point each
    - Forks of the fork (0-10): one point each
    - Open issues (0-10): a point per five
    - Size (0-10): above 1000 gives 10, above 100 gives 5
    """
    push_age = days_since(repository.pushed_at, now, "pushed_at")
    score = first_band(push_age, PUSH_RECENCY_POINTS)
    score += clamp(repository.stargazers_count / 2, 0, 20)
    score += clamp(repository.forks_count, 0, 10)
    score += clamp(repository.open_issues_count / 5, 0, 10)
    score += first_band(repository.size, FORK_SIZE_POINTS)

    return bounded_score(score)


def calculate_maintainer_responsiveness(repository: Repository, now: datetime) -> int:
    """
    Estimates how responsive a fork's maintainer is (0-100).

    Starts at 50, moves with how recently the repository was updated and with
    the open issue load relative to its star count.
    """
    update_age = days_since(repository.updated_at, now, "updated_at")
    issue_load = repository.open_issues_count / max(repository.stargazers_count / 10, 1)

    score = 50
    score += first_band(update_age, UPDATE_RECENCY_POINTS)
    score += first_band(issue_load, OPEN_ISSUE_LOAD_POINTS)

    return bounded_score(score)


def estimate_divergence(fork: Repository, original: Repository) -> int:
    """
    Rough commits-ahead estimate of a fork.

    One per 100 units of size difference plus one per week between the two
    last pushes.
    """
    fork_pushed = parse_timestamp(fork.pushed_at, "pushed_at")
    original_pushed = parse_timestamp(original.pushed_at, "pushed_at")
    weeks_apart = abs((fork_pushed - original_pushed).total_seconds()) / (
        SECONDS_PER_DAY * 7
    )

    return math.floor(abs(fork.size - original.size) / 100) + math.floor(weeks_apart)
