"""Revival potential metric."""

from datetime import datetime
from typing import Sequence

from revival_scout.metrics.activity import count_recent_issues
from revival_scout.metrics.base import Band, above, bounded_score, clamp, first_band
from revival_scout.models import Issue, Repository
from revival_scout.timeutils import days_since

ACTIVE_USER_BASE_POINTS = (
    above(10, 25),
    above(5, 20),
    above(2, 15),
    above(0, 10),
)

# 1-5 years old is the sweet spot
MATURITY_POINTS = (
    Band(365, 1825, 20),
    above(180, 15),
    above(90, 10),
)

DEGRADED_MATURITY_POINTS = (
    Band(365, 1825, 25),
    above(180, 15),
)

SIZE_FIT_POINTS = (
    Band(100, 10000, 10),
    above(50, 5),
)

DESCRIPTION_MIN_LENGTH = 20
DOCUMENTATION_POINTS = 5
DEGRADED_INDICATOR_POINTS = 10
DEGRADED_OPEN_ISSUES_THRESHOLD = 5


def community_interest_points(
    repository: Repository, star_cap: float = 20, fork_cap: float = 10
) -> float:
    """Stars per ten plus forks per five, each capped."""
    stars = clamp(repository.stargazers_count / 10, 0, star_cap)
    forks = clamp(repository.forks_count / 5, 0, fork_cap)
    return stars + forks


def project_age_days(repository: Repository, now: datetime) -> int:
    return days_since(repository.created_at, now, "created_at")


def has_meaningful_description(repository: Repository) -> bool:
    return bool(repository.description) and (
        len(repository.description) > DESCRIPTION_MIN_LENGTH
    )


def documentation_points(repository: Repository) -> int:
    score = 0
    if has_meaningful_description(repository):
        score += DOCUMENTATION_POINTS
    if len(repository.topics) > 0:
        score += DOCUMENTATION_POINTS
    if repository.license:
        score += DOCUMENTATION_POINTS
    return score


def calculate_revival_potential(
    repository: Repository, issues: Sequence[Issue], now: datetime
) -> int:
    """
    Estimates how attractive a repository is for a new maintainer (0-100).

    Scoring:
    - Community interest (0-30): min(stars/10, 20) + min(forks/5, 10)
    - Active user base (0-25): issues opened in the last year
      >10: 25, >5: 20, >2: 15, >0: 10
    - Maturity (0-20): 1-5 years old: 20, >180d: 15, >90d: 10
    - Documentation (0-15): +5 each for description, topics, license
    - Size fit (0-10): 100 < size < 10000: 10, size > 50: 5
    """
    score = community_interest_points(repository)
    score += first_band(count_recent_issues(issues, now), ACTIVE_USER_BASE_POINTS)
    score += first_band(project_age_days(repository, now), MATURITY_POINTS)
    score += documentation_points(repository)
    score += first_band(repository.size, SIZE_FIT_POINTS)

    return bounded_score(score)


def calculate_degraded_revival_potential(repository: Repository, now: datetime) -> int:
    """
    Revival potential from the repository record alone.

    Scoring:
    - Stars and forks (0-45): min(stars/10, 30) + min(forks/5, 15)
    - Maturity (0-25): 1-5 years old: 25, >180d: 15
    - +10 each for description, license, more than 5 open issues
    """
    score = community_interest_points(repository, star_cap=30, fork_cap=15)
    score += first_band(project_age_days(repository, now), DEGRADED_MATURITY_POINTS)
    if has_meaningful_description(repository):
        score += DEGRADED_INDICATOR_POINTS
    if repository.license:
        score += DEGRADED_INDICATOR_POINTS
    if repository.open_issues_count > DEGRADED_OPEN_ISSUES_THRESHOLD:
        score += DEGRADED_INDICATOR_POINTS

    return bounded_score(score)
