"""
Natural-language reasons and recommendations derived from computed metrics.
"""

from datetime import datetime
from typing import Sequence

from revival_scout.metrics.activity import count_recent_issues
from revival_scout.metrics.base import round_half_up
from revival_scout.models import Issue, Repository

UNRESOLVED_ISSUES_THRESHOLD = 10
UNADDRESSED_WINDOW_DAYS = 90
UNADDRESSED_ISSUES_THRESHOLD = 5

HIGH_REVIVAL_THRESHOLD = 70
ESTABLISHED_STARS_THRESHOLD = 100
TAKEOVER_ABANDONMENT_THRESHOLD = 70
TAKEOVER_REVIVAL_THRESHOLD = 50
ALTERNATIVE_FORKS_THRESHOLD = 10
CONTRIBUTION_OPEN_ISSUES_THRESHOLD = 20


def describe_inactivity(last_commit_age_days: int) -> str | None:
    """Phrase the time since the last push, or None if it is recent enough."""
    if last_commit_age_days > 365:
        years = round_half_up(last_commit_age_days / 365 * 10) / 10
        label = f"{years:.1f}".removesuffix(".0")
        return f"No commits in {label} years"
    if last_commit_age_days > 180:
        months = round_half_up(last_commit_age_days / 30)
        return f"No commits in {months} months"
    return None


def generate_abandonment_reasons(
    repository: Repository,
    last_commit_age_days: int,
    issues: Sequence[Issue],
    now: datetime,
) -> list[str]:
    """Explain why a repository looks abandoned, in a fixed order."""
    reasons: list[str] = []

    inactivity = describe_inactivity(last_commit_age_days)
    if inactivity:
        reasons.append(inactivity)

    open_issues = [issue for issue in issues if issue.state == "open"]
    if len(open_issues) > UNRESOLVED_ISSUES_THRESHOLD:
        reasons.append(f"{len(open_issues)} unresolved issues")

    if repository.archived:
        reasons.append("Repository is archived")

    unaddressed = count_recent_issues(
        issues, now, window_days=UNADDRESSED_WINDOW_DAYS, state="open"
    )
    if unaddressed > UNADDRESSED_ISSUES_THRESHOLD:
        reasons.append("Recent issues remain unaddressed")

    return reasons


def generate_recommendations(
    repository: Repository, abandonment_score: int, revival_potential: int
) -> list[str]:
    """
    Suggest next steps for someone considering a revival.

    Every check is independent; all matching recommendations are returned.
    """
    recommendations: list[str] = []

    if revival_potential > HIGH_REVIVAL_THRESHOLD:
        recommendations.append("High revival potential - strong community interest")

    if repository.stargazers_count > ESTABLISHED_STARS_THRESHOLD:
        recommendations.append(
            "Established user base - consider reaching out to community"
        )

    if (
        abandonment_score > TAKEOVER_ABANDONMENT_THRESHOLD
        and revival_potential > TAKEOVER_REVIVAL_THRESHOLD
    ):
        recommendations.append(
            "Clear abandonment with good potential - ideal for takeover"
        )

    if repository.forks_count > ALTERNATIVE_FORKS_THRESHOLD:
        recommendations.append("Multiple forks exist - check for active alternatives")

    if not repository.license:
        recommendations.append(
            "No license specified - clarify licensing before revival"
        )

    if repository.open_issues_count > CONTRIBUTION_OPEN_ISSUES_THRESHOLD:
        recommendations.append(
            "Many open issues - good starting point for contributions"
        )

    return recommendations


def degraded_reasons(last_commit_age_days: int) -> list[str]:
    return [f"Last updated {last_commit_age_days} days ago"]


def degraded_recommendations() -> list[str]:
    return ["Limited analysis available - check repository manually"]
