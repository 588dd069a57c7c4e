"""Activity counters shared by several metrics."""

from datetime import datetime
from typing import Sequence

from revival_scout.models import Commit, Issue
from revival_scout.timeutils import days_since

RECENT_WINDOW_DAYS = 365


def count_recent_issues(
    issues: Sequence[Issue],
    now: datetime,
    window_days: int = RECENT_WINDOW_DAYS,
    state: str | None = None,
) -> int:
    """Issues created within ``window_days``, optionally restricted to a state."""
    return sum(
        1
        for issue in issues
        if (state is None or issue.state == state)
        and days_since(issue.created_at, now, "issue.created_at") <= window_days
    )


def count_recent_commits(
    commits: Sequence[Commit], now: datetime, window_days: int = RECENT_WINDOW_DAYS
) -> int:
    """Commits authored within ``window_days``."""
    return sum(
        1
        for commit in commits
        if days_since(commit.authored_at, now, "commit.authored_at") <= window_days
    )
