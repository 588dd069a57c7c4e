"""Issue response time metric."""

from typing import Sequence

from revival_scout.models import Issue
from revival_scout.timeutils import days_between


def calculate_issue_response_time(issues: Sequence[Issue]) -> float | None:
    """
    Average number of days between opening and closing an issue.

    Only closed issues with both timestamps are considered. Returns ``None``
    when there is no such issue, which is distinct from an average of zero.
    Issues closed before they were created count as zero days.
    """
    response_times = [
        max(0.0, days_between(issue.created_at, issue.closed_at))
        for issue in issues
        if issue.state == "closed" and issue.created_at and issue.closed_at
    ]

    if not response_times:
        return None

    return sum(response_times) / len(response_times)
