"""
Metric calculators for Revival Scout.

Each calculator is a pure function of the repository, issue and commit records
plus a reference instant.
"""

from revival_scout.metrics.abandonment import (
    calculate_abandonment_score,
    calculate_degraded_abandonment_score,
)
from revival_scout.metrics.community_engagement import (
    calculate_community_engagement,
    estimate_community_engagement,
)
from revival_scout.metrics.fork_activity import (
    calculate_fork_activity_score,
    calculate_maintainer_responsiveness,
    estimate_divergence,
)
from revival_scout.metrics.issue_response_time import calculate_issue_response_time
from revival_scout.metrics.market_relevance import calculate_market_relevance
from revival_scout.metrics.revival_potential import (
    calculate_degraded_revival_potential,
    calculate_revival_potential,
)
from revival_scout.metrics.technical_complexity import assess_technical_complexity

__all__ = [
    "assess_technical_complexity",
    "calculate_abandonment_score",
    "calculate_community_engagement",
    "calculate_degraded_abandonment_score",
    "calculate_degraded_revival_potential",
    "calculate_fork_activity_score",
    "calculate_issue_response_time",
    "calculate_market_relevance",
    "calculate_maintainer_responsiveness",
    "calculate_revival_potential",
    "estimate_community_engagement",
    "estimate_divergence",
]
