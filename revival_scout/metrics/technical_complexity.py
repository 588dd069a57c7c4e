"""Technical complexity classifier."""

from revival_scout.metrics.base import below, first_band
from revival_scout.models import Repository

COMPLEXITY_LEVELS = (
    below(1000, "low"),
    below(10000, "medium"),
)


def assess_technical_complexity(repository: Repository) -> str:
    """Buckets repository size into "low", "medium" or "high"."""
    return first_band(repository.size, COMPLEXITY_LEVELS, default="high")
