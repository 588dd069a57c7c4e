"""Market relevance metric."""

from datetime import datetime

from revival_scout.metrics.base import above, below, bounded_score, first_band
from revival_scout.models import Repository
from revival_scout.timeutils import days_since

BASE_SCORE = 50

POPULAR_LANGUAGES = frozenset(
    {"javascript", "typescript", "python", "java", "go", "rust"}
)
POPULAR_LANGUAGE_POINTS = 20

# Recent activity indicates ongoing relevance
RECENCY_POINTS = (
    below(30, 20),
    below(90, 10),
    above(730, -20),
)

TOPIC_THRESHOLD = 2
TOPIC_POINTS = 10


def calculate_market_relevance(repository: Repository, now: datetime) -> int:
    """
    Scores how relevant a repository still is (0-100).

    Scoring:
    - Base: 50
    - Popular primary language: +20
    - Updated <30d ago: +20, <90d: +10, >730d: -20
    - More than two topics: +10
    """
    score = BASE_SCORE

    language = repository.language
    if language and language.lower() in POPULAR_LANGUAGES:
        score += POPULAR_LANGUAGE_POINTS

    days_since_update = days_since(repository.updated_at, now, "updated_at")
    score += first_band(days_since_update, RECENCY_POINTS)

    if len(repository.topics) > TOPIC_THRESHOLD:
        score += TOPIC_POINTS

    return bounded_score(score)
