"""
Timestamp parsing and age helpers.

Every age computation takes an explicit reference instant (``now``) so that a
whole analysis sees a single, consistent "current time".
"""

import math
from datetime import datetime, timezone
from typing import Callable

from revival_scout.errors import MalformedTimestamp

SECONDS_PER_DAY = 86400

Clock = Callable[[], datetime]


def utc_now() -> datetime:
    """Return the current instant as an aware UTC datetime."""
    return datetime.now(timezone.utc)


def parse_timestamp(value: str | datetime | None, field: str | None = None) -> datetime:
    """
    Parse an ISO-8601 timestamp into an aware datetime.

    Accepts a trailing ``Z`` as GitHub emits it. Naive values are treated as UTC.

    Raises:
        MalformedTimestamp: If the value is missing or not a valid timestamp.
    """
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, str) and value:
        try:
            parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
        except ValueError:
            raise MalformedTimestamp(value, field) from None
    else:
        raise MalformedTimestamp(value, field)

    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def days_since(value: str | datetime | None, now: datetime, field: str | None = None) -> int:
    """
    Whole days between ``value`` and ``now``, rounding any partial day up.

    The elapsed time is taken as an absolute value, so timestamps in the
    future also yield a non-negative age.
    """
    timestamp = parse_timestamp(value, field)
    reference = parse_timestamp(now, "now")
    elapsed = abs((reference - timestamp).total_seconds())
    return math.ceil(elapsed / SECONDS_PER_DAY)


def days_between(start: str | datetime | None, end: str | datetime | None) -> float:
    """Fractional days from ``start`` to ``end`` (not rounded)."""
    started = parse_timestamp(start, "created_at")
    ended = parse_timestamp(end, "closed_at")
    return (ended - started).total_seconds() / SECONDS_PER_DAY
