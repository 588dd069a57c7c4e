"""
Shared fixtures for the Revival Scout test suite.
"""

from datetime import datetime, timedelta, timezone

import pytest

from revival_scout.models import Repository

REFERENCE_INSTANT = datetime(2025, 6, 1, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def now() -> datetime:
    """Fixed reference instant used as "now" in every test."""
    return REFERENCE_INSTANT


@pytest.fixture
def days_ago(now):
    """Return an ISO timestamp ``days`` before the reference instant."""

    def _days_ago(days: float) -> str:
        return (now - timedelta(days=days)).isoformat()

    return _days_ago


@pytest.fixture
def make_repository(days_ago):
    """Build a quiet baseline repository, overriding any field."""

    def _make_repository(**overrides) -> Repository:
        fields = {
            "owner": "octo",
            "name": "widget",
            "pushed_at": days_ago(1),
            "updated_at": days_ago(100),
            "created_at": days_ago(10),
        }
        fields.update(overrides)
        return Repository(**fields)

    return _make_repository
