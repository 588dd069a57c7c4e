"""
Tests for timestamp parsing and age helpers.
"""

from datetime import timedelta

import pytest

from revival_scout.errors import MalformedTimestamp
from revival_scout.timeutils import days_between, days_since, parse_timestamp


class TestDaysSince:
    """Test whole-day age computation."""

    def test_now_is_zero_days(self, now):
        assert days_since(now, now) == 0

    def test_exactly_one_day(self, now):
        assert days_since(now - timedelta(milliseconds=86400000), now) == 1

    def test_partial_day_rounds_up(self, now):
        assert days_since(now - timedelta(hours=1), now) == 1
        assert days_since(now - timedelta(hours=25), now) == 2

    def test_future_timestamp_is_non_negative(self, now):
        assert days_since(now + timedelta(days=10), now) == 10

    def test_accepts_z_suffix(self, now):
        assert days_since("2025-05-31T12:00:00Z", now) == 1

    def test_naive_timestamp_is_utc(self, now):
        assert days_since("2025-05-31T12:00:00", now) == 1

    def test_missing_timestamp_raises(self, now):
        with pytest.raises(MalformedTimestamp):
            days_since(None, now)

    def test_malformed_timestamp_raises(self, now):
        with pytest.raises(MalformedTimestamp) as exc_info:
            days_since("not-a-date", now, "pushed_at")
        assert exc_info.value.field == "pushed_at"
        assert "pushed_at" in str(exc_info.value)

    def test_malformed_timestamp_is_value_error(self, now):
        with pytest.raises(ValueError):
            days_since("", now)


class TestParsing:
    """Test parse_timestamp and days_between."""

    def test_parse_returns_aware_datetime(self):
        parsed = parse_timestamp("2024-01-01T00:00:00Z")
        assert parsed.tzinfo is not None
        assert parsed.year == 2024

    def test_days_between_is_fractional(self):
        assert days_between("2024-01-01T00:00:00Z", "2024-01-02T12:00:00Z") == 1.5
