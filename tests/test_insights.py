"""
Tests for reason and recommendation generation.
"""

import pytest

from revival_scout.insights import (
    degraded_reasons,
    degraded_recommendations,
    describe_inactivity,
    generate_abandonment_reasons,
    generate_recommendations,
)
from revival_scout.models import Issue


class TestDescribeInactivity:
    """Test the age-based reason phrasing."""

    @pytest.mark.parametrize(
        "age, expected",
        [
            (400, "No commits in 1.1 years"),
            (730, "No commits in 2 years"),
            (1000, "No commits in 2.7 years"),
            (200, "No commits in 7 months"),
            (181, "No commits in 6 months"),
            (365, "No commits in 12 months"),
        ],
    )
    def test_phrasing(self, age, expected):
        assert describe_inactivity(age) == expected

    def test_recent_activity_has_no_phrase(self):
        assert describe_inactivity(180) is None
        assert describe_inactivity(0) is None


class TestAbandonmentReasons:
    """Test generate_abandonment_reasons."""

    def test_quiet_repository_has_no_reasons(self, make_repository, now):
        assert generate_abandonment_reasons(make_repository(), 1, [], now) == []

    def test_many_unresolved_issues(self, make_repository, days_ago, now):
        issues = [Issue("open", days_ago(200)) for _ in range(11)]
        reasons = generate_abandonment_reasons(make_repository(), 1, issues, now)
        assert reasons == ["11 unresolved issues"]

    def test_ten_open_issues_is_not_enough(self, make_repository, days_ago, now):
        issues = [Issue("open", days_ago(200)) for _ in range(10)]
        assert generate_abandonment_reasons(make_repository(), 1, issues, now) == []

    def test_recent_issues_unaddressed(self, make_repository, days_ago, now):
        issues = [Issue("open", days_ago(10)) for _ in range(6)]
        issues += [Issue("closed", days_ago(10), days_ago(5)) for _ in range(6)]
        reasons = generate_abandonment_reasons(make_repository(), 1, issues, now)
        assert reasons == ["Recent issues remain unaddressed"]

    def test_reason_order(self, make_repository, days_ago, now):
        repo = make_repository(archived=True)
        issues = [Issue("open", days_ago(10)) for _ in range(12)]
        reasons = generate_abandonment_reasons(repo, 400, issues, now)
        assert reasons == [
            "No commits in 1.1 years",
            "12 unresolved issues",
            "Repository is archived",
            "Recent issues remain unaddressed",
        ]


class TestRecommendations:
    """Test generate_recommendations."""

    def test_licensed_quiet_repository(self, make_repository):
        repo = make_repository(license="MIT")
        assert generate_recommendations(repo, 10, 10) == []

    def test_missing_license(self, make_repository):
        assert generate_recommendations(make_repository(), 10, 10) == [
            "No license specified - clarify licensing before revival"
        ]

    def test_all_recommendations(self, make_repository):
        repo = make_repository(stargazers_count=500, forks_count=50, open_issues_count=30)
        assert generate_recommendations(repo, 80, 75) == [
            "High revival potential - strong community interest",
            "Established user base - consider reaching out to community",
            "Clear abandonment with good potential - ideal for takeover",
            "Multiple forks exist - check for active alternatives",
            "No license specified - clarify licensing before revival",
            "Many open issues - good starting point for contributions",
        ]

    def test_takeover_needs_both_scores(self, make_repository):
        repo = make_repository(license="MIT")
        takeover = "Clear abandonment with good potential - ideal for takeover"
        assert takeover in generate_recommendations(repo, 71, 51)
        assert takeover not in generate_recommendations(repo, 70, 60)
        assert takeover not in generate_recommendations(repo, 90, 50)

    def test_thresholds_are_exclusive(self, make_repository):
        repo = make_repository(
            license="MIT", stargazers_count=100, forks_count=10, open_issues_count=20
        )
        assert generate_recommendations(repo, 0, 70) == []


class TestDegradedInsights:
    """Test the single reason and recommendation of a limited analysis."""

    def test_degraded_reason(self):
        assert degraded_reasons(42) == ["Last updated 42 days ago"]

    def test_degraded_recommendation(self):
        assert degraded_recommendations() == [
            "Limited analysis available - check repository manually"
        ]
