"""
Tests for the community engagement metric.
"""

from revival_scout.metrics.community_engagement import (
    calculate_community_engagement,
    estimate_community_engagement,
    star_fork_ratio,
)
from revival_scout.models import Issue


class TestCommunityEngagement:
    """Test the community engagement score."""

    def test_zero_forks_uses_raw_stars(self, make_repository, now):
        repo = make_repository(stargazers_count=40, forks_count=0)
        assert star_fork_ratio(repo) == 40
        assert calculate_community_engagement(repo, [], now) == 20

    def test_star_fork_ratio(self, make_repository, now):
        repo = make_repository(stargazers_count=100, forks_count=10)
        assert calculate_community_engagement(repo, [], now) == 5

    def test_ratio_term_is_capped(self, make_repository, now):
        repo = make_repository(stargazers_count=1000, forks_count=0)
        assert calculate_community_engagement(repo, [], now) == 30

    def test_recent_issue_activity(self, make_repository, days_ago, now):
        issues = [Issue("open", days_ago(30)) for _ in range(5)]
        assert calculate_community_engagement(make_repository(), issues, now) == 10

    def test_issue_activity_is_capped(self, make_repository, days_ago, now):
        issues = [Issue("closed", days_ago(30), days_ago(1)) for _ in range(20)]
        assert calculate_community_engagement(make_repository(), issues, now) == 30

    def test_old_issues_are_ignored(self, make_repository, days_ago, now):
        issues = [Issue("open", days_ago(400)) for _ in range(5)]
        assert calculate_community_engagement(make_repository(), issues, now) == 0

    def test_watchers_and_open_issues_are_capped(self, make_repository, now):
        repo = make_repository(watchers_count=50, open_issues_count=5)
        assert calculate_community_engagement(repo, [], now) == 25

    def test_maximum_engagement(self, make_repository, days_ago, now):
        repo = make_repository(
            stargazers_count=100, watchers_count=20, open_issues_count=20
        )
        issues = [Issue("open", days_ago(10)) for _ in range(20)]
        assert calculate_community_engagement(repo, issues, now) == 100

    def test_negative_values_are_clamped(self, make_repository, now):
        repo = make_repository(
            stargazers_count=-10, forks_count=-3, watchers_count=-5, open_issues_count=-1
        )
        assert calculate_community_engagement(repo, [], now) == 0


class TestEstimatedEngagement:
    """Test the stars-only engagement estimate."""

    def test_stars_over_ten(self, make_repository):
        assert estimate_community_engagement(make_repository(stargazers_count=250)) == 25

    def test_capped_at_one_hundred(self, make_repository):
        assert estimate_community_engagement(make_repository(stargazers_count=5000)) == 100

    def test_rounds_half_up(self, make_repository):
        assert estimate_community_engagement(make_repository(stargazers_count=15)) == 2
