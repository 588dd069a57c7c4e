"""
Base interface for repository data providers.
"""

from abc import ABC, abstractmethod

from revival_scout.models import Commit, Issue, Repository


class BaseVCSProvider(ABC):
    """
    Source of repository, issue and commit records.

    ``fetch_issues`` and ``fetch_commits`` are independently fallible and raise
    ``DataUnavailable`` on network, auth or rate-limit errors.
    """

    @abstractmethod
    def get_platform_name(self) -> str:
        """Return the platform identifier (e.g. 'github')."""

    @abstractmethod
    def get_repository_url(self, owner: str, repo: str) -> str:
        """Construct the web URL of a repository."""

    @abstractmethod
    def get_repository(self, owner: str, repo: str) -> Repository:
        """Fetch a single repository record."""

    @abstractmethod
    def fetch_issues(self, owner: str, repo: str, state: str = "all") -> list[Issue]:
        """Fetch issues filtered by state ('open', 'closed' or 'all')."""

    @abstractmethod
    def fetch_commits(
        self, owner: str, repo: str, since: str | None = None
    ) -> list[Commit]:
        """Fetch commits, optionally only those after ``since``."""
