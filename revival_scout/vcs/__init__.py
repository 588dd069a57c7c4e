"""
Repository data providers for Revival Scout.
"""

from revival_scout.vcs.base import BaseVCSProvider
from revival_scout.vcs.github import GitHubProvider

__all__ = ["BaseVCSProvider", "GitHubProvider", "get_vcs_provider"]


def get_vcs_provider(platform: str = "github", **kwargs) -> GitHubProvider:
    """
    Build the provider for ``platform``.

    GitHub is the only hosting platform Revival Scout searches and analyzes.
    ``kwargs`` (``token``, ``base_url``) are passed to the provider.

    Raises:
        ValueError: If platform is not GitHub
    """
    if platform.lower() != "github":
        raise ValueError(f"Unsupported VCS platform: {platform}. Supported: github")
    return GitHubProvider(**kwargs)
