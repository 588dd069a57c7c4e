"""
Configuration management for Revival Scout.

Loads settings from:
1. .revival-scout.toml (local config)
2. pyproject.toml (project-level config, [tool.revival-scout])
3. Environment variables
"""

import os
import tomllib
from pathlib import Path
from typing import Any

from revival_scout.models import (
    PROJECT_CATEGORIES,
    SEARCH_SORT_FIELDS,
    SORT_ORDERS,
    SearchFilters,
)

# project_root is the parent directory of revival_scout/
PROJECT_ROOT = Path(__file__).resolve().parent.parent

CONFIG_SECTION = "revival-scout"
LOCAL_CONFIG_NAME = ".revival-scout.toml"

# Global configuration for SSL verification
# Default: True (verify SSL certificates)
# Can be set to False by CLI --insecure flag
VERIFY_SSL = True

DEFAULT_GITHUB_API_URL = "https://api.github.com"
DEFAULT_REQUEST_TIMEOUT = 30.0
DEFAULT_MAX_RESULTS = 10
DEFAULT_OUTPUT_FORMAT = "table"
OUTPUT_FORMATS = ("table", "json", "markdown")

_FILTER_FIELDS = set(SearchFilters._fields)


def load_config_file(config_path: Path) -> dict:
    """Load a TOML configuration file."""
    if not config_path.exists():
        return {}
    try:
        with open(config_path, "rb") as f:
            return tomllib.load(f)
    except Exception as e:
        raise ValueError(f"Failed to load config from {config_path}: {e}") from e


def get_tool_config() -> dict[str, Any]:
    """
    Return the [tool.revival-scout] table.

    Priority:
    1. .revival-scout.toml (local config, highest priority)
    2. pyproject.toml (project-level config, fallback)
    """
    local_config_path = PROJECT_ROOT / LOCAL_CONFIG_NAME
    if local_config_path.exists():
        config = load_config_file(local_config_path)
        section = config.get("tool", {}).get(CONFIG_SECTION)
        if section:
            return section

    pyproject_path = PROJECT_ROOT / "pyproject.toml"
    if pyproject_path.exists():
        config = load_config_file(pyproject_path)
        return config.get("tool", {}).get(CONFIG_SECTION, {})

    return {}


def set_verify_ssl(verify: bool) -> None:
    """
    Set the SSL verification setting globally.

    Args:
        verify: Whether to verify SSL certificates.
    """
    global VERIFY_SSL
    VERIFY_SSL = verify


def get_verify_ssl() -> bool:
    """Get the current SSL verification setting."""
    return VERIFY_SSL


def get_github_api_url() -> str:
    """
    Get the GitHub REST API base URL.

    Priority:
    1. REVIVAL_SCOUT_GITHUB_API environment variable
    2. `github_api_url` in config
    3. Default: https://api.github.com
    """
    env_url = os.getenv("REVIVAL_SCOUT_GITHUB_API")
    if env_url:
        return env_url.rstrip("/")
    return get_tool_config().get("github_api_url", DEFAULT_GITHUB_API_URL).rstrip("/")


def get_request_timeout() -> float:
    """Get the HTTP request timeout in seconds."""
    env_timeout = os.getenv("REVIVAL_SCOUT_TIMEOUT")
    if env_timeout:
        try:
            return float(env_timeout)
        except ValueError:
            pass
    return float(get_tool_config().get("timeout", DEFAULT_REQUEST_TIMEOUT))


def get_max_results() -> int:
    """Get the default number of repositories analysed per hunt."""
    return int(get_tool_config().get("max_results", DEFAULT_MAX_RESULTS))


def get_output_format() -> str:
    """
    Get the default output format.

    Raises:
        ValueError: If the configured format is not supported.
    """
    output_format = get_tool_config().get("output_format", DEFAULT_OUTPUT_FORMAT)
    if output_format not in OUTPUT_FORMATS:
        supported = ", ".join(OUTPUT_FORMATS)
        raise ValueError(
            f"Unsupported output format: {output_format}. Supported formats: {supported}"
        )
    return output_format


def get_default_filters() -> SearchFilters:
    """
    Build the default search filters from [tool.revival-scout.filters].

    Unknown keys are ignored.

    Raises:
        ValueError: If the configured category, sort field or sort order is not
                    recognised.
    """
    filters_config = get_tool_config().get("filters", {})
    values = {
        key.replace("-", "_"): value
        for key, value in filters_config.items()
        if key.replace("-", "_") in _FILTER_FIELDS
    }
    category = values.get("category")
    if category is not None and category not in PROJECT_CATEGORIES:
        raise ValueError(f"Unknown project category in config: {category}")
    if values.get("sort", "stars") not in SEARCH_SORT_FIELDS:
        raise ValueError(f"Unknown sort field in config: {values['sort']}")
    if values.get("order", "desc") not in SORT_ORDERS:
        raise ValueError(f"Unknown sort order in config: {values['order']}")
    return SearchFilters(**values)
