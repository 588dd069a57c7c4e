"""
Tests for the configuration module.
"""

import tempfile
from pathlib import Path

import pytest

from revival_scout.config import (
    DEFAULT_GITHUB_API_URL,
    get_default_filters,
    get_github_api_url,
    get_max_results,
    get_output_format,
    get_request_timeout,
    get_tool_config,
    get_verify_ssl,
    set_verify_ssl,
)
from revival_scout.models import SearchFilters


@pytest.fixture
def temp_project_root(monkeypatch):
    """Create a temporary project root for testing."""
    monkeypatch.delenv("REVIVAL_SCOUT_GITHUB_API", raising=False)
    monkeypatch.delenv("REVIVAL_SCOUT_TIMEOUT", raising=False)
    with tempfile.TemporaryDirectory() as tmpdir:
        tmpdir_path = Path(tmpdir)

        # Patch PROJECT_ROOT
        import revival_scout.config

        original_root = revival_scout.config.PROJECT_ROOT
        revival_scout.config.PROJECT_ROOT = tmpdir_path

        yield tmpdir_path

        # Restore
        revival_scout.config.PROJECT_ROOT = original_root


def test_defaults_without_config(temp_project_root):
    assert get_tool_config() == {}
    assert get_github_api_url() == DEFAULT_GITHUB_API_URL
    assert get_request_timeout() == 30.0
    assert get_max_results() == 10
    assert get_output_format() == "table"
    assert get_default_filters() == SearchFilters()


def test_settings_from_pyproject(temp_project_root):
    """Test loading settings from pyproject.toml."""
    (temp_project_root / "pyproject.toml").write_text(
        """
[tool.revival-scout]
max_results = 25
timeout = 5
output_format = "json"
github_api_url = "https://ghe.example.com/api/v3/"
"""
    )

    assert get_max_results() == 25
    assert get_request_timeout() == 5.0
    assert get_output_format() == "json"
    assert get_github_api_url() == "https://ghe.example.com/api/v3"


def test_local_config_takes_priority(temp_project_root):
    """Test that .revival-scout.toml takes priority over pyproject.toml."""
    (temp_project_root / "pyproject.toml").write_text(
        """
[tool.revival-scout]
max_results = 25
"""
    )
    (temp_project_root / ".revival-scout.toml").write_text(
        """
[tool.revival-scout]
max_results = 3
"""
    )

    assert get_max_results() == 3


def test_environment_overrides_config(temp_project_root, monkeypatch):
    (temp_project_root / "pyproject.toml").write_text(
        """
[tool.revival-scout]
timeout = 5
github_api_url = "https://ghe.example.com/api/v3"
"""
    )
    monkeypatch.setenv("REVIVAL_SCOUT_TIMEOUT", "12.5")
    monkeypatch.setenv("REVIVAL_SCOUT_GITHUB_API", "http://localhost:8080/")

    assert get_request_timeout() == 12.5
    assert get_github_api_url() == "http://localhost:8080"


def test_invalid_timeout_env_is_ignored(temp_project_root, monkeypatch):
    monkeypatch.setenv("REVIVAL_SCOUT_TIMEOUT", "soon")
    assert get_request_timeout() == 30.0


def test_unsupported_output_format(temp_project_root):
    (temp_project_root / ".revival-scout.toml").write_text(
        """
[tool.revival-scout]
output_format = "yaml"
"""
    )
    with pytest.raises(ValueError, match="Unsupported output format"):
        get_output_format()


def test_default_filters(temp_project_root):
    (temp_project_root / ".revival-scout.toml").write_text(
        """
[tool.revival-scout.filters]
language = "python"
min-stars = 100
pushed_before = "2023-01-01"
favourite_colour = "green"
"""
    )

    assert get_default_filters() == SearchFilters(
        language="python", min_stars=100, pushed_before="2023-01-01"
    )


def test_unknown_category_in_filters(temp_project_root):
    (temp_project_root / ".revival-scout.toml").write_text(
        """
[tool.revival-scout.filters]
category = "spreadsheet"
"""
    )
    with pytest.raises(ValueError, match="Unknown project category"):
        get_default_filters()


def test_malformed_config_file(temp_project_root):
    (temp_project_root / ".revival-scout.toml").write_text("[tool.revival-scout\n")
    with pytest.raises(ValueError, match="Failed to load config"):
        get_tool_config()


def test_verify_ssl_toggle():
    original = get_verify_ssl()
    try:
        set_verify_ssl(False)
        assert get_verify_ssl() is False
    finally:
        set_verify_ssl(original)


def test_default_filters_sorting(temp_project_root):
    (temp_project_root / ".revival-scout.toml").write_text(
        """
[tool.revival-scout.filters]
sort = "updated"
order = "asc"
"""
    )
    filters = get_default_filters()
    assert (filters.sort, filters.order) == ("updated", "asc")


@pytest.mark.parametrize(
    "line, message",
    [('sort = "created"', "Unknown sort field"), ('order = "up"', "Unknown sort order")],
)
def test_unknown_sorting_in_filters(temp_project_root, line, message):
    (temp_project_root / ".revival-scout.toml").write_text(
        f"""
[tool.revival-scout.filters]
{line}
"""
    )
    with pytest.raises(ValueError, match=message):
        get_default_filters()
