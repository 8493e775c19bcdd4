"""Tests for environment configuration interface."""

import pytest

from common.env import Environment, env


class TestEnvironment:
    """Tests for Environment class."""

    def test_github_token_default(self, monkeypatch):
        """Test github_token is None when no token variable is set."""
        monkeypatch.delenv("GITHUB_TOKEN", raising=False)
        monkeypatch.delenv("GH_TOKEN", raising=False)
        assert Environment.github_token() is None

    def test_github_token_from_env(self, monkeypatch):
        """Test github_token reads GITHUB_TOKEN."""
        monkeypatch.setenv("GITHUB_TOKEN", "ghp_primary")
        monkeypatch.setenv("GH_TOKEN", "ghp_secondary")
        assert Environment.github_token() == "ghp_primary"

    def test_github_token_falls_back_to_gh_token(self, monkeypatch):
        """Test github_token falls back to GH_TOKEN."""
        monkeypatch.delenv("GITHUB_TOKEN", raising=False)
        monkeypatch.setenv("GH_TOKEN", "ghp_secondary")
        assert Environment.github_token() == "ghp_secondary"

    def test_github_token_ignores_blank(self, monkeypatch):
        """Test a whitespace-only token counts as unset."""
        monkeypatch.setenv("GITHUB_TOKEN", "   ")
        monkeypatch.delenv("GH_TOKEN", raising=False)
        assert Environment.github_token() is None

    def test_github_api_url_default(self, monkeypatch):
        """Test github_api_url returns default value."""
        monkeypatch.delenv("GITHUB_API_URL", raising=False)
        assert Environment.github_api_url() == "https://api.github.com"

    def test_github_api_url_from_env(self, monkeypatch):
        """Test github_api_url reads from environment and drops trailing slash."""
        monkeypatch.setenv("GITHUB_API_URL", "https://ghe.example.com/api/v3/")
        assert Environment.github_api_url() == "https://ghe.example.com/api/v3"

    def test_marker_file_default(self, monkeypatch):
        """Test marker_file returns default value."""
        monkeypatch.delenv("HOWOLD_MARKER", raising=False)
        assert Environment.marker_file() == "package.json"

    def test_marker_file_from_env(self, monkeypatch):
        """Test marker_file reads from environment."""
        monkeypatch.setenv("HOWOLD_MARKER", "pyproject.toml")
        assert Environment.marker_file() == "pyproject.toml"

    def test_max_pagination_wait_default(self, monkeypatch):
        """Test max_pagination_wait returns default value."""
        monkeypatch.delenv("HOWOLD_MAX_PAGINATION_WAIT", raising=False)
        assert Environment.max_pagination_wait() == 900

    def test_max_pagination_wait_from_env(self, monkeypatch):
        """Test max_pagination_wait reads from environment."""
        monkeypatch.setenv("HOWOLD_MAX_PAGINATION_WAIT", "120")
        assert Environment.max_pagination_wait() == 120.0

    def test_max_pagination_wait_rejects_non_numbers(self, monkeypatch):
        """Test a malformed value names the variable."""
        monkeypatch.setenv("HOWOLD_MAX_PAGINATION_WAIT", "soon")
        with pytest.raises(ValueError, match="HOWOLD_MAX_PAGINATION_WAIT"):
            Environment.max_pagination_wait()


class TestEnvSingleton:
    """Tests for env singleton instance."""

    def test_env_is_environment_instance(self):
        """Test that env is an instance of Environment."""
        assert isinstance(env, Environment)

    def test_env_singleton_methods_work(self, monkeypatch):
        """Test that env singleton methods work."""
        monkeypatch.setenv("HOWOLD_MARKER", "Cargo.toml")
        assert env.marker_file() == "Cargo.toml"
