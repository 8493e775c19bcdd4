"""Environment configuration interface for howold.

This module provides a clean interface for accessing environment variables,
centralizing all environment variable access in one place.
"""

import os

from dotenv import load_dotenv

from .constants import DEFAULT_API_URL, DEFAULT_MARKER, MAX_PAGINATION_WAIT

# Load environment variables from .env file if it exists
load_dotenv()


class Environment:
    """Interface for accessing environment configuration."""

    @staticmethod
    def github_token() -> str | None:
        """Get the GitHub API token.

        Returns:
            GITHUB_TOKEN, else GH_TOKEN, else None (anonymous access)
        """
        for name in ("GITHUB_TOKEN", "GH_TOKEN"):
            token = os.getenv(name, "").strip()
            if token:
                return token
        return None

    @staticmethod
    def github_api_url() -> str:
        """Get the GitHub REST API base URL.

        Returns:
            API base URL without trailing slash, defaults to https://api.github.com
        """
        return os.getenv("GITHUB_API_URL", DEFAULT_API_URL).rstrip("/")

    @staticmethod
    def marker_file() -> str:
        """Get the filename that marks a project directory.

        Returns:
            Marker filename, defaults to 'package.json'
        """
        return os.getenv("HOWOLD_MARKER", DEFAULT_MARKER)

    @staticmethod
    def max_pagination_wait() -> float:
        """Get the total time one paginated fetch may spend waiting on rate limits.

        Returns:
            Seconds, defaults to 900

        Raises:
            ValueError: If the variable is set to something other than a number
        """
        value = os.getenv("HOWOLD_MAX_PAGINATION_WAIT", str(MAX_PAGINATION_WAIT))
        try:
            return float(value)
        except ValueError:
            raise ValueError(
                f"HOWOLD_MAX_PAGINATION_WAIT must be a number of seconds, got '{value}'"
            ) from None


# Singleton instance for convenient access
env = Environment()
