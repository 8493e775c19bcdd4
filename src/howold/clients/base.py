"""Abstract base class for repository sources, and the GitHub error types."""

from abc import ABC, abstractmethod
from typing import Any

from ..models import HowoldError, RepositoryMetadata


class RepositorySource(ABC):
    """Read-only access to one hosted repository's tree and history.

    Discovery and resolution depend on this interface only, so they can run
    against any implementation (the GitHub REST client, or an in-memory fake
    in tests).
    """

    @abstractmethod
    def get_repository(self, owner: str, repo: str) -> RepositoryMetadata:
        """Fetch repository metadata.

        Raises:
            ApiError: If the repository cannot be fetched
            RateLimitExceeded: If retries were exhausted while throttled
        """
        pass

    @abstractmethod
    def get_tree(self, owner: str, repo: str, ref: str) -> list[dict[str, Any]]:
        """List every entry of the repository tree at ref, recursively.

        Returns:
            Tree entries, each a dictionary with at least a 'path' key
        """
        pass

    @abstractmethod
    def list_commits(
        self, owner: str, repo: str, path: str, ref: str | None = None
    ) -> list[dict[str, Any]]:
        """List every commit touching path, newest first.

        Returns:
            Raw commit dictionaries across all pages
        """
        pass

    def cancel(self) -> None:
        """Abort pending waits so in-flight lookups return promptly.

        Sources that never wait have nothing to abort.
        """
        pass


class GitHubError(HowoldError):
    """Base exception for GitHub API failures."""

    pass


class ApiError(GitHubError):
    """Non-2xx response that is not a rate limit."""

    def __init__(self, status: int, message: str):
        self.status = status
        self.message = message
        super().__init__(f"GitHub API: {status} {message}".rstrip())


class RateLimitExceeded(GitHubError):
    """Retries exhausted on a throttled single-resource request."""

    pass


class PaginationExhausted(GitHubError):
    """A paginated fetch spent its whole throttling wait budget."""

    pass


class TransportError(GitHubError):
    """The request never produced a response (timeout, connection failure)."""

    pass


class RequestCancelled(GitHubError):
    """The client was cancelled before or while the request was waiting."""

    pass
