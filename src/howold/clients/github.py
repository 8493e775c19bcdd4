"""GitHub REST API client with rate limit handling and pagination."""

import threading
from typing import Any

import requests

from common.constants import API_VERSION, MAX_ATTEMPTS, PER_PAGE, REQUEST_TIMEOUT, USER_AGENT
from common.env import env
from common.logger import get_logger

from ..models import InvalidConfiguration, RepositoryMetadata
from .base import (
    ApiError,
    PaginationExhausted,
    RateLimitExceeded,
    RepositorySource,
    RequestCancelled,
    TransportError,
)
from .rate_limit import THROTTLE_STATUSES, RateState, backoff_delay, page_delay

logger = get_logger(__name__)


class GitHubClient(RepositorySource):
    """Client for the GitHub REST API.

    Every response updates ``rate_state``. Throttled (403/429) single-resource
    requests are retried with exponential backoff up to ``max_attempts``;
    throttled pages are retried with a fixed wait until ``max_pagination_wait``
    seconds have been spent on one pagination.

    API Documentation: https://docs.github.com/en/rest
    """

    def __init__(
        self,
        token: str | None = None,
        base_url: str | None = None,
        rate_state: RateState | None = None,
        max_attempts: int = MAX_ATTEMPTS,
        max_pagination_wait: float | None = None,
        timeout: float = REQUEST_TIMEOUT,
    ):
        """Initialize GitHub client.

        Args:
            token: Bearer token (None for anonymous access, 60 requests/hour)
            base_url: API base URL (default: GITHUB_API_URL or https://api.github.com)
            rate_state: Quota tracker to update (default: a fresh RateState)
            max_attempts: Attempts per single-resource request (default: 3)
            max_pagination_wait: Total throttling wait per pagination in seconds
                (default: HOWOLD_MAX_PAGINATION_WAIT or 900)
            timeout: Per-request timeout in seconds (default: 30)

        Raises:
            InvalidConfiguration: If HOWOLD_MAX_PAGINATION_WAIT is not a number
        """
        self.base_url = (base_url or env.github_api_url()).rstrip("/")
        self.rate_state = rate_state or RateState()
        self.max_attempts = max_attempts
        if max_pagination_wait is None:
            try:
                max_pagination_wait = env.max_pagination_wait()
            except ValueError as e:
                raise InvalidConfiguration(str(e)) from None
        self.max_pagination_wait = max_pagination_wait
        self.timeout = timeout
        self.has_token = bool(token)
        self._stop = threading.Event()

        self.session = requests.Session()
        self.session.headers.update(
            {
                "Accept": "application/vnd.github+json",
                "User-Agent": USER_AGENT,
                "X-GitHub-Api-Version": API_VERSION,
            }
        )
        if token:
            self.session.headers["Authorization"] = f"Bearer {token}"

    def _url(self, resource_path: str) -> str:
        return f"{self.base_url}/{resource_path.lstrip('/')}"

    def _get(self, url: str, params: dict[str, Any] | None = None) -> requests.Response:
        """Send one GET and record the quota headers.

        Raises:
            RequestCancelled: If the client was cancelled
            TransportError: If no response was received
        """
        if self._stop.is_set():
            raise RequestCancelled(f"Cancelled before GET {url}")

        logger.debug(f"GET {url} {params or ''}")
        try:
            response = self.session.get(url, params=params, timeout=self.timeout)
        except requests.exceptions.Timeout as e:
            raise TransportError(f"GitHub API timeout after {self.timeout}s: {url}") from e
        except requests.exceptions.RequestException as e:
            raise TransportError(f"GitHub API request failed: {e}") from e

        self.rate_state.update_from_headers(response.headers)
        return response

    def _wait(self, seconds: float) -> None:
        """Sleep for seconds, or until cancel() is called.

        Raises:
            RequestCancelled: If the client was cancelled during the wait
        """
        logger.warning(f"[yellow]⏳[/yellow] Rate limited, waiting {seconds:g}s...")
        if self._stop.wait(seconds):
            raise RequestCancelled("Cancelled while waiting on rate limits")

    def cancel(self) -> None:
        """Interrupt every pending and future throttling wait."""
        self._stop.set()

    def fetch_one(self, resource_path: str, params: dict[str, Any] | None = None) -> Any:
        """GET a single resource.

        Args:
            resource_path: Path below the API root, e.g. 'repos/vercel/next.js'
            params: Optional query parameters

        Returns:
            Decoded JSON body

        Raises:
            RateLimitExceeded: If every attempt was throttled
            ApiError: On any other non-2xx response
            TransportError: If a request produced no response
        """
        url = self._url(resource_path)

        for attempt in range(self.max_attempts):
            response = self._get(url, params)

            if response.ok:
                return response.json()

            if response.status_code not in THROTTLE_STATUSES:
                raise ApiError(response.status_code, response.reason or "")

            if attempt < self.max_attempts - 1:
                self._wait(backoff_delay(attempt, response.headers))

        raise RateLimitExceeded(
            f"GitHub API rate limit exceeded after {self.max_attempts} attempts: {resource_path}"
        )

    def fetch_all_pages(
        self, resource_path: str, params: dict[str, Any] | None = None
    ) -> list[Any]:
        """GET every page of a list resource, following Link rel="next".

        Args:
            resource_path: Path below the API root
            params: Optional query parameters for the first page

        Returns:
            Items of all pages, in page order

        Raises:
            PaginationExhausted: If throttling waits exceed max_pagination_wait
            ApiError: On any non-2xx, non-throttling response
            TransportError: If a request produced no response
        """
        url: str | None = self._url(resource_path)
        page_params: dict[str, Any] | None = {**(params or {}), "per_page": PER_PAGE}
        items: list[Any] = []
        waited = 0.0

        while url:
            response = self._get(url, page_params)

            if response.status_code in THROTTLE_STATUSES:
                wait = page_delay(response.headers)
                if waited + wait > self.max_pagination_wait:
                    raise PaginationExhausted(
                        f"Gave up paginating {resource_path} after waiting {waited:g}s on rate limits"
                    )
                self._wait(wait)
                waited += wait
                continue

            if not response.ok:
                raise ApiError(response.status_code, response.reason or "")

            items.extend(response.json())

            # The next link already carries every query parameter
            url = response.links.get("next", {}).get("url")
            page_params = None

        return items

    def get_repository(self, owner: str, repo: str) -> RepositoryMetadata:
        data = self.fetch_one(f"repos/{owner}/{repo}")
        return RepositoryMetadata.from_api(data)

    def get_tree(self, owner: str, repo: str, ref: str) -> list[dict[str, Any]]:
        data = self.fetch_one(f"repos/{owner}/{repo}/git/trees/{ref}", params={"recursive": 1})
        if data.get("truncated"):
            logger.warning("Tree listing was truncated by GitHub; some projects may be missing")
        return data.get("tree", [])

    def list_commits(
        self, owner: str, repo: str, path: str, ref: str | None = None
    ) -> list[dict[str, Any]]:
        params: dict[str, Any] = {"path": path}
        if ref:
            params["sha"] = ref
        return self.fetch_all_pages(f"repos/{owner}/{repo}/commits", params=params)

    def close(self) -> None:
        """Close the HTTP session."""
        self.session.close()

    def __enter__(self):
        """Context manager entry."""
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Context manager exit."""
        self.close()
        return False
