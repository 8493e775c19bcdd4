"""Rate limit bookkeeping and backoff policy for GitHub requests."""

from collections.abc import Mapping
from dataclasses import dataclass
from datetime import datetime, timezone

from common.constants import LOW_QUOTA_THRESHOLD, PAGE_RETRY_DELAY, RETRY_BASE_DELAY

THROTTLE_STATUSES = (403, 429)


@dataclass
class RateState:
    """Last observed GitHub quota.

    Updated after every response and only read for display, so concurrent
    updates simply overwrite each other.

    Example:
        >>> state = RateState()
        >>> state.update_from_headers({"x-ratelimit-remaining": "42", "x-ratelimit-limit": "60"})
        >>> state.is_low()
        True
    """

    remaining: int | None = None
    limit: int = 0
    reset_at: datetime | None = None

    def update_from_headers(self, headers: Mapping[str, str]) -> None:
        """Read x-ratelimit-{remaining,limit,reset}, keeping old values for missing ones.

        Args:
            headers: Response headers (requests uses a case-insensitive mapping)
        """
        remaining = _int_header(headers, "x-ratelimit-remaining")
        limit = _int_header(headers, "x-ratelimit-limit")
        reset = _int_header(headers, "x-ratelimit-reset")

        if remaining is not None:
            self.remaining = remaining
        if limit is not None:
            self.limit = limit
        if reset is not None:
            self.reset_at = datetime.fromtimestamp(reset, tz=timezone.utc)

    def is_low(self, threshold: int = LOW_QUOTA_THRESHOLD) -> bool:
        """Check if a limit was observed and fewer than threshold requests remain."""
        return self.limit > 0 and self.remaining is not None and self.remaining < threshold


def _int_header(headers: Mapping[str, str], name: str) -> int | None:
    value = headers.get(name)
    if value is None:
        return None
    try:
        return int(value)
    except ValueError:
        return None


def retry_after(headers: Mapping[str, str]) -> float | None:
    """Seconds requested by a Retry-After header, if present and numeric."""
    value = headers.get("retry-after")
    if value is None:
        return None
    try:
        return max(0.0, float(value))
    except ValueError:
        return None


def backoff_delay(attempt: int, headers: Mapping[str, str]) -> float:
    """Wait before retrying a throttled single-resource request.

    Honors Retry-After, otherwise exponential: 2s, 4s, 8s... for attempt 0, 1, 2...
    """
    hinted = retry_after(headers)
    if hinted is not None:
        return hinted
    return float(RETRY_BASE_DELAY * 2**attempt)


def page_delay(headers: Mapping[str, str]) -> float:
    """Wait before retrying a throttled page: Retry-After, else a fixed 60s."""
    hinted = retry_after(headers)
    if hinted is not None:
        return hinted
    return float(PAGE_RETRY_DELAY)
