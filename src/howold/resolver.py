"""Resolve the creation commit of each project directory."""

from collections.abc import Callable, Sequence
from concurrent.futures import ThreadPoolExecutor

from common.constants import BATCH_SIZE, DEFAULT_MARKER
from common.logger import get_logger

from .clients.base import (
    GitHubError,
    PaginationExhausted,
    RateLimitExceeded,
    RepositorySource,
    TransportError,
)
from .discovery import marker_path
from .models import ProjectRecord, RepoReference, Resolution, SkipReason, parse_timestamp

logger = get_logger(__name__)

ProgressCallback = Callable[[int, int], None]


def _skip_reason(exc: GitHubError) -> SkipReason:
    if isinstance(exc, (RateLimitExceeded, PaginationExhausted)):
        return SkipReason.RATE_LIMITED
    if isinstance(exc, TransportError):
        return SkipReason.TRANSPORT_ERROR
    return SkipReason.API_ERROR


def resolve_directory(
    source: RepositorySource,
    reference: RepoReference,
    directory: str,
    branch: str | None = None,
    marker: str = DEFAULT_MARKER,
) -> Resolution:
    """Find the commit that added a directory's marker file.

    Commits come back newest first, so the last one of the full history is
    the creation commit. Failures never raise; they become a skipped Resolution.
    """
    try:
        commits = source.list_commits(
            reference.owner, reference.repo, marker_path(directory, marker), ref=branch
        )
    except GitHubError as e:
        logger.debug(f"Skipping {directory}: {e}")
        return Resolution(directory=directory, skip_reason=_skip_reason(e))
    except ValueError as e:
        # Body was not JSON
        logger.debug(f"Skipping {directory}: unreadable response {e}")
        return Resolution(directory=directory, skip_reason=SkipReason.API_ERROR)

    if not commits:
        logger.debug(f"Skipping {directory}: no commits touch {marker}")
        return Resolution(directory=directory, skip_reason=SkipReason.EMPTY_HISTORY)

    first = commits[-1]
    try:
        record = ProjectRecord(
            path=directory,
            created_at=parse_timestamp(first["commit"]["author"]["date"]),
            sha=first["sha"],
        )
    except (KeyError, TypeError, ValueError) as e:
        logger.debug(f"Skipping {directory}: malformed commit {e!r}")
        return Resolution(directory=directory, skip_reason=SkipReason.API_ERROR)

    return Resolution(directory=directory, record=record)


def resolve_projects(
    source: RepositorySource,
    reference: RepoReference,
    directories: Sequence[str],
    branch: str | None = None,
    marker: str = DEFAULT_MARKER,
    batch_size: int = BATCH_SIZE,
    on_progress: ProgressCallback | None = None,
) -> list[Resolution]:
    """Resolve every directory, batch_size lookups at a time.

    Each batch runs concurrently and completes before the next one starts.
    on_progress(done, total) is called after every batch.
    On KeyboardInterrupt the source is cancelled and queued lookups are
    dropped, so the interrupt propagates without waiting on throttled workers.

    Returns:
        One Resolution per directory, in the order given
    """
    resolutions: list[Resolution] = []
    total = len(directories)

    if not directories:
        return resolutions

    pool = ThreadPoolExecutor(max_workers=min(batch_size, total))
    interrupted = False
    try:
        for start in range(0, total, batch_size):
            batch = directories[start : start + batch_size]
            futures = [
                pool.submit(resolve_directory, source, reference, directory, branch, marker)
                for directory in batch
            ]
            resolutions.extend(future.result() for future in futures)

            if on_progress:
                on_progress(len(resolutions), total)
    except KeyboardInterrupt:
        # Workers may sit in rate-limit waits; release them instead of joining
        interrupted = True
        source.cancel()
        raise
    finally:
        pool.shutdown(wait=not interrupted, cancel_futures=interrupted)

    skipped = sum(1 for r in resolutions if not r.ok)
    logger.debug(f"Resolved {total - skipped} of {total} directories ({skipped} skipped)")
    return resolutions
