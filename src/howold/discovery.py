"""Find project directories in a repository tree."""

import posixpath
from collections.abc import Iterable
from typing import Any

from common.constants import DEFAULT_MARKER, ROOT_DIRECTORY
from common.logger import get_logger

from .clients.base import RepositorySource
from .models import RepoReference

logger = get_logger(__name__)


def find_project_directories(
    entries: Iterable[dict[str, Any]],
    path_filter: str | None = None,
    marker: str = DEFAULT_MARKER,
) -> list[str]:
    """Extract directories that contain a marker file.

    Args:
        entries: Tree entries, each with a 'path' key
        path_filter: Only keep marker files whose path starts with this prefix
        marker: Filename that marks a project (e.g. 'package.json')

    Returns:
        Sorted, unique directories; a marker at the tree root yields '.'

    Example:
        >>> entries = [{"path": "a/package.json"}, {"path": "b/c/package.json"}, {"path": "package.json"}]
        >>> find_project_directories(entries)
        ['.', 'a', 'b/c']
    """
    directories: set[str] = set()

    for entry in entries:
        path = entry.get("path", "")
        if posixpath.basename(path) != marker:
            continue
        if path_filter and not path.startswith(path_filter):
            continue
        directories.add(posixpath.dirname(path) or ROOT_DIRECTORY)

    return sorted(directories)


def marker_path(directory: str, marker: str = DEFAULT_MARKER) -> str:
    """Path of the marker file inside a discovered directory."""
    if directory == ROOT_DIRECTORY:
        return marker
    return f"{directory}/{marker}"


def discover_projects(
    source: RepositorySource,
    reference: RepoReference,
    branch: str,
    marker: str = DEFAULT_MARKER,
) -> list[str]:
    """List project directories of a repository at branch, under reference.path.

    Raises:
        GitHubError: If the tree cannot be fetched
    """
    entries = source.get_tree(reference.owner, reference.repo, branch)
    directories = find_project_directories(entries, reference.path, marker)
    logger.debug(f"{len(directories)} of {len(entries)} tree entries are {marker} directories")
    return directories
