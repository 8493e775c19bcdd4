"""Parse user-supplied repository references."""

import re

from .models import HowoldError, RepoReference


class InvalidReference(HowoldError):
    """Input does not look like owner/repo or a GitHub URL."""

    pass


# Tried in order, first match wins
TREE_WITH_PATH = re.compile(r"github\.com/([^/]+)/([^/]+)/tree/([^/]+)/(.+)")
TREE_ONLY = re.compile(r"github\.com/([^/]+)/([^/]+)/tree/([^/]+)$")
REPO_URL = re.compile(r"github\.com[/:]+([^/]+)/([^/]+?)(?:\.git)?$")
SHORTHAND = re.compile(r"^([^/]+)/([^/]+)$")


def parse_repo_reference(value: str) -> RepoReference:
    """Turn a repo reference into owner, repo, branch and path.

    Accepts:
        - https://github.com/owner/repo/tree/branch/sub/path
        - https://github.com/owner/repo/tree/branch
        - https://github.com/owner/repo(.git) or git@github.com:owner/repo.git
        - owner/repo

    Raises:
        InvalidReference: If the value matches none of the forms above

    Example:
        >>> parse_repo_reference("vercel/next.js")
        RepoReference(owner='vercel', repo='next.js', path=None, branch=None)
    """
    value = value.strip().rstrip("/")

    m = TREE_WITH_PATH.search(value)
    if m:
        return RepoReference(owner=m[1], repo=m[2], branch=m[3], path=m[4])

    m = TREE_ONLY.search(value)
    if m:
        return RepoReference(owner=m[1], repo=m[2], branch=m[3])

    m = REPO_URL.search(value)
    if m:
        return RepoReference(owner=m[1], repo=m[2])

    m = SHORTHAND.match(value)
    if m:
        return RepoReference(owner=m[1], repo=m[2])

    raise InvalidReference(f"Invalid repo format: '{value}' (expected owner/repo or a GitHub URL)")
