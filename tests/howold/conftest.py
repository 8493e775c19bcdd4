"""Shared fixtures for howold tests."""

import json
import threading
from datetime import datetime, timezone

import pytest
import requests
from requests.structures import CaseInsensitiveDict

from howold.clients.base import RepositorySource, RequestCancelled
from howold.clients.rate_limit import RateState
from howold.models import RepositoryMetadata

REASONS = {
    200: "OK",
    403: "Forbidden",
    404: "Not Found",
    429: "Too Many Requests",
    500: "Internal Server Error",
}


class FakeSource(RepositorySource):
    """In-memory repository source.

    commits maps a marker path to its commit list (newest first), errors maps
    a marker path to the exception list_commits should raise. Lookups of
    stalled paths block, like a rate-limit wait, until cancel() is called.
    """

    def __init__(
        self, tree=None, commits=None, errors=None, metadata=None, has_token=False, stalled=()
    ):
        self.tree = tree or []
        self.commits = commits or {}
        self.errors = errors or {}
        self.metadata = metadata or RepositoryMetadata(
            default_branch="main",
            created_at=datetime(2020, 1, 1, tzinfo=timezone.utc),
        )
        self.has_token = has_token
        self.rate_state = RateState()
        self.commit_calls = []
        self._lock = threading.Lock()
        self.stalled = set(stalled)
        self.cancelled = threading.Event()

    def get_repository(self, owner, repo):
        if isinstance(self.metadata, Exception):
            raise self.metadata
        return self.metadata

    def get_tree(self, owner, repo, ref):
        return [{"path": path, "type": "blob"} for path in self.tree]

    def list_commits(self, owner, repo, path, ref=None):
        with self._lock:
            self.commit_calls.append((path, ref))
        if path in self.errors:
            raise self.errors[path]
        if path in self.stalled:
            if self.cancelled.wait(30):
                raise RequestCancelled(f"Cancelled while waiting on {path}")
        return self.commits.get(path, [])

    def cancel(self):
        self.cancelled.set()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        return False


def commit(sha, date):
    """A commit as returned by GET /repos/{owner}/{repo}/commits."""
    return {"sha": sha, "commit": {"author": {"name": "dev", "date": date}}}


@pytest.fixture
def make_commit():
    """Factory for commit dictionaries."""
    return commit


@pytest.fixture
def fake_source():
    """Factory for FakeSource instances."""
    return FakeSource


@pytest.fixture
def make_response():
    """Factory for real requests.Response objects with a JSON body."""

    def _make(status=200, body=None, headers=None, url="https://api.github.com/test"):
        response = requests.Response()
        response.status_code = status
        response.reason = REASONS.get(status, "")
        response.url = url
        response.encoding = "utf-8"
        response.headers = CaseInsensitiveDict(headers or {})
        response._content = json.dumps(body if body is not None else {}).encode("utf-8")
        return response

    return _make
