"""Data models for project discovery and creation dates."""

from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from typing import Any


def parse_timestamp(value: str) -> datetime:
    """Parse a GitHub ISO-8601 timestamp into an aware UTC datetime."""
    parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(timezone.utc)


@dataclass(frozen=True)
class RepoReference:
    """A repository, optionally narrowed to a branch and a subtree."""

    owner: str
    repo: str
    path: str | None = None
    branch: str | None = None

    @property
    def full_name(self) -> str:
        return f"{self.owner}/{self.repo}"


@dataclass(frozen=True)
class RepositoryMetadata:
    """Repository facts fetched once per run."""

    default_branch: str
    created_at: datetime

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> "RepositoryMetadata":
        """Build from a GET /repos/{owner}/{repo} response."""
        return cls(
            default_branch=data["default_branch"],
            created_at=parse_timestamp(data["created_at"]),
        )


@dataclass(frozen=True)
class ProjectRecord:
    """A project directory and the commit that created it."""

    path: str
    created_at: datetime
    sha: str

    @property
    def year(self) -> int:
        return self.created_at.year

    @property
    def short_sha(self) -> str:
        return self.sha[:7]


class SkipReason(Enum):
    """Why a directory produced no ProjectRecord."""

    EMPTY_HISTORY = "empty_history"
    API_ERROR = "api_error"
    RATE_LIMITED = "rate_limited"
    TRANSPORT_ERROR = "transport_error"


@dataclass(frozen=True)
class Resolution:
    """Outcome of resolving one directory: a record, or a reason it was skipped."""

    directory: str
    record: ProjectRecord | None = None
    skip_reason: SkipReason | None = None

    @property
    def ok(self) -> bool:
        return self.record is not None


@dataclass(frozen=True)
class YearFilter:
    """Inclusive range of creation years."""

    start: int
    end: int

    def contains(self, year: int) -> bool:
        return self.start <= year <= self.end

    @property
    def label(self) -> str:
        if self.start == self.end:
            return str(self.start)
        return f"{self.start}-{self.end}"

    @classmethod
    def parse(cls, value: str) -> "YearFilter":
        """Parse '2025' or '2020-2025'.

        Raises:
            InvalidOption: If the value is not a year or a year range, or the
                range is reversed
        """
        parts = value.strip().split("-")
        if len(parts) not in (1, 2) or not all(p.strip().isdecimal() for p in parts):
            raise InvalidOption(f"Invalid year filter '{value}' (expected 2025 or 2020-2025)")

        start = int(parts[0])
        end = int(parts[-1])
        if start > end:
            raise InvalidOption(f"Invalid year filter '{value}': {start} is after {end}")
        return cls(start=start, end=end)


class HowoldError(Exception):
    """Base exception for howold errors."""

    pass


class InvalidOption(HowoldError):
    """A command-line option has an unusable value."""

    pass


class InvalidConfiguration(HowoldError):
    """An environment setting has an unusable value."""

    pass
