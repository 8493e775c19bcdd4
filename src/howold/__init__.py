"""Find when each project in a GitHub repository was really created."""

from common.constants import VERSION as __version__

from .models import ProjectRecord, RepoReference, RepositoryMetadata, YearFilter
from .reference import parse_repo_reference

__all__ = [
    "ProjectRecord",
    "RepoReference",
    "RepositoryMetadata",
    "YearFilter",
    "parse_repo_reference",
]
